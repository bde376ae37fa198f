from flask import Flask, jsonify

from establishments.entity import Category
from establishments.errors import EstablishmentError, NotFoundError, ValidationError
from establishments.logger import get_logger

logger = get_logger(__name__)


def create_app() -> Flask:
    """Application factory."""
    app = Flask(__name__)

    # Register blueprints
    from establishments.api.establishments import create_blueprint
    from establishments.api.favourites import bp as favourites_bp
    from establishments.api.images import bp as images_bp
    from establishments.api.reviews import bp as reviews_bp

    for category in Category:
        app.register_blueprint(create_blueprint(category), url_prefix=f"/api/{category.value}s")
    app.register_blueprint(images_bp, url_prefix="/api/images")
    app.register_blueprint(reviews_bp, url_prefix="/api")
    app.register_blueprint(favourites_bp, url_prefix="/api")

    @app.errorhandler(ValidationError)
    def bad_request(error):
        return jsonify({"error": str(error)}), 400

    @app.errorhandler(NotFoundError)
    def not_found(error):
        return jsonify({"error": str(error)}), 404

    @app.errorhandler(EstablishmentError)
    def server_error(error):
        logger.error(f"Request failed: {error}")
        return jsonify({"error": str(error)}), 500

    @app.route("/api/health")
    def health():
        return {"status": "ok"}

    return app
