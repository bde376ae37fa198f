from flask import Blueprint, jsonify

from establishments.api.payloads import decode, encode, json_body
from establishments.entity import Review
from establishments.review import ReviewService

bp = Blueprint("reviews", __name__)

review_service = ReviewService()


@bp.route("/reviews", methods=["POST"])
def create_review():
    review = review_service.create_review(decode(Review, json_body()))
    return jsonify(encode(review)), 201


@bp.route("/establishments/<establishment_id>/reviews", methods=["GET"])
def list_reviews(establishment_id: str):
    """List the active reviews of an establishment, newest first."""
    reviews, count = review_service.list_reviews(establishment_id)
    return jsonify({"items": encode(reviews), "count": count})


@bp.route("/reviews/<review_id>", methods=["DELETE"])
def delete_review(review_id: str):
    review_service.delete_review(review_id)
    return jsonify({"success": True})
