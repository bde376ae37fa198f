from flask import Blueprint, jsonify

from establishments.api.payloads import decode, encode, json_body
from establishments.entity import Image
from establishments.image import ImageService

bp = Blueprint("images", __name__)

image_service = ImageService()


@bp.route("", methods=["POST"])
def create_image():
    """Attach an image to an existing establishment."""
    image = image_service.create_image(decode(Image, json_body()))
    return jsonify(encode(image)), 201
