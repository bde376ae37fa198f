from flask import Blueprint, jsonify

from establishments.api.payloads import decode, encode, json_body
from establishments.entity import Favourite
from establishments.favourite import FavouriteService

bp = Blueprint("favourites", __name__)

favourite_service = FavouriteService()


@bp.route("/favourites", methods=["POST"])
def add_to_favourites():
    favourite = favourite_service.add_to_favourites(decode(Favourite, json_body()))
    return jsonify(encode(favourite)), 201


@bp.route("/favourites/<favourite_id>", methods=["DELETE"])
def remove_from_favourites(favourite_id: str):
    favourite_service.remove_from_favourites(favourite_id)
    return jsonify({"success": True})


@bp.route("/users/<user_id>/favourites", methods=["GET"])
def list_favourites(user_id: str):
    """List a user's favourites, newest first."""
    return jsonify(encode(favourite_service.list_favourites_by_user(user_id)))
