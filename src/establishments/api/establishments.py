"""
CRUD, location filter and name search routes shared by the three
establishment kinds. Each kind gets its own blueprint from
create_blueprint(); the services live in the module-level `services`
dict and are looked up per request.
"""

from flask import Blueprint, jsonify, request

from establishments.aggregate import EstablishmentService
from establishments.api.payloads import decode_establishment, encode, int_arg, json_body
from establishments.attraction import AttractionService
from establishments.entity import Attraction, Category, Hotel, Restaurant
from establishments.hotel import HotelService
from establishments.restaurant import RestaurantService

services: dict[Category, EstablishmentService] = {
    Category.ATTRACTION: AttractionService(),
    Category.HOTEL: HotelService(),
    Category.RESTAURANT: RestaurantService(),
}

_entities = {
    Category.ATTRACTION: Attraction,
    Category.HOTEL: Hotel,
    Category.RESTAURANT: Restaurant,
}


def create_blueprint(category: Category) -> Blueprint:
    """Build the routes for one kind; mount under /api/<kind>s."""
    bp = Blueprint(f"{category.value}s", __name__)
    entity = _entities[category]

    def service() -> EstablishmentService:
        return services[category]

    def page(establishments: list, count: int):
        return jsonify({"items": encode(establishments), "count": count})

    @bp.route("", methods=["GET"])
    def list_establishments():
        """List active establishments, best rated first."""
        return page(*service().list(int_arg("offset"), int_arg("limit")))

    @bp.route("", methods=["POST"])
    def create_establishment():
        """Create an establishment with its location and images."""
        establishment = decode_establishment(entity, json_body())
        created = service().create(establishment)
        return jsonify(encode(created)), 201

    @bp.route("/by-location", methods=["GET"])
    def list_by_location():
        """List establishments whose location contains the given text."""
        return page(
            *service().list_by_location(
                int_arg("offset"),
                int_arg("limit"),
                country=request.args.get("country", ""),
                city=request.args.get("city", ""),
                state_province=request.args.get("state_province", ""),
            )
        )

    @bp.route("/search", methods=["GET"])
    def find_by_name():
        """Find establishments by name, ignoring case."""
        return page(*service().find_by_name(request.args.get("name", "")))

    @bp.route("/<establishment_id>", methods=["GET"])
    def get_establishment(establishment_id: str):
        return jsonify(encode(service().get(establishment_id)))

    @bp.route("/<establishment_id>", methods=["PUT"])
    def update_establishment(establishment_id: str):
        """Update descriptive fields and location; images are left as they are."""
        establishment = decode_establishment(entity, json_body())
        setattr(establishment, service().repository.id_column, establishment_id)
        return jsonify(encode(service().update(establishment)))

    @bp.route("/<establishment_id>", methods=["DELETE"])
    def delete_establishment(establishment_id: str):
        service().delete(establishment_id)
        return jsonify({"success": True})

    return bp
