"""Seed a small demo data set: one establishment of each kind."""
import sys

from establishments.attraction import AttractionService
from establishments.entity import Attraction, Hotel, Image, Location, Restaurant
from establishments.errors import EstablishmentError, NotFoundError
from establishments.hotel import HotelService
from establishments.restaurant import RestaurantService

TASHKENT = {
    "country": "Uzbekistan",
    "city": "Tashkent",
    "state_province": "Tashkent Region",
}

INITIAL_ESTABLISHMENTS = [
    (
        AttractionService,
        Attraction(
            attraction_id="seed-attraction-chorsu",
            attraction_name="Chorsu Bazaar",
            description="Domed market in the old town",
            rating=4.6,
            contact_number="+998 71 000 0001",
            location=Location(address="Tafakkur ko'chasi", latitude=41.3264, longitude=69.2355, **TASHKENT),
            images=[Image(image_url="https://example.com/chorsu.jpg")],
        ),
    ),
    (
        HotelService,
        Hotel(
            hotel_id="seed-hotel-uzbekistan",
            hotel_name="Hotel Uzbekistan",
            description="Landmark hotel on Amir Temur Square",
            rating=4.2,
            contact_number="+998 71 000 0002",
            location=Location(address="45 Musakhanov Street", latitude=41.3123, longitude=69.2797, **TASHKENT),
            images=[
                Image(image_url="https://example.com/hotel-uzbekistan-1.jpg"),
                Image(image_url="https://example.com/hotel-uzbekistan-2.jpg"),
            ],
        ),
    ),
    (
        RestaurantService,
        Restaurant(
            restaurant_id="seed-restaurant-besh-qozon",
            restaurant_name="Besh Qozon",
            description="Plov centre",
            rating=4.8,
            opening_hours="07:00-15:00",
            contact_number="+998 71 000 0003",
            location=Location(address="1 Iftikhor Street", latitude=41.3411, longitude=69.2869, **TASHKENT),
        ),
    ),
]


def seed(service, establishment) -> str:
    """Create one establishment unless it is already active. Returns what happened."""
    establishment_id = getattr(establishment, service.repository.id_column)
    try:
        service.get(establishment_id)
        return f"Skipping {service.kind} {establishment_id} - already exists"
    except NotFoundError:
        pass

    service.create(establishment)
    return f"Created: {service.kind} {establishment_id}"


def main() -> int:
    failures = 0
    for service_class, establishment in INITIAL_ESTABLISHMENTS:
        service = service_class()
        try:
            print(seed(service, establishment))
        except EstablishmentError as e:
            # A soft-deleted seed still holds its primary key.
            failures += 1
            print(f"Failed: {service.kind} - {e}")

    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
