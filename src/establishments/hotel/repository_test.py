"""
Integration tests for HotelRepository.

Run with: ESTABLISHMENT_ENV=test pytest src/establishments/hotel/repository_test.py -v
"""

from establishments.entity import Category, Hotel, Image, Location
from establishments.hotel import HotelRepository


def make_tashkent_hotel(name: str = "Test Hotel Tashkent") -> Hotel:
    return Hotel(
        hotel_id="hotel-tashkent",
        owner_id="owner-1",
        hotel_name=name,
        description="Near Amir Temur Square",
        rating=4.5,
        location=Location(
            location_id="hotel-tashkent-location",
            address="45 Musakhanov Street",
            latitude=41.3123,
            longitude=69.2797,
            country="Uzbekistan",
            city="Tashkent",
            state_province="Tashkent",
        ),
        images=[Image(image_id="hotel-tashkent-image", image_url="https://example.com/hotel.jpg")],
    )


class TestTashkentHotel:
    """A hotel in Tashkent is found by location substrings and by name"""

    def test_listed_by_partial_country_and_city(self, hotel_repo: HotelRepository):
        hotel_repo.create(make_tashkent_hotel())

        hotels, count = hotel_repo.list_by_location(0, 10, "Uzbek", "Tash", "")

        assert [h.hotel_id for h in hotels] == ["hotel-tashkent"]
        assert count == 1
        assert hotels[0].location.state_province == "Tashkent"
        assert [i.image_url for i in hotels[0].images] == ["https://example.com/hotel.jpg"]

    def test_found_by_name_ignoring_case(self, hotel_repo: HotelRepository):
        hotel_repo.create(make_tashkent_hotel())

        hotels, count = hotel_repo.find_by_name("test")

        assert [h.hotel_id for h in hotels] == ["hotel-tashkent"]
        assert count == 1

    def test_not_found_by_other_name(self, hotel_repo: HotelRepository):
        hotel_repo.create(make_tashkent_hotel(name="Hotel Uzbekistan"))

        hotels, count = hotel_repo.find_by_name("test")

        assert hotels == []
        assert count == 0


class TestSampleHotel:
    def test_sample_hotel_round_trip(self, hotel_repo: HotelRepository, sample_hotel):
        hotel = hotel_repo.get(sample_hotel.hotel_id)

        assert hotel.hotel_name == "Hotel Uzbekistan"
        assert hotel.location.category is Category.HOTEL
        assert len(hotel.images) == 2
