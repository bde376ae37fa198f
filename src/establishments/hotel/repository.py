from establishments.aggregate import EstablishmentRepository
from establishments.entity import Category, Hotel


class HotelRepository(EstablishmentRepository):
    """Stores hotels in hotel_table with their locations and images."""

    category = Category.HOTEL
    table = "hotel_table"
    entity = Hotel
    id_column = "hotel_id"
    name_column = "hotel_name"
    columns = (
        "hotel_id",
        "owner_id",
        "hotel_name",
        "description",
        "rating",
        "contact_number",
        "licence_url",
        "website_url",
    )
    mutable_columns = (
        "hotel_name",
        "description",
        "rating",
        "contact_number",
        "licence_url",
        "website_url",
    )
