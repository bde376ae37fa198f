from establishments.aggregate import EstablishmentRepository
from establishments.entity import Category, Restaurant


class RestaurantRepository(EstablishmentRepository):
    """Stores restaurants in restaurant_table with their locations and images."""

    category = Category.RESTAURANT
    table = "restaurant_table"
    entity = Restaurant
    id_column = "restaurant_id"
    name_column = "restaurant_name"
    columns = (
        "restaurant_id",
        "owner_id",
        "restaurant_name",
        "description",
        "rating",
        "opening_hours",
        "contact_number",
        "licence_url",
        "website_url",
    )
    mutable_columns = (
        "restaurant_name",
        "description",
        "rating",
        "opening_hours",
        "contact_number",
        "licence_url",
        "website_url",
    )
