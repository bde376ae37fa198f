from establishments.aggregate import EstablishmentRepository
from establishments.entity import Category, Attraction


class AttractionRepository(EstablishmentRepository):
    """Stores attractions in attraction_table with their locations and images."""

    category = Category.ATTRACTION
    table = "attraction_table"
    entity = Attraction
    id_column = "attraction_id"
    name_column = "attraction_name"
    columns = (
        "attraction_id",
        "owner_id",
        "attraction_name",
        "description",
        "rating",
        "contact_number",
        "licence_url",
        "website_url",
    )
    mutable_columns = (
        "attraction_name",
        "description",
        "rating",
        "contact_number",
        "licence_url",
        "website_url",
    )
