from establishments.aggregate import EstablishmentService
from establishments.restaurant.repository import RestaurantRepository


class RestaurantService(EstablishmentService):
    repository_class = RestaurantRepository
