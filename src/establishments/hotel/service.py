from establishments.aggregate import EstablishmentService
from establishments.hotel.repository import HotelRepository


class HotelService(EstablishmentService):
    repository_class = HotelRepository
