from establishments.aggregate import EstablishmentService
from establishments.attraction.repository import AttractionRepository


class AttractionService(EstablishmentService):
    repository_class = AttractionRepository
