from establishments import db
from establishments.aggregate.repository import EstablishmentRepository
from establishments.config import config
from establishments.entity import stamp
from establishments.logger import get_logger

logger = get_logger(__name__)


class EstablishmentService:
    """
    Thin application layer over one EstablishmentRepository.

    Assigns identities and timestamps before create and bounds every
    call by the configured context timeout. Subclasses name their
    repository_class.
    """

    repository_class: type[EstablishmentRepository]

    def __init__(self, repository: EstablishmentRepository = None, timeout: float = None):
        self.repository = repository or self.repository_class()
        self.timeout = config.context_timeout if timeout is None else timeout

    @property
    def kind(self) -> str:
        return self.repository.kind

    def create(self, establishment):
        """Stamp ids and timestamps on the aggregate and its parts, then store it."""
        stamp(establishment, self.repository.id_column)
        establishment_id = getattr(establishment, self.repository.id_column)
        if establishment.location is not None:
            stamp(establishment.location, "location_id")
        for image in establishment.images:
            stamp(image, "image_id")

        logger.debug(f"Creating {self.kind} {establishment_id}")
        with db.deadline(self.timeout):
            return self.repository.create(establishment)

    def get(self, establishment_id: str):
        logger.debug(f"Getting {self.kind} {establishment_id}")
        with db.deadline(self.timeout):
            return self.repository.get(establishment_id)

    def list(self, offset: int = 0, limit: int = 0) -> tuple[list, int]:
        logger.debug(f"Listing {self.kind}s (offset={offset}, limit={limit})")
        with db.deadline(self.timeout):
            return self.repository.list(offset, limit)

    def update(self, establishment):
        logger.debug(f"Updating {self.kind} {getattr(establishment, self.repository.id_column)}")
        with db.deadline(self.timeout):
            return self.repository.update(establishment)

    def delete(self, establishment_id: str) -> None:
        logger.debug(f"Deleting {self.kind} {establishment_id}")
        with db.deadline(self.timeout):
            self.repository.delete(establishment_id)

    def list_by_location(
        self,
        offset: int = 0,
        limit: int = 0,
        country: str = "",
        city: str = "",
        state_province: str = "",
    ) -> tuple[list, int]:
        logger.debug(
            f"Listing {self.kind}s by location "
            f"(country={country!r}, city={city!r}, state_province={state_province!r})"
        )
        with db.deadline(self.timeout):
            return self.repository.list_by_location(offset, limit, country, city, state_province)

    def find_by_name(self, name: str) -> tuple[list, int]:
        logger.debug(f"Finding {self.kind}s by name {name!r}")
        with db.deadline(self.timeout):
            return self.repository.find_by_name(name)
