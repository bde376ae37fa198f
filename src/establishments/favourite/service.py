from establishments import db
from establishments.config import config
from establishments.entity import Favourite, stamp
from establishments.errors import NotFoundError, ValidationError, executing, scanning
from establishments.favourite.repository import FavouriteRepository
from establishments.logger import get_logger

logger = get_logger(__name__)


class FavouriteService:
    def __init__(self, repository: FavouriteRepository = None, timeout: float = None):
        self.repository = repository or FavouriteRepository()
        self.timeout = config.context_timeout if timeout is None else timeout

    def add_to_favourites(self, favourite: Favourite) -> Favourite:
        """Store a favourite and return it as read back from the database."""
        if not favourite.establishment_id or not favourite.user_id:
            raise ValidationError("favourite must name both an establishment and a user")
        stamp(favourite, "favourite_id")

        with db.deadline(self.timeout):
            with executing("adding to favourites"):
                self.repository.insert(
                    favourite.favourite_id,
                    favourite.establishment_id,
                    favourite.user_id,
                    favourite.created_at,
                    favourite.updated_at,
                )
            with executing("getting favourite"):
                row = self.repository.get_by_id(favourite.favourite_id)

        if row is None:
            raise NotFoundError(f"favourite {favourite.favourite_id} not found")
        logger.info(f"User {favourite.user_id} added {favourite.establishment_id} to favourites")
        with scanning("favourite row"):
            return Favourite.from_row(row)

    def remove_from_favourites(self, favourite_id: str) -> None:
        with db.deadline(self.timeout), executing("removing from favourites"):
            affected = self.repository.soft_delete(favourite_id)
        if affected == 0:
            raise NotFoundError(f"no rows affected while removing favourite {favourite_id}")
        logger.info(f"Removed favourite {favourite_id}")

    def list_favourites_by_user(self, user_id: str) -> list[Favourite]:
        logger.debug(f"Listing favourites of user {user_id}")
        with db.deadline(self.timeout), executing("listing favourites"):
            rows = self.repository.list_by_user(user_id)
        with scanning("favourite row"):
            return [Favourite.from_row(row) for row in rows]
