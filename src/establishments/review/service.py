from establishments import db
from establishments.config import config
from establishments.entity import Review, stamp
from establishments.errors import NotFoundError, ValidationError, executing, scanning
from establishments.logger import get_logger
from establishments.review.repository import ReviewRepository

logger = get_logger(__name__)


class ReviewService:
    def __init__(self, repository: ReviewRepository = None, timeout: float = None):
        self.repository = repository or ReviewRepository()
        self.timeout = config.context_timeout if timeout is None else timeout

    def create_review(self, review: Review) -> Review:
        """Store a review and return it as read back from the database."""
        if not review.establishment_id:
            raise ValidationError("review must name the establishment it is about")
        if not review.user_id:
            raise ValidationError("review must name its author")
        stamp(review, "review_id")

        with db.deadline(self.timeout):
            with executing("creating review"):
                self.repository.insert(
                    review.review_id,
                    review.establishment_id,
                    review.user_id,
                    review.rating,
                    review.comment,
                    review.created_at,
                    review.updated_at,
                )
            with executing("getting review"):
                row = self.repository.get_by_id(review.review_id)

        if row is None:
            raise NotFoundError(f"review {review.review_id} not found")
        logger.info(f"Created review {review.review_id} for {review.establishment_id}")
        with scanning("review row"):
            return Review.from_row(row)

    def list_reviews(self, establishment_id: str) -> tuple[list[Review], int]:
        logger.debug(f"Listing reviews for {establishment_id}")
        with db.deadline(self.timeout), executing("listing reviews"):
            rows, count = self.repository.list_for_establishment(establishment_id)
        with scanning("review row"):
            return [Review.from_row(row) for row in rows], count

    def delete_review(self, review_id: str) -> None:
        with db.deadline(self.timeout), executing("deleting review"):
            affected = self.repository.soft_delete(review_id)
        if affected == 0:
            raise NotFoundError(f"no rows affected while deleting review {review_id}")
        logger.info(f"Deleted review {review_id}")
