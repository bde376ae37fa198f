from establishments import db
from establishments.config import config
from establishments.entity import Category, Image, stamp
from establishments.errors import ValidationError, executing
from establishments.image.repository import ImageRepository
from establishments.logger import get_logger

logger = get_logger(__name__)


class ImageService:
    """
    Attach images to an existing establishment outside of its create call.
    """

    def __init__(self, repository: ImageRepository = None, timeout: float = None):
        self.repository = repository or ImageRepository()
        self.timeout = config.context_timeout if timeout is None else timeout

    def create_image(self, image: Image) -> Image:
        """
        Store one image row for the establishment it names.

        The category must be one of the establishment kinds; the id and
        timestamps are filled in when missing.
        """
        if not image.establishment_id:
            raise ValidationError("image must name the establishment it belongs to")
        if image.category is None:
            raise ValidationError("image must name the category of its establishment")
        category = Category.parse(image.category)
        stamp(image, "image_id")

        logger.debug(f"Creating image {image.image_id} for {category.value} {image.establishment_id}")
        with db.deadline(self.timeout), executing("creating image"):
            self.repository.insert(image, category)

        logger.info(f"Created image {image.image_id} for {category.value} {image.establishment_id}")
        return image
