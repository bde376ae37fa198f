"""
Image

Shared picture rows owned by attractions, hotels and restaurants.
"""

from establishments.image.repository import ImageRepository
from establishments.image.service import ImageService

__all__ = ["ImageRepository", "ImageService"]
