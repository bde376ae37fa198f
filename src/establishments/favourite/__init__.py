"""
Favourite

Establishments a user has bookmarked.
"""

from establishments.favourite.repository import FavouriteRepository
from establishments.favourite.service import FavouriteService

__all__ = ["FavouriteRepository", "FavouriteService"]
