"""
Location

Shared address/coordinates rows owned by attractions, hotels and restaurants.
"""

from establishments.location.repository import (
    LocationRepository,
    current_location_matches,
    filter_by_location,
)

__all__ = ["LocationRepository", "current_location_matches", "filter_by_location"]
