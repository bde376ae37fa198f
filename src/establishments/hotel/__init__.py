"""
Hotel

Places to stay, stored as hotel aggregates.
"""

from establishments.hotel.repository import HotelRepository
from establishments.hotel.service import HotelService

__all__ = ["HotelRepository", "HotelService"]
