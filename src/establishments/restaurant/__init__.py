"""
Restaurant

Places to eat, stored as restaurant aggregates with their opening hours.
"""

from establishments.restaurant.repository import RestaurantRepository
from establishments.restaurant.service import RestaurantService

__all__ = ["RestaurantRepository", "RestaurantService"]
