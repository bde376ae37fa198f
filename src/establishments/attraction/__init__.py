"""
Attraction

Sights and activities, stored as attraction aggregates.
"""

from establishments.attraction.repository import AttractionRepository
from establishments.attraction.service import AttractionService

__all__ = ["AttractionRepository", "AttractionService"]
