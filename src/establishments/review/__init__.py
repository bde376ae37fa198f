"""
Review

User ratings and comments on establishments.
"""

from establishments.review.repository import ReviewRepository
from establishments.review.service import ReviewService

__all__ = ["ReviewRepository", "ReviewService"]
