"""
Aggregate

Generic storage and service layer for establishment aggregates: an
entity row plus its location and images.
"""

from establishments.aggregate.repository import EstablishmentRepository
from establishments.aggregate.service import EstablishmentService

__all__ = ["EstablishmentRepository", "EstablishmentService"]
