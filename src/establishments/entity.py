"""
Domain types for establishments and their satellite records.

An establishment (Attraction, Hotel or Restaurant) owns exactly one
Location and any number of Images. Physically those live in the shared
location_table and image_table, linked by establishment_id and told
apart by the category discriminator.
"""

import uuid
from dataclasses import dataclass, field, fields
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional

from establishments.errors import ValidationError


class Category(str, Enum):
    """Discriminator stored in the shared location and image tables."""

    ATTRACTION = "attraction"
    HOTEL = "hotel"
    RESTAURANT = "restaurant"

    @classmethod
    def parse(cls, value) -> "Category":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise ValidationError(
                f"Unknown category: {value!r}. Valid: {[c.value for c in cls]}"
            ) from None


def _from_row(cls, row: dict[str, Any]):
    """Build a dataclass from a row dict, ignoring columns it does not declare."""
    return cls(**{f.name: row[f.name] for f in fields(cls) if f.name in row})


def new_id() -> str:
    """Generate an identity for a record that has none yet."""
    return str(uuid.uuid4())


def stamp(record, id_field: str) -> None:
    """Fill a missing id and created/updated timestamps in place."""
    if not getattr(record, id_field):
        setattr(record, id_field, new_id())
    now = datetime.now(timezone.utc)
    if record.created_at is None:
        record.created_at = now
    if record.updated_at is None:
        record.updated_at = now


@dataclass
class Location:
    location_id: str = ""
    establishment_id: str = ""
    address: str = ""
    latitude: float = 0.0
    longitude: float = 0.0
    country: str = ""
    city: str = ""
    state_province: str = ""
    category: Optional[Category] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = None

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "Location":
        location = _from_row(cls, row)
        if location.category is not None:
            location.category = Category.parse(location.category)
        return location


@dataclass
class Image:
    image_id: str = ""
    establishment_id: str = ""
    image_url: str = ""
    category: Optional[Category] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = None

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "Image":
        image = _from_row(cls, row)
        if image.category is not None:
            image.category = Category.parse(image.category)
        return image


@dataclass
class Attraction:
    attraction_id: str = ""
    owner_id: str = ""
    attraction_name: str = ""
    description: str = ""
    rating: float = 0.0
    contact_number: str = ""
    licence_url: str = ""
    website_url: str = ""
    location: Optional[Location] = None
    images: list[Image] = field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = None

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "Attraction":
        return _from_row(cls, row)


@dataclass
class Hotel:
    hotel_id: str = ""
    owner_id: str = ""
    hotel_name: str = ""
    description: str = ""
    rating: float = 0.0
    contact_number: str = ""
    licence_url: str = ""
    website_url: str = ""
    location: Optional[Location] = None
    images: list[Image] = field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = None

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "Hotel":
        return _from_row(cls, row)


@dataclass
class Restaurant:
    restaurant_id: str = ""
    owner_id: str = ""
    restaurant_name: str = ""
    description: str = ""
    rating: float = 0.0
    opening_hours: str = ""
    contact_number: str = ""
    licence_url: str = ""
    website_url: str = ""
    location: Optional[Location] = None
    images: list[Image] = field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = None

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "Restaurant":
        return _from_row(cls, row)


@dataclass
class Review:
    review_id: str = ""
    establishment_id: str = ""
    user_id: str = ""
    rating: float = 0.0
    comment: str = ""
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = None

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "Review":
        return _from_row(cls, row)


@dataclass
class Favourite:
    favourite_id: str = ""
    establishment_id: str = ""
    user_id: str = ""
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = None

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "Favourite":
        return _from_row(cls, row)
