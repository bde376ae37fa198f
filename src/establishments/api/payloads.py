"""
Conversion between JSON request/response bodies and the domain dataclasses.
"""

from dataclasses import fields, is_dataclass
from datetime import datetime
from enum import Enum
from typing import Any

from flask import request

from establishments.entity import Image, Location
from establishments.errors import ValidationError

_TIMESTAMPS = {"created_at", "updated_at", "deleted_at"}
_NUMBERS = {"rating", "latitude", "longitude"}


def encode(record) -> Any:
    """Turn a dataclass (or list of them) into JSON-ready values."""
    if isinstance(record, list):
        return [encode(item) for item in record]
    if is_dataclass(record):
        return {f.name: encode(getattr(record, f.name)) for f in fields(record)}
    if isinstance(record, Enum):
        return record.value
    if isinstance(record, datetime):
        return record.isoformat()
    return record


def decode(cls, data: Any, exclude: set = frozenset()):
    """
    Build a flat dataclass from a JSON object.

    Unknown keys and timestamps are ignored; numeric fields must be numbers
    and text fields must be strings.
    """
    if not isinstance(data, dict):
        raise ValidationError(f"{cls.__name__.lower()} must be a JSON object")

    values = {}
    for f in fields(cls):
        if f.name not in data or f.name in _TIMESTAMPS or f.name in exclude:
            continue
        value = data[f.name]
        if f.name in _NUMBERS:
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValidationError(f"{f.name} must be a number, got {value!r}")
            value = float(value)
        elif f.type is str and not isinstance(value, str):
            raise ValidationError(f"{f.name} must be a string, got {value!r}")
        values[f.name] = value
    return cls(**values)


def decode_establishment(cls, data: Any):
    """Build an establishment aggregate, including its location and images."""
    establishment = decode(cls, data, exclude={"location", "images"})

    location = data.get("location")
    if location is not None:
        establishment.location = decode(Location, location, exclude={"category"})

    images = data.get("images") or []
    if not isinstance(images, list):
        raise ValidationError("images must be a JSON array")
    establishment.images = [decode(Image, image, exclude={"category"}) for image in images]
    return establishment


def json_body() -> Any:
    """The request's JSON body, or a ValidationError when it has none."""
    data = request.get_json(silent=True)
    if data is None:
        raise ValidationError("request body must be JSON")
    return data


def int_arg(name: str, default: int = 0) -> int:
    """Read a non-negative integer from the query string."""
    raw = request.args.get(name)
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValidationError(f"{name} must be an integer, got {raw!r}") from None
    if value < 0:
        raise ValidationError(f"{name} must not be negative, got {value}")
    return value
