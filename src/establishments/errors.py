"""
Errors raised by the persistence core.

Callers only need to tell "not found" apart from everything else; the
HTTP layer maps ValidationError to 400 and NotFoundError to 404.
"""

from contextlib import contextmanager

import psycopg

from establishments.logger import get_logger

logger = get_logger("establishments.persistence")


class EstablishmentError(Exception):
    """Base class for all errors raised by this package."""


class ValidationError(EstablishmentError):
    """Malformed input: bad pagination values, missing location, mismatched ids."""


class NotFoundError(EstablishmentError):
    """Zero rows matched where exactly one was expected."""


class PersistenceError(EstablishmentError):
    """The database reported a failure while running a statement."""


class DeadlineExceeded(PersistenceError):
    """The operation ran out of time before a statement could be issued."""


@contextmanager
def executing(description: str):
    """
    Translate driver errors raised inside the block into PersistenceError.

    Usage:
        with executing("creating hotel's location part"):
            db.execute(...)
    """
    try:
        yield
    except psycopg.Error as exc:
        logger.error(f"Failed to execute SQL query for {description}: {exc}")
        raise PersistenceError(f"failed to execute SQL query for {description}: {exc}") from exc


@contextmanager
def scanning(description: str):
    """Translate a row that cannot be mapped onto its type into PersistenceError."""
    try:
        yield
    except (KeyError, TypeError, ValueError, ValidationError) as exc:
        logger.error(f"Failed to scan {description}: {exc}")
        raise PersistenceError(f"failed to scan {description}: {exc}") from exc
