from typing import Iterable

from establishments import db
from establishments.entity import Category, Location
from establishments.predicate import Predicate

TABLE = "location_table"

# Column order used by every SELECT against location_table
COLUMNS = (
    "location_id",
    "establishment_id",
    "address",
    "latitude",
    "longitude",
    "country",
    "city",
    "state_province",
    "category",
    "created_at",
    "updated_at",
    "deleted_at",
)

_SELECT = f"SELECT {', '.join(COLUMNS)} FROM {TABLE}"


class LocationRepository:
    """
    Repository for the shared location_table.
    Each establishment owns exactly one active row, keyed by establishment_id
    and stamped with the owner's category. The category is always set here,
    never by callers.
    """

    def insert(self, location: Location, category: Category) -> None:
        """Insert a location row owned by an establishment of the given kind."""
        location.category = category
        db.execute(
            f"""
            INSERT INTO {TABLE} (
                location_id, establishment_id, address, latitude, longitude,
                country, city, state_province, category, created_at, updated_at
            )
            VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, COALESCE(%s, now()), COALESCE(%s, now()))
            """,
            (
                location.location_id,
                location.establishment_id,
                location.address,
                location.latitude,
                location.longitude,
                location.country,
                location.city,
                location.state_province,
                category.value,
                location.created_at,
                location.updated_at,
            ),
        )

    def find_for_establishments(
        self, establishment_ids: Iterable[str], category: Category
    ) -> dict[str, dict]:
        """
        Get the active location row of each establishment in one query.

        Returns:
            Dict of establishment_id to raw row; establishments without an
            active location are missing from the result.
        """
        ids = list(establishment_ids)
        if not ids:
            return {}

        rows = db.fetch_all(
            f"""
            {_SELECT}
            WHERE establishment_id = ANY(%s) AND category = %s AND deleted_at IS NULL
            ORDER BY created_at DESC, location_id DESC
            """,
            (ids, category.value),
        )
        # Newest first: a row left behind by an earlier owner of the same id
        # never shadows the current one.
        found = {}
        for row in rows:
            found.setdefault(row["establishment_id"], row)
        return found

    def update(self, location: Location, establishment_id: str, category: Category) -> int:
        """
        Update the mutable fields of an establishment's active location.
        Returns the number of rows affected.
        """
        return db.execute(
            f"""
            UPDATE {TABLE}
            SET address = %s, latitude = %s, longitude = %s,
                country = %s, city = %s, state_province = %s, updated_at = now()
            WHERE establishment_id = %s AND category = %s AND deleted_at IS NULL
            """,
            (
                location.address,
                location.latitude,
                location.longitude,
                location.country,
                location.city,
                location.state_province,
                establishment_id,
                category.value,
            ),
        )

    def retire(self, establishment_id: str, category: Category, hard: bool = False) -> int:
        """
        Soft delete (or physically delete) the locations of an establishment.
        Returns the number of rows affected.
        """
        if hard:
            return db.execute(
                f"DELETE FROM {TABLE} WHERE establishment_id = %s AND category = %s",
                (establishment_id, category.value),
            )
        return db.execute(
            f"""
            UPDATE {TABLE} SET deleted_at = now()
            WHERE establishment_id = %s AND category = %s AND deleted_at IS NULL
            """,
            (establishment_id, category.value),
        )


def filter_by_location(
    category: Category,
    country: str = "",
    city: str = "",
    state_province: str = "",
    alias: str = None,
) -> Predicate:
    """
    Predicate over active location rows of one kind, matching each
    geographic field by case-sensitive substring.
    """
    column = f"{alias}.category" if alias else "category"
    return (
        Predicate()
        .where(f"{column} = %s", category.value)
        .active(alias)
        .contains("country", country, alias)
        .contains("city", city, alias)
        .contains("state_province", state_province, alias)
    )


def current_location_matches(
    owner_column: str,
    category: Category,
    country: str = "",
    city: str = "",
    state_province: str = "",
) -> Predicate:
    """
    Predicate on an establishment row: its current location (the newest
    active row, as loaded by find_for_establishments) contains each of the
    given substrings.

    Written as EXISTS so an establishment is counted once even when older
    active location rows share its id.
    """
    located = (
        filter_by_location(category, country, city, state_province, alias="l")
        .where(f"l.establishment_id = {owner_column}")
        .where(
            f"NOT EXISTS (SELECT 1 FROM {TABLE} n "
            "WHERE n.establishment_id = l.establishment_id AND n.category = l.category "
            "AND n.deleted_at IS NULL "
            "AND (n.created_at, n.location_id) > (l.created_at, l.location_id))"
        )
    )
    return Predicate().where(f"EXISTS (SELECT 1 FROM {TABLE} l {located.sql})", *located.params)
