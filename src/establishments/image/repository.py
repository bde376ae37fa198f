from typing import Iterable

from establishments import db
from establishments.entity import Category, Image

TABLE = "image_table"

# Column order used by every SELECT against image_table
COLUMNS = (
    "image_id",
    "establishment_id",
    "image_url",
    "category",
    "created_at",
    "updated_at",
    "deleted_at",
)

_SELECT = f"SELECT {', '.join(COLUMNS)} FROM {TABLE}"


class ImageRepository:
    """
    Repository for the shared image_table.
    Encapsulates all SQL for establishment images; rows are linked to their
    owner by establishment_id and stamped with the owner's category.
    """

    def insert(self, image: Image, category: Category) -> None:
        """Insert one image row owned by an establishment of the given kind."""
        image.category = category
        db.execute(
            f"""
            INSERT INTO {TABLE} (image_id, establishment_id, image_url, category, created_at, updated_at)
            VALUES (%s, %s, %s, %s, COALESCE(%s, now()), COALESCE(%s, now()))
            """,
            (
                image.image_id,
                image.establishment_id,
                image.image_url,
                category.value,
                image.created_at,
                image.updated_at,
            ),
        )

    def find_for_establishments(
        self, establishment_ids: Iterable[str], category: Category
    ) -> dict[str, list[dict]]:
        """
        Get the active images of several establishments in one query.

        Returns:
            Dict of establishment_id to rows in insertion order; establishments
            without images are missing from the result.
        """
        ids = list(establishment_ids)
        if not ids:
            return {}

        rows = db.fetch_all(
            f"""
            {_SELECT}
            WHERE establishment_id = ANY(%s) AND category = %s AND deleted_at IS NULL
            ORDER BY created_at, image_id
            """,
            (ids, category.value),
        )
        found = {}
        for row in rows:
            found.setdefault(row["establishment_id"], []).append(row)
        return found

    def retire(self, establishment_id: str, category: Category, hard: bool = False) -> int:
        """
        Soft delete (or physically delete) every image of an establishment.
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
