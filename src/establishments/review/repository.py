from typing import Optional

from establishments import db
from establishments.predicate import Predicate, count_query, page_query

TABLE = "review_table"

COLUMNS = (
    "review_id",
    "establishment_id",
    "user_id",
    "rating",
    "comment",
    "created_at",
    "updated_at",
    "deleted_at",
)


class ReviewRepository:
    """
    Repository for review_table.
    Reviews point at any establishment kind through establishment_id.
    """

    def insert(
        self,
        review_id: str,
        establishment_id: str,
        user_id: str,
        rating: float,
        comment: str = "",
        created_at=None,
        updated_at=None,
    ) -> None:
        db.execute(
            f"""
            INSERT INTO {TABLE} (review_id, establishment_id, user_id, rating, comment, created_at, updated_at)
            VALUES (%s, %s, %s, %s, %s, COALESCE(%s, now()), COALESCE(%s, now()))
            """,
            (review_id, establishment_id, user_id, rating, comment, created_at, updated_at),
        )

    def get_by_id(self, review_id: str) -> Optional[dict]:
        """Get an active review by ID."""
        return db.fetch_one(
            f"SELECT {', '.join(COLUMNS)} FROM {TABLE} WHERE review_id = %s AND deleted_at IS NULL",
            (review_id,),
        )

    def list_for_establishment(self, establishment_id: str) -> tuple[list[dict], int]:
        """
        List the active reviews of one establishment, newest first.

        Returns:
            (rows, count) where count covers the same establishment
        """
        predicate = Predicate().where("establishment_id = %s", establishment_id).active()
        query, params = page_query(
            f"SELECT {', '.join(COLUMNS)} FROM {TABLE}",
            predicate,
            order_by="created_at DESC, review_id",
        )
        rows = db.fetch_all(query, params)

        query, params = count_query(f"FROM {TABLE}", predicate)
        count = db.fetch_one(query, params)["count"]
        return rows, count

    def soft_delete(self, review_id: str) -> int:
        """Stamp deleted_at on an active review. Returns rows affected."""
        return db.execute(
            f"UPDATE {TABLE} SET deleted_at = now() WHERE review_id = %s AND deleted_at IS NULL",
            (review_id,),
        )
