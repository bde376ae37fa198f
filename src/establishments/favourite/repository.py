from typing import Optional

from establishments import db

TABLE = "favourite_table"

COLUMNS = (
    "favourite_id",
    "establishment_id",
    "user_id",
    "created_at",
    "updated_at",
    "deleted_at",
)

_SELECT = f"SELECT {', '.join(COLUMNS)} FROM {TABLE}"


class FavouriteRepository:
    """Repository for favourite_table."""

    def insert(self, favourite_id: str, establishment_id: str, user_id: str, created_at=None, updated_at=None) -> None:
        db.execute(
            f"""
            INSERT INTO {TABLE} (favourite_id, establishment_id, user_id, created_at, updated_at)
            VALUES (%s, %s, %s, COALESCE(%s, now()), COALESCE(%s, now()))
            """,
            (favourite_id, establishment_id, user_id, created_at, updated_at),
        )

    def get_by_id(self, favourite_id: str) -> Optional[dict]:
        return db.fetch_one(
            f"{_SELECT} WHERE favourite_id = %s AND deleted_at IS NULL",
            (favourite_id,),
        )

    def list_by_user(self, user_id: str) -> list[dict]:
        """List a user's active favourites, newest first."""
        return db.fetch_all(
            f"{_SELECT} WHERE user_id = %s AND deleted_at IS NULL ORDER BY created_at DESC, favourite_id",
            (user_id,),
        )

    def soft_delete(self, favourite_id: str) -> int:
        return db.execute(
            f"UPDATE {TABLE} SET deleted_at = now() WHERE favourite_id = %s AND deleted_at IS NULL",
            (favourite_id,),
        )
