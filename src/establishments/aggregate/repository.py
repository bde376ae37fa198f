"""
Generic store for establishment aggregates.

An aggregate is one row in its kind's table (attraction_table,
hotel_table, restaurant_table) plus one row in location_table and any
number of rows in image_table. EstablishmentRepository decomposes an
aggregate into those rows on write and reassembles it on read; the
concrete kinds only declare their table, columns and category.

Writes issue their statements in a fixed order: location, images,
entity. With atomic writes enabled the whole group runs in a single
transaction and rolls back on any failure; without it every statement
commits on its own and a failure part-way leaves the earlier rows in
place.

Reads issue one entity query, one location query and one image query
no matter how many establishments are returned.
"""

from contextlib import nullcontext
from typing import Optional

from establishments import db
from establishments.config import config
from establishments.entity import Category, Image, Location
from establishments.errors import NotFoundError, ValidationError, executing, scanning
from establishments.image import ImageRepository
from establishments.location import LocationRepository, current_location_matches
from establishments.logger import get_logger
from establishments.predicate import Page, Predicate, count_query, page_query

logger = get_logger(__name__)

TIMESTAMP_COLUMNS = ("created_at", "updated_at", "deleted_at")


class EstablishmentRepository:
    """
    Repository template for one establishment kind.

    Subclasses set:
        category: discriminator written to the shared tables
        table: the kind's own table
        entity: dataclass the rows are scanned into
        id_column: primary key column, assigned by the caller
        name_column: column searched by find_by_name()
        columns: data columns in SELECT order (timestamps are appended)
        mutable_columns: columns rewritten by update()
    """

    category: Category
    table: str
    entity: type
    id_column: str
    name_column: str
    columns: tuple[str, ...]
    mutable_columns: tuple[str, ...]

    def __init__(
        self,
        atomic_writes: bool = None,
        delete_mode: str = None,
        cascade_delete: bool = None,
    ):
        self.atomic_writes = config.atomic_writes if atomic_writes is None else atomic_writes
        self.delete_mode = config.delete_mode if delete_mode is None else delete_mode
        self.cascade_delete = config.cascade_delete if cascade_delete is None else cascade_delete
        if self.delete_mode not in ("soft", "hard"):
            raise ValueError(f"Unknown delete mode: {self.delete_mode}")
        self.locations = LocationRepository()
        self.images = ImageRepository()

    @property
    def kind(self) -> str:
        return self.category.value

    # =========================================================================
    # Write path
    # =========================================================================

    def create(self, establishment):
        """
        Persist a new aggregate: its location, each image, then the entity row.

        The identity must already be assigned. Returns the same object; the
        store does not read it back.
        """
        establishment_id = self._check_aggregate(establishment)

        with self._statement_group():
            with executing(f"creating {self.kind}'s location part"):
                self.locations.insert(establishment.location, self.category)

            for image in establishment.images:
                with executing(f"creating {self.kind}'s image"):
                    self.images.insert(image, self.category)

            data_columns = self.columns
            placeholders = ", ".join(["%s"] * len(data_columns))
            with executing(f"creating {self.kind}"):
                db.execute(
                    f"""
                    INSERT INTO {self.table} ({', '.join(data_columns)}, created_at, updated_at)
                    VALUES ({placeholders}, COALESCE(%s, now()), COALESCE(%s, now()))
                    """,
                    tuple(getattr(establishment, c) for c in data_columns)
                    + (establishment.created_at, establishment.updated_at),
                )

        logger.info(
            f"Created {self.kind} {establishment_id} with {len(establishment.images)} image(s)"
        )
        return establishment

    def update(self, establishment):
        """
        Rewrite the descriptive fields of the entity row and its location.

        Images are left untouched. Raises NotFoundError when either row is
        missing or already deleted. Returns the aggregate as re-read.
        """
        establishment_id = self._id_of(establishment)
        if establishment.location is None:
            raise ValidationError(f"{self.kind} {establishment_id} has no location")

        assignments = ", ".join(f"{c} = %s" for c in self.mutable_columns)
        with self._statement_group():
            with executing(f"updating {self.kind}"):
                affected = db.execute(
                    f"""
                    UPDATE {self.table}
                    SET {assignments}, updated_at = now()
                    WHERE {self.id_column} = %s AND deleted_at IS NULL
                    """,
                    tuple(getattr(establishment, c) for c in self.mutable_columns)
                    + (establishment_id,),
                )
            if affected == 0:
                raise NotFoundError(f"no rows affected while updating {self.kind} {establishment_id}")

            with executing(f"updating location of {self.kind}"):
                affected = self.locations.update(
                    establishment.location, establishment_id, self.category
                )
            if affected == 0:
                raise NotFoundError(
                    f"no rows affected while updating location of {self.kind} {establishment_id}"
                )

        logger.info(f"Updated {self.kind} {establishment_id}")
        return self.get(establishment_id)

    def delete(self, establishment_id: str) -> None:
        """Delete using the configured mode (soft by default)."""
        if self.delete_mode == "hard":
            self.hard_delete(establishment_id)
        else:
            self.soft_delete(establishment_id)

    def soft_delete(self, establishment_id: str) -> None:
        """
        Stamp deleted_at on the entity row.

        Location and image rows are retired too only when cascade_delete is
        enabled. Raises NotFoundError when no active row matched, so a second
        delete of the same id fails.
        """
        self._delete(
            f"""
            UPDATE {self.table} SET deleted_at = now()
            WHERE {self.id_column} = %s AND deleted_at IS NULL
            """,
            establishment_id,
            hard=False,
        )

    def hard_delete(self, establishment_id: str) -> None:
        """
        Physically remove the entity row.

        Location and image rows are removed too only when cascade_delete is
        enabled. Raises NotFoundError when no row matched.
        """
        self._delete(
            f"DELETE FROM {self.table} WHERE {self.id_column} = %s",
            establishment_id,
            hard=True,
        )

    def _delete(self, statement: str, establishment_id: str, hard: bool) -> None:
        with self._statement_group():
            with executing(f"deleting {self.kind}"):
                affected = db.execute(statement, (establishment_id,))
            if affected == 0:
                raise NotFoundError(f"no rows affected while deleting {self.kind} {establishment_id}")

            if self.cascade_delete:
                with executing(f"deleting location of {self.kind}"):
                    self.locations.retire(establishment_id, self.category, hard=hard)
                with executing(f"deleting images of {self.kind}"):
                    self.images.retire(establishment_id, self.category, hard=hard)

        logger.info(f"Deleted {self.kind} {establishment_id} ({'hard' if hard else 'soft'})")

    # =========================================================================
    # Read path
    # =========================================================================

    def get(self, establishment_id: str):
        """Get an active aggregate by ID, or raise NotFoundError."""
        with executing(f"getting {self.kind}"):
            row = db.fetch_one(
                f"{self._select()} FROM {self.table} "
                f"WHERE {self.id_column} = %s AND deleted_at IS NULL",
                (establishment_id,),
            )
        if row is None:
            raise NotFoundError(f"{self.kind} {establishment_id} not found")
        return self._assemble([row])[0]

    def list(self, offset: int = 0, limit: int = 0) -> tuple[list, int]:
        """
        List active aggregates by rating, best first.

        A limit of zero returns every active row. The count is the total
        number of active rows of this kind, whatever the window.
        """
        page = Page(offset, limit)
        predicate = Predicate().active()
        source = f"FROM {self.table}"
        return self._list(source, predicate, self._order_by(), page, alias=None)

    def list_by_location(
        self,
        offset: int = 0,
        limit: int = 0,
        country: str = "",
        city: str = "",
        state_province: str = "",
    ) -> tuple[list, int]:
        """
        List active aggregates whose location contains each of the given
        substrings (case-sensitive; an empty string matches everything).

        The count covers every matching row, not only the returned page.
        """
        for name, value in (("country", country), ("city", city), ("state_province", state_province)):
            if not isinstance(value, str):
                raise ValidationError(f"{name} must be a string, got {value!r}")

        page = Page(offset, limit)
        predicate = current_location_matches(
            f"e.{self.id_column}", self.category, country, city, state_province
        ).active("e")
        source = f"FROM {self.table} e"
        return self._list(source, predicate, self._order_by("e"), page, alias="e")

    def find_by_name(self, name: str) -> tuple[list, int]:
        """
        Find active aggregates whose name contains the given text,
        ignoring case, best rated first.
        """
        if not isinstance(name, str):
            raise ValidationError(f"name must be a string, got {name!r}")

        predicate = Predicate().active().icontains(self.name_column, name)
        source = f"FROM {self.table}"
        return self._list(source, predicate, self._order_by(), Page(), alias=None)

    def _list(
        self,
        source: str,
        predicate: Predicate,
        order_by: str,
        page: Page,
        alias: Optional[str],
    ) -> tuple[list, int]:
        query, params = page_query(f"{self._select(alias)} {source}", predicate, order_by, page)
        with executing(f"listing {self.kind}s"):
            rows = db.fetch_all(query, params)
        establishments = self._assemble(rows)

        query, params = count_query(source, predicate)
        with executing(f"counting {self.kind}s"):
            count = db.fetch_one(query, params)["count"]

        return establishments, count

    def _assemble(self, rows):
        """Attach each row's location and images, fetched in one query each."""
        if not rows:
            return []

        ids = [row[self.id_column] for row in rows]
        with executing(f"getting locations of {self.kind}s"):
            locations = self.locations.find_for_establishments(ids, self.category)
        with executing(f"getting images of {self.kind}s"):
            images = self.images.find_for_establishments(ids, self.category)

        establishments = []
        for row in rows:
            establishment_id = row[self.id_column]
            if establishment_id not in locations:
                raise NotFoundError(f"location for {self.kind} {establishment_id} not found")

            with scanning(f"{self.kind} row"):
                establishment = self.entity.from_row(row)
                establishment.location = Location.from_row(locations[establishment_id])
                establishment.images = [
                    Image.from_row(image) for image in images.get(establishment_id, [])
                ]
            establishments.append(establishment)
        return establishments

    # =========================================================================
    # Helpers
    # =========================================================================

    def _statement_group(self):
        return db.transaction() if self.atomic_writes else nullcontext()

    def _select(self, alias: str = None) -> str:
        prefix = f"{alias}." if alias else ""
        return "SELECT " + ", ".join(prefix + c for c in self.columns + TIMESTAMP_COLUMNS)

    def _order_by(self, alias: str = None) -> str:
        prefix = f"{alias}." if alias else ""
        return f"{prefix}rating DESC, {prefix}{self.id_column}"

    def _id_of(self, establishment) -> str:
        establishment_id = getattr(establishment, self.id_column)
        if not establishment_id:
            raise ValidationError(f"{self.id_column} must be assigned before persistence")
        return establishment_id

    def _check_aggregate(self, establishment) -> str:
        """
        Validate an aggregate before it is written and link its location and
        images to it. Returns the aggregate's ID.
        """
        establishment_id = self._id_of(establishment)
        if establishment.location is None:
            raise ValidationError(f"{self.kind} {establishment_id} has no location")

        for part in [establishment.location, *establishment.images]:
            if not part.establishment_id:
                part.establishment_id = establishment_id
            elif part.establishment_id != establishment_id:
                raise ValidationError(
                    f"{type(part).__name__.lower()} belongs to {part.establishment_id}, "
                    f"not to {self.kind} {establishment_id}"
                )
        return establishment_id
