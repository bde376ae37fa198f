"""
Filter predicates and pagination shared by list queries and their counts.

Every list-family operation builds ONE Predicate and hands it to both
page_query() and count_query(), so the count is filtered by exactly the
same clauses and parameters as the rows it accompanies.
"""

from dataclasses import dataclass

from establishments.errors import ValidationError


@dataclass(frozen=True)
class Predicate:
    """A conjunction of SQL clauses with their %s parameters, in order."""

    clauses: tuple[str, ...] = ()
    params: tuple = ()

    def where(self, clause: str, *params) -> "Predicate":
        """Return a new predicate with one more AND-ed clause."""
        return Predicate(self.clauses + (clause,), self.params + params)

    def active(self, alias: str = None) -> "Predicate":
        """Only rows that have not been soft deleted."""
        return self.where(f"{_qualify('deleted_at', alias)} IS NULL")

    def contains(self, column: str, value: str, alias: str = None) -> "Predicate":
        """Case-sensitive substring match; an empty value matches every row."""
        return self.where(f"{_qualify(column, alias)} LIKE %s", f"%{value}%")

    def icontains(self, column: str, value: str, alias: str = None) -> "Predicate":
        """Case-insensitive substring match; an empty value matches every row."""
        return self.where(f"{_qualify(column, alias)} ILIKE %s", f"%{value}%")

    @property
    def sql(self) -> str:
        if not self.clauses:
            return ""
        return "WHERE " + " AND ".join(self.clauses)


def _qualify(column: str, alias: str = None) -> str:
    return f"{alias}.{column}" if alias else column


@dataclass(frozen=True)
class Page:
    """
    Offset/limit window. A limit of zero means "no pagination": the
    LIMIT/OFFSET clause is left out and every matching row is returned.
    """

    offset: int = 0
    limit: int = 0

    def __post_init__(self):
        for name in ("offset", "limit"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValidationError(f"{name} must be an integer, got {value!r}")
            if value < 0:
                raise ValidationError(f"{name} must not be negative, got {value}")

    @property
    def sql(self) -> str:
        return "LIMIT %s OFFSET %s" if self.limit else ""

    @property
    def params(self) -> tuple:
        return (self.limit, self.offset) if self.limit else ()


def page_query(
    select: str,
    predicate: Predicate,
    order_by: str = None,
    page: Page = None,
) -> tuple[str, tuple]:
    """
    Assemble a paginated SELECT.

    Args:
        select: "SELECT ... FROM ... [JOIN ...]" without a WHERE clause
        predicate: Filter shared with the matching count_query()
        order_by: ORDER BY expression, or None
        page: Offset/limit window, or None for every row

    Returns:
        (query, params) ready for db.fetch_all()
    """
    page = page or Page()
    parts = [select, predicate.sql]
    if order_by:
        parts.append(f"ORDER BY {order_by}")
    parts.append(page.sql)
    query = " ".join(part for part in parts if part)
    return query, predicate.params + page.params


def count_query(source: str, predicate: Predicate) -> tuple[str, tuple]:
    """
    Assemble the COUNT(*) that matches page_query() for the same predicate.

    Args:
        source: "FROM ... [JOIN ...]" as used by the page query

    Returns:
        (query, params) ready for db.fetch_one(); the count is in "count"
    """
    query = " ".join(part for part in (f"SELECT COUNT(*) AS count {source}", predicate.sql) if part)
    return query, predicate.params
