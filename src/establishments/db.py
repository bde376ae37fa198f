"""
Database connection and query utilities.

Provides a narrow interface for executing statements with psycopg,
returning rows as dictionaries. Repositories never touch connections
directly; they go through execute(), fetch_one() and fetch_all().

Statement groups that must succeed or fail together are wrapped in
transaction(): every call made inside the block reuses the same
connection and is committed once at the end, or rolled back as a
whole if anything raises.

A caller-supplied deadline (see deadline()) is turned into a
server-side statement_timeout on every connection acquired while it
is active.

For testing, use set_connection_override() to inject a connection
that will be used instead of creating new ones. This enables
transaction rollback between tests.
"""

import time
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any

import psycopg
from psycopg.rows import dict_row

from establishments.config import config
from establishments.errors import DeadlineExceeded

# =============================================================================
# Connection Override (for testing)
# =============================================================================

_connection_override: psycopg.Connection | None = None


def set_connection_override(conn: psycopg.Connection) -> None:
    """
    Set a connection to use instead of creating new ones.

    Used by test fixtures to ensure all database operations run
    within a single transaction that can be rolled back.

    Args:
        conn: The connection to use for all subsequent operations
    """
    global _connection_override
    _connection_override = conn


def clear_connection_override() -> None:
    """Clear the connection override, restoring normal behavior."""
    global _connection_override
    _connection_override = None


# =============================================================================
# Deadlines
# =============================================================================

_deadline: ContextVar[float | None] = ContextVar("deadline", default=None)


@contextmanager
def deadline(seconds: float | None):
    """
    Bound everything issued inside the block by a time budget.

    Nested deadlines never extend an outer one. A falsy value leaves
    the current deadline untouched.

    Usage:
        with deadline(7):
            repo.get("...")
    """
    if not seconds:
        yield
        return

    expires_at = time.monotonic() + seconds
    current = _deadline.get()
    if current is not None:
        expires_at = min(expires_at, current)

    token = _deadline.set(expires_at)
    try:
        yield
    finally:
        _deadline.reset(token)


def remaining_time() -> float | None:
    """Seconds left before the active deadline, or None without one."""
    expires_at = _deadline.get()
    if expires_at is None:
        return None
    return expires_at - time.monotonic()


def _apply_deadline(conn: psycopg.Connection) -> None:
    remaining = remaining_time()
    if remaining is None:
        return
    if remaining <= 0:
        raise DeadlineExceeded("deadline exceeded before the statement was issued")

    timeout_ms = max(1, int(remaining * 1000))
    conn.execute("SELECT set_config('statement_timeout', %s, true)", (str(timeout_ms),))


# =============================================================================
# Connection Management
# =============================================================================

_active_connection: ContextVar[psycopg.Connection | None] = ContextVar(
    "active_connection", default=None
)


@contextmanager
def get_connection():
    """
    Context manager for database connections.

    In normal operation:
        - Opens a new connection
        - Commits on successful exit
        - Rolls back on exception
        - Closes connection when done

    Inside transaction(), or with override set (testing):
        - Returns the shared connection
        - Does NOT commit, rollback, or close
        - The owner of that connection manages the transaction

    Usage:
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute("SELECT ...")
    """
    shared = _active_connection.get()
    if shared is None:
        shared = _connection_override
    if shared is not None:
        _apply_deadline(shared)
        yield shared
        return

    conn = psycopg.connect(config.database_url)
    try:
        _apply_deadline(conn)
        yield conn
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


@contextmanager
def get_cursor():
    """
    Context manager for a cursor with dict rows.

    Usage:
        with get_cursor() as cur:
            cur.execute("SELECT * FROM hotel_table")
            rows = cur.fetchall()  # List of dicts
    """
    with get_connection() as conn:
        with conn.cursor(row_factory=dict_row) as cur:
            yield cur


@contextmanager
def transaction():
    """
    Run every query helper call inside the block on one connection.

    Commits when the block exits normally and rolls back every
    statement issued inside it when it raises. When the connection is
    already inside a transaction (nested blocks, test override) the
    block becomes a savepoint.

    Usage:
        with transaction():
            execute("INSERT INTO location_table ...", (...))
            execute("INSERT INTO hotel_table ...", (...))
    """
    with get_connection() as conn:
        with conn.transaction():
            token = _active_connection.set(conn)
            try:
                yield conn
            finally:
                _active_connection.reset(token)


# =============================================================================
# Query Helpers
# =============================================================================


def execute(query: str, params: tuple = None) -> int:
    """
    Execute a statement without returning rows.

    Use for INSERT, UPDATE, DELETE.

    Args:
        query: SQL query with %s placeholders
        params: Tuple of parameter values

    Returns:
        Number of rows affected
    """
    with get_cursor() as cur:
        cur.execute(query, params)
        return cur.rowcount


def fetch_one(query: str, params: tuple = None) -> dict[str, Any] | None:
    """
    Execute a query and return a single row as dict.

    Args:
        query: SQL query with %s placeholders
        params: Tuple of parameter values

    Returns:
        Dict of column names to values, or None if no row found
    """
    with get_cursor() as cur:
        cur.execute(query, params)
        return cur.fetchone()


def fetch_all(query: str, params: tuple = None) -> list[dict[str, Any]]:
    """
    Execute a query and return all rows as list of dicts.

    Args:
        query: SQL query with %s placeholders
        params: Tuple of parameter values

    Returns:
        List of dicts, empty list if no rows found
    """
    with get_cursor() as cur:
        cur.execute(query, params)
        return cur.fetchall()
