"""
Unit tests for the connection helpers, using mock connections.

Run with: pytest src/establishments/db_test.py -v
"""

from unittest.mock import MagicMock, patch

import pytest

from establishments import db
from establishments.errors import DeadlineExceeded


@pytest.fixture
def mock_conn():
    """A connection override whose cursor returns canned results."""
    conn = MagicMock()
    cursor = conn.cursor.return_value.__enter__.return_value
    cursor.rowcount = 1
    cursor.fetchone.return_value = {"hotel_id": "hotel-1"}
    cursor.fetchall.return_value = [{"hotel_id": "hotel-1"}, {"hotel_id": "hotel-2"}]

    db.set_connection_override(conn)
    yield conn
    db.clear_connection_override()


class TestQueryHelpers:
    """Tests for execute(), fetch_one() and fetch_all()"""

    def test_execute_returns_rowcount(self, mock_conn):
        cursor = mock_conn.cursor.return_value.__enter__.return_value
        cursor.rowcount = 3

        affected = db.execute("UPDATE hotel_table SET deleted_at = now()", ())

        assert affected == 3
        cursor.execute.assert_called_once_with("UPDATE hotel_table SET deleted_at = now()", ())

    def test_fetch_one_returns_row(self, mock_conn):
        assert db.fetch_one("SELECT ...", ("hotel-1",)) == {"hotel_id": "hotel-1"}

    def test_fetch_all_returns_rows(self, mock_conn):
        assert len(db.fetch_all("SELECT ...")) == 2

    def test_override_is_not_committed_or_closed(self, mock_conn):
        db.execute("DELETE FROM hotel_table")

        mock_conn.commit.assert_not_called()
        mock_conn.rollback.assert_not_called()
        mock_conn.close.assert_not_called()


class TestGetConnection:
    """Tests for get_connection() without an override"""

    def test_commits_and_closes_on_success(self):
        conn = MagicMock()
        with patch("establishments.db.psycopg.connect", return_value=conn):
            with db.get_connection() as acquired:
                assert acquired is conn

        conn.commit.assert_called_once()
        conn.close.assert_called_once()

    def test_rolls_back_on_error(self):
        conn = MagicMock()
        with patch("establishments.db.psycopg.connect", return_value=conn):
            with pytest.raises(RuntimeError):
                with db.get_connection():
                    raise RuntimeError("boom")

        conn.rollback.assert_called_once()
        conn.commit.assert_not_called()
        conn.close.assert_called_once()


class TestTransaction:
    """Tests for transaction()"""

    def test_calls_inside_share_one_connection(self):
        conn = MagicMock()
        with patch("establishments.db.psycopg.connect", return_value=conn) as connect:
            with db.transaction():
                db.execute("INSERT INTO location_table ...")
                db.execute("INSERT INTO hotel_table ...")

        connect.assert_called_once()
        conn.transaction.assert_called_once()
        conn.commit.assert_called_once()

    def test_shared_connection_is_released_after_block(self):
        conn = MagicMock()
        with patch("establishments.db.psycopg.connect", return_value=conn) as connect:
            with db.transaction():
                pass
            db.execute("SELECT 1")

        assert connect.call_count == 2

    def test_error_rolls_back(self):
        conn = MagicMock()
        with patch("establishments.db.psycopg.connect", return_value=conn):
            with pytest.raises(RuntimeError):
                with db.transaction():
                    raise RuntimeError("boom")

        conn.rollback.assert_called_once()


class TestDeadline:
    """Tests for deadline() and remaining_time()"""

    def test_no_deadline_by_default(self):
        assert db.remaining_time() is None

    def test_remaining_time_inside_block(self):
        with db.deadline(5):
            remaining = db.remaining_time()

        assert 0 < remaining <= 5
        assert db.remaining_time() is None

    def test_nested_deadline_never_extends_outer(self):
        with db.deadline(1):
            with db.deadline(60):
                assert db.remaining_time() <= 1

    @pytest.mark.parametrize("seconds", [0, None])
    def test_falsy_deadline_is_ignored(self, seconds):
        with db.deadline(seconds):
            assert db.remaining_time() is None

    def test_statement_timeout_applied_to_connection(self, mock_conn):
        with db.deadline(2):
            db.fetch_one("SELECT 1")

        query, params = mock_conn.execute.call_args.args
        assert "statement_timeout" in query
        assert 0 < int(params[0]) <= 2000

    def test_expired_deadline_raises_before_statement(self, mock_conn):
        with patch("establishments.db.remaining_time", return_value=-0.5):
            with pytest.raises(DeadlineExceeded):
                db.execute("DELETE FROM hotel_table")

        mock_conn.cursor.assert_not_called()
