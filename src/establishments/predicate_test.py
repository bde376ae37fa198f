"""
Unit tests for the predicate and pagination builders.

Run with: pytest src/establishments/predicate_test.py -v
"""

import pytest

from establishments.errors import ValidationError
from establishments.predicate import Page, Predicate, count_query, page_query


class TestPredicate:
    """Tests for Predicate"""

    def test_empty_predicate_has_no_where_clause(self):
        assert Predicate().sql == ""
        assert Predicate().params == ()

    def test_clauses_are_and_ed_in_order(self):
        predicate = Predicate().where("category = %s", "hotel").active()

        assert predicate.sql == "WHERE category = %s AND deleted_at IS NULL"
        assert predicate.params == ("hotel",)

    def test_where_returns_new_predicate(self):
        base = Predicate().active()
        base.where("rating > %s", 3)

        assert base.clauses == ("deleted_at IS NULL",)

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("Tash", "%Tash%"),
            ("", "%%"),
        ],
    )
    def test_contains_wraps_value_in_wildcards(self, value, expected):
        predicate = Predicate().contains("city", value)

        assert predicate.sql == "WHERE city LIKE %s"
        assert predicate.params == (expected,)

    def test_icontains_uses_ilike(self):
        predicate = Predicate().icontains("hotel_name", "uzbek")

        assert predicate.sql == "WHERE hotel_name ILIKE %s"
        assert predicate.params == ("%uzbek%",)

    def test_alias_qualifies_columns(self):
        predicate = Predicate().active("e").contains("country", "Uz", "l")

        assert predicate.sql == "WHERE e.deleted_at IS NULL AND l.country LIKE %s"

    def test_values_are_never_interpolated(self):
        predicate = Predicate().contains("city", "'; DROP TABLE hotel_table; --")

        assert "DROP" not in predicate.sql
        assert predicate.params == ("%'; DROP TABLE hotel_table; --%",)


class TestPage:
    """Tests for Page"""

    def test_zero_limit_disables_pagination(self):
        page = Page(offset=10, limit=0)

        assert page.sql == ""
        assert page.params == ()

    def test_limit_and_offset_bound_as_params(self):
        page = Page(offset=20, limit=10)

        assert page.sql == "LIMIT %s OFFSET %s"
        assert page.params == (10, 20)

    @pytest.mark.parametrize(
        "offset, limit",
        [
            (-1, 10),
            (0, -5),
            ("1", 10),
            (0, 2.5),
            (True, 10),
            (None, 10),
        ],
    )
    def test_invalid_values_raise(self, offset, limit):
        with pytest.raises(ValidationError):
            Page(offset=offset, limit=limit)


class TestPageQuery:
    """Tests for page_query() and count_query()"""

    def test_page_query_assembles_parts(self):
        predicate = Predicate().active()
        query, params = page_query(
            "SELECT hotel_id FROM hotel_table", predicate, "rating DESC", Page(5, 10)
        )

        assert query == (
            "SELECT hotel_id FROM hotel_table WHERE deleted_at IS NULL "
            "ORDER BY rating DESC LIMIT %s OFFSET %s"
        )
        assert params == (10, 5)

    def test_page_query_without_order_or_page(self):
        query, params = page_query("SELECT 1 FROM hotel_table", Predicate())

        assert query == "SELECT 1 FROM hotel_table"
        assert params == ()

    def test_count_query_shares_predicate(self):
        predicate = Predicate().active().contains("city", "Tash")
        page_sql, page_params = page_query("SELECT * FROM location_table", predicate, page=Page(0, 1))
        count_sql, count_params = count_query("FROM location_table", predicate)

        assert count_sql == "SELECT COUNT(*) AS count FROM location_table WHERE deleted_at IS NULL AND city LIKE %s"
        assert count_params == ("%Tash%",)
        assert page_params[: len(count_params)] == count_params
        assert predicate.sql in page_sql
