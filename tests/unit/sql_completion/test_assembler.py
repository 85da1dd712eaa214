"""Tests for suggestion assembly and ranking."""

from __future__ import annotations

from sqlsense.domains.query.completion import (
    SQL_FUNCTIONS,
    SuggestionCategory,
    build_suggestions,
    classify_prefix,
    column_source_tables,
    column_suggestions,
    function_suggestions,
    table_suggestions,
)
from sqlsense.domains.schema.domain.snapshot import EMPTY_SNAPSHOT, SchemaSnapshot
from tests.helpers import labels, make_table


def _many_tables(count: int) -> SchemaSnapshot:
    return SchemaSnapshot(
        databases=("shop",),
        tables=tuple(make_table(f"t{i}", "id") for i in range(count - 1)) + (make_table("users", "id", "name"),),
    )


class TestTierOrdering:
    """Categories are ordered by tier regardless of labels."""

    def test_keywords_first(self, shop_snapshot):
        suggestions = build_suggestions(classify_prefix("SELECT * FROM users JOIN orders ON"), shop_snapshot)
        tiers = [s.sort_tier for s in suggestions]
        assert tiers == sorted(tiers)
        assert suggestions[0].category == SuggestionCategory.KEYWORD
        assert suggestions[-1].category == SuggestionCategory.FUNCTION

    def test_source_order_kept_within_tier(self, shop_snapshot):
        suggestions = build_suggestions(classify_prefix("FROM "), shop_snapshot)
        assert labels(suggestions, SuggestionCategory.DATABASE) == ["shop", "analytics"]
        assert labels(suggestions, SuggestionCategory.KEYWORD) == list(shop_snapshot.keywords)

    def test_sort_text_prefixes_tier(self, users_snapshot):
        suggestions = build_suggestions(classify_prefix("SELECT "), users_snapshot)
        column = next(s for s in suggestions if s.category == SuggestionCategory.COLUMN)
        assert column.sort_text == "3_id"

    def test_comment_context_builds_nothing(self, shop_snapshot):
        assert build_suggestions(classify_prefix("-- SELECT "), shop_snapshot) == []


class TestKeywordAndFunctionSuggestions:
    """Always-on categories."""

    def test_keywords_present_without_schema(self):
        suggestions = build_suggestions(classify_prefix("SEL"), EMPTY_SNAPSHOT)
        assert "SELECT" in labels(suggestions, SuggestionCategory.KEYWORD)
        assert all(s.category in (SuggestionCategory.KEYWORD, SuggestionCategory.FUNCTION) for s in suggestions)

    def test_keywords_not_filtered_by_prefix(self, users_snapshot):
        suggestions = build_suggestions(classify_prefix("SEL"), users_snapshot)
        assert "WHERE" in labels(suggestions, SuggestionCategory.KEYWORD)

    def test_keywords_deduplicated(self):
        snapshot = SchemaSnapshot(keywords=("DATE", "SELECT", "DATE"))
        assert labels(build_suggestions(classify_prefix(""), snapshot), SuggestionCategory.KEYWORD) == [
            "DATE",
            "SELECT",
        ]

    def test_functions_insert_call_placeholder(self):
        functions = function_suggestions()
        assert [s.label for s in functions] == list(SQL_FUNCTIONS)
        count = functions[0]
        assert count.label == "COUNT"
        assert count.insert_text == "COUNT($0)"
        assert count.is_snippet is True
        assert count.detail == "Count rows"

    def test_keyword_insert_text_is_label(self, users_snapshot):
        keyword = build_suggestions(classify_prefix(""), users_snapshot)[0]
        assert keyword.insert_text == keyword.label
        assert keyword.is_snippet is False


class TestDatabaseSuggestions:
    """Databases appear only in database context."""

    def test_after_from(self):
        snapshot = SchemaSnapshot(databases=("db1", "db2"))
        suggestions = build_suggestions(classify_prefix("FROM "), snapshot)
        assert labels(suggestions, SuggestionCategory.DATABASE) == ["db1", "db2"]
        assert suggestions[len(snapshot.keywords)].detail == "Database"

    def test_absent_after_select(self):
        snapshot = SchemaSnapshot(databases=("db1", "db2"))
        suggestions = build_suggestions(classify_prefix("SELECT "), snapshot)
        assert labels(suggestions, SuggestionCategory.DATABASE) == []


class TestTableSuggestions:
    """Table labels and qualification."""

    def test_unqualified_without_current_database(self, shop_snapshot):
        result = table_suggestions(shop_snapshot)
        assert [s.label for s in result] == ["users", "orders", "events"]

    def test_qualified_outside_current_database(self, shop_snapshot):
        result = table_suggestions(shop_snapshot, current_database="shop")
        assert [s.label for s in result] == ["users", "orders", "analytics.events"]

    def test_detail_and_documentation(self, shop_snapshot):
        orders = table_suggestions(shop_snapshot)[1]
        assert orders.detail == "Table (shop)"
        assert orders.documentation == "3 columns"

    def test_only_in_table_context(self, shop_snapshot):
        assert labels(build_suggestions(classify_prefix("SELECT "), shop_snapshot), SuggestionCategory.TABLE) == []
        assert labels(
            build_suggestions(classify_prefix("UPDATE "), shop_snapshot), SuggestionCategory.TABLE
        ) == ["users", "orders", "events"]

    def test_same_name_in_other_databases_kept(self):
        """Attached databases may hold a table with the same name."""
        snapshot = SchemaSnapshot(
            databases=("main", "archive"),
            tables=(make_table("users", "id", database="main"), make_table("users", "id", database="archive")),
        )
        suggestions = build_suggestions(classify_prefix("SELECT * FROM "), snapshot)
        tables = [(s.label, s.detail) for s in suggestions if s.category == SuggestionCategory.TABLE]
        assert tables == [("users", "Table (main)"), ("users", "Table (archive)")]

    def test_identical_entries_collapsed(self):
        snapshot = SchemaSnapshot(tables=(make_table("users", "id"), make_table("users", "id")))
        suggestions = build_suggestions(classify_prefix("UPDATE "), snapshot)
        assert labels(suggestions, SuggestionCategory.TABLE) == ["users"]


class TestColumnSuggestions:
    """Column narrowing and qualification."""

    def test_single_table_unqualified(self, users_snapshot):
        suggestions = build_suggestions(classify_prefix("SELECT "), users_snapshot)
        assert labels(suggestions, SuggestionCategory.COLUMN) == ["id", "name"]

    def test_column_detail(self, users_snapshot):
        name = column_suggestions(users_snapshot, [])[1]
        assert name.detail == "varchar (users)"
        assert name.documentation == "Table: shop.users"

    def test_restricted_to_referenced_tables_and_qualified(self, shop_snapshot):
        buffer = "SELECT * FROM users JOIN orders ON"
        result = column_suggestions(shop_snapshot, ["users", "orders"])
        assert [s.label for s in result] == [
            "users.id",
            "users.name",
            "orders.id",
            "orders.uid",
            "orders.total",
        ]
        assert build_suggestions(classify_prefix(buffer), shop_snapshot, ["users", "orders"])

    def test_single_referenced_table_unqualified(self, shop_snapshot):
        result = column_suggestions(shop_snapshot, ["orders"])
        assert [s.label for s in result] == ["id", "uid", "total"]

    def test_falls_back_to_all_tables(self, shop_snapshot):
        result = column_suggestions(shop_snapshot, [])
        assert "events.kind" in [s.label for s in result]
        assert len(column_source_tables(shop_snapshot, [])) == 3

    def test_unknown_references_give_no_columns(self, shop_snapshot):
        assert column_suggestions(shop_snapshot, ["missing"]) == []

    def test_reference_match_is_case_insensitive(self):
        snapshot = SchemaSnapshot(tables=(make_table("Users", "id"),))
        assert [s.label for s in column_suggestions(snapshot, ["users"])] == ["id"]

    def test_qualified_when_schema_has_many_tables(self):
        snapshot = _many_tables(6)
        result = column_suggestions(snapshot, ["users"])
        assert [s.label for s in result] == ["users.id", "users.name"]

    def test_unqualified_at_threshold(self):
        snapshot = _many_tables(5)
        result = column_suggestions(snapshot, ["users"])
        assert [s.label for s in result] == ["id", "name"]

    def test_custom_qualify_threshold(self, users_snapshot):
        result = column_suggestions(users_snapshot, [], qualify_threshold=0)
        assert [s.label for s in result] == ["users.id", "users.name"]

    def test_tables_without_columns_do_not_force_qualification(self):
        snapshot = SchemaSnapshot(tables=(make_table("users", "id"), make_table("empty")))
        assert [s.label for s in column_suggestions(snapshot, [])] == ["id"]

    def test_only_in_column_context(self, users_snapshot):
        suggestions = build_suggestions(classify_prefix("FROM "), users_snapshot)
        assert labels(suggestions, SuggestionCategory.COLUMN) == []
