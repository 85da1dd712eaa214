"""Suggestion assembly.

Turns a CompletionContext and a SchemaSnapshot into the ordered suggestion
list. Pure: no caching and no I/O, so it is safe to run on every keystroke.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from sqlsense.domains.schema.domain.snapshot import SchemaSnapshot, TableMeta
from sqlsense.domains.shell.store.settings import DEFAULT_QUALIFY_THRESHOLD

from .context import CompletionContext
from .core import SQL_FUNCTIONS, Suggestion, SuggestionCategory, function_insert_text


def keyword_suggestions(snapshot: SchemaSnapshot) -> list[Suggestion]:
    return [
        Suggestion(label=keyword, category=SuggestionCategory.KEYWORD, detail="SQL keyword")
        for keyword in snapshot.keywords
    ]


def database_suggestions(snapshot: SchemaSnapshot) -> list[Suggestion]:
    return [
        Suggestion(label=database, category=SuggestionCategory.DATABASE, detail="Database")
        for database in snapshot.databases
    ]


def table_suggestions(snapshot: SchemaSnapshot, current_database: str | None = None) -> list[Suggestion]:
    """Tables, qualified as ``database.table`` when outside the current database."""
    results: list[Suggestion] = []
    for table in snapshot.tables:
        if current_database and table.database != current_database:
            label = f"{table.database}.{table.name}"
        else:
            label = table.name
        results.append(
            Suggestion(
                label=label,
                category=SuggestionCategory.TABLE,
                detail=f"Table ({table.database})",
                documentation=f"{len(table.columns)} columns",
            )
        )
    return results


def column_source_tables(snapshot: SchemaSnapshot, referenced_tables: Sequence[str]) -> list[TableMeta]:
    """Tables whose columns are offered.

    Known tables named in the query, or every known table when the query
    names none.
    """
    if not referenced_tables:
        return list(snapshot.tables)
    referenced = {name.lower() for name in referenced_tables}
    return [table for table in snapshot.tables if table.name.lower() in referenced]


def column_suggestions(
    snapshot: SchemaSnapshot,
    referenced_tables: Sequence[str],
    qualify_threshold: int = DEFAULT_QUALIFY_THRESHOLD,
) -> list[Suggestion]:
    """Columns of the candidate tables.

    Labels become ``table.column`` when more than one table contributes
    columns, or when the schema has more than ``qualify_threshold`` tables.
    """
    tables = [table for table in column_source_tables(snapshot, referenced_tables) if table.columns]
    qualify = len(tables) > 1 or snapshot.table_count > qualify_threshold

    results: list[Suggestion] = []
    for table in tables:
        for column in table.columns:
            label = f"{table.name}.{column.name}" if qualify else column.name
            results.append(
                Suggestion(
                    label=label,
                    category=SuggestionCategory.COLUMN,
                    detail=f"{column.data_type} ({table.name})",
                    documentation=f"Table: {table.qualified_name}",
                )
            )
    return results


def function_suggestions() -> list[Suggestion]:
    return [
        Suggestion(
            label=name,
            category=SuggestionCategory.FUNCTION,
            detail=description,
            insert_text=function_insert_text(name),
            is_snippet=True,
        )
        for name, description in SQL_FUNCTIONS.items()
    ]


def _dedupe_labels(suggestions: Iterable[Suggestion]) -> list[Suggestion]:
    # Same-named tables from different databases differ in detail and are both kept
    seen: set[tuple[SuggestionCategory, str, str]] = set()
    unique: list[Suggestion] = []
    for suggestion in suggestions:
        key = (suggestion.category, suggestion.label, suggestion.detail)
        if key not in seen:
            seen.add(key)
            unique.append(suggestion)
    return unique


def build_suggestions(
    context: CompletionContext,
    snapshot: SchemaSnapshot,
    referenced_tables: Sequence[str] = (),
    *,
    current_database: str | None = None,
    qualify_threshold: int = DEFAULT_QUALIFY_THRESHOLD,
) -> list[Suggestion]:
    """Assemble suggestions for every category the context allows.

    Args:
        context: Classified cursor context.
        snapshot: Schema to draw names from (may be EMPTY_SNAPSHOT).
        referenced_tables: Lowercased table names found in the buffer.
        current_database: The database the editor is bound to, if any.
        qualify_threshold: Table count above which column labels are qualified.

    Returns:
        Suggestions ordered by tier, source order kept within a tier.
    """
    if context.is_comment:
        return []

    results: list[Suggestion] = []
    for category in context.categories:
        if category is SuggestionCategory.KEYWORD:
            results.extend(keyword_suggestions(snapshot))
        elif category is SuggestionCategory.DATABASE:
            results.extend(database_suggestions(snapshot))
        elif category is SuggestionCategory.TABLE:
            results.extend(table_suggestions(snapshot, current_database))
        elif category is SuggestionCategory.COLUMN:
            results.extend(column_suggestions(snapshot, referenced_tables, qualify_threshold))
        elif category is SuggestionCategory.FUNCTION:
            results.extend(function_suggestions())

    # sorted() is stable, so this only enforces tier order
    return sorted(_dedupe_labels(results), key=lambda s: s.sort_tier)
