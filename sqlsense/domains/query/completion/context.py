"""Lexical completion context detection.

Classifies the text before the cursor on the current line with keyword and
substring tests rather than a parser. The tests are intentionally permissive
(``"USE"`` also matches inside ``"USERS"``, keywords inside string literals
count). Keywords always rank first.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from sqlsense.domains.shell.store.settings import DEFAULT_COMMENT_MARKERS

from .core import SuggestionCategory, get_current_word

DATABASE_KEYWORDS = frozenset({"FROM", "USE", "DATABASE"})
TABLE_KEYWORDS = frozenset({"FROM", "JOIN", "UPDATE", "INTO", "TABLE"})
COLUMN_KEYWORDS = frozenset({"SELECT", "WHERE", "SET", "ON", "BY"})
CLAUSE_KEYWORDS = DATABASE_KEYWORDS | TABLE_KEYWORDS | COLUMN_KEYWORDS

# Substrings of the uppercased prefix that switch a context on
DATABASE_MARKERS = ("FROM", "USE")
TABLE_MARKERS = ("FROM", "JOIN")
COLUMN_MARKERS = ("SELECT", "WHERE", "SET", "ORDER BY", "GROUP BY")


@dataclass(frozen=True)
class CompletionContext:
    """What may be suggested at one cursor position.

    Keyword and function suggestions apply whenever ``is_comment`` is False;
    the ``database``, ``table`` and ``column`` flags are independent.
    """

    is_comment: bool = False
    is_line_start: bool = False
    is_first_token: bool = False
    preceding_keyword: str | None = None
    last_token: str = ""
    second_last_token: str = ""
    current_word: str = ""
    database: bool = False
    table: bool = False
    column: bool = False

    @property
    def categories(self) -> tuple[SuggestionCategory, ...]:
        """Applicable categories in tier order."""
        if self.is_comment:
            return ()
        flags = {
            SuggestionCategory.KEYWORD: True,
            SuggestionCategory.DATABASE: self.database,
            SuggestionCategory.TABLE: self.table,
            SuggestionCategory.COLUMN: self.column,
            SuggestionCategory.FUNCTION: True,
        }
        return tuple(category for category, enabled in flags.items() if enabled)


NO_SUGGESTION = CompletionContext(is_comment=True)


def is_comment_line(line_prefix: str, comment_markers: Sequence[str] = DEFAULT_COMMENT_MARKERS) -> bool:
    markers = tuple(m for m in comment_markers if m)
    return bool(markers) and line_prefix.strip().startswith(markers)


def _nearest_clause_keyword(tokens: Sequence[str]) -> str | None:
    for token in reversed(tokens):
        keyword = token.upper().strip("(),;")
        if keyword in CLAUSE_KEYWORDS:
            return keyword
    return None


def classify_prefix(
    line_prefix: str,
    comment_markers: Sequence[str] = DEFAULT_COMMENT_MARKERS,
) -> CompletionContext:
    """Classify the completion context for the text left of the cursor.

    Args:
        line_prefix: The current line from its first column up to the cursor.
        comment_markers: Line prefixes that disable completion.

    Returns:
        The context for this position. Total over arbitrary input.
    """
    if is_comment_line(line_prefix, comment_markers):
        return NO_SUGGESTION

    current_word = get_current_word(line_prefix)
    before_word = line_prefix[: len(line_prefix) - len(current_word)]
    tokens = before_word.split()

    if not tokens:
        # Still typing the first word of the line
        return CompletionContext(
            is_line_start=not line_prefix.strip(),
            is_first_token=True,
            current_word=current_word,
        )

    last_token = tokens[-1].upper()
    second_last_token = tokens[-2].upper() if len(tokens) > 1 else ""
    upper_prefix = line_prefix.upper()
    after_comma = before_word.rstrip().endswith(",")

    database = (
        last_token in DATABASE_KEYWORDS
        or second_last_token in DATABASE_KEYWORDS
        or any(marker in upper_prefix for marker in DATABASE_MARKERS)
    )
    table = (
        last_token in TABLE_KEYWORDS
        or second_last_token in TABLE_KEYWORDS
        or any(marker in upper_prefix for marker in TABLE_MARKERS)
    )
    column = (
        last_token in COLUMN_KEYWORDS
        or after_comma
        or any(marker in upper_prefix for marker in COLUMN_MARKERS)
    )

    return CompletionContext(
        preceding_keyword=_nearest_clause_keyword(tokens),
        last_token=last_token,
        second_last_token=second_last_token,
        current_word=current_word,
        database=database,
        table=table,
        column=column,
    )
