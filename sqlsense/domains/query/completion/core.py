"""Core SQL completion types.

Suggestion categories and their ranking tiers, the suggestion record handed
to editors, and the static function list.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple


class SuggestionCategory(Enum):
    """Kinds of completion suggestions; the value is the sort tier."""

    KEYWORD = 0
    DATABASE = 1
    TABLE = 2
    COLUMN = 3
    FUNCTION = 4

    @property
    def tier(self) -> int:
        return self.value


@dataclass(frozen=True)
class Suggestion:
    """A single completion candidate.

    ``insert_text`` may differ from ``label``: function suggestions insert a
    call with a ``$0`` placeholder marking where the cursor should land.
    """

    label: str
    category: SuggestionCategory
    detail: str = ""
    insert_text: str = ""
    documentation: str = ""
    is_snippet: bool = False

    def __post_init__(self) -> None:
        if not self.insert_text:
            object.__setattr__(self, "insert_text", self.label)

    @property
    def sort_tier(self) -> int:
        return self.category.tier

    @property
    def sort_text(self) -> str:
        return f"{self.sort_tier}_{self.label}"


class ReplacementRange(NamedTuple):
    """Columns on ``line`` replaced when a suggestion is accepted (end exclusive)."""

    line: int
    start_column: int
    end_column: int


@dataclass(frozen=True)
class CompletionResult:
    """Suggestions plus the range they replace."""

    suggestions: tuple[Suggestion, ...]
    range: ReplacementRange


# Functions offered everywhere, with a short description for the detail column
SQL_FUNCTIONS: dict[str, str] = {
    "COUNT": "Count rows",
    "SUM": "Sum of values",
    "AVG": "Average of values",
    "MAX": "Maximum value",
    "MIN": "Minimum value",
    "CONCAT": "Concatenate strings",
    "SUBSTRING": "Extract part of a string",
    "UPPER": "Convert to upper case",
    "LOWER": "Convert to lower case",
    "TRIM": "Strip surrounding whitespace",
    "NOW": "Current date and time",
    "DATE": "Date part of a value",
    "YEAR": "Year of a date",
    "MONTH": "Month of a date",
    "DAY": "Day of a date",
}

CURSOR_PLACEHOLDER = "$0"

_CURRENT_WORD_RE = re.compile(r"[\w$.]*$")


def get_current_word(line_prefix: str) -> str:
    """Get the (possibly qualified) word being typed at the end of ``line_prefix``."""
    match = _CURRENT_WORD_RE.search(line_prefix)
    return match.group(0) if match else ""


def function_insert_text(name: str) -> str:
    return f"{name}({CURSOR_PLACEHOLDER})"
