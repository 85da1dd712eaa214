"""SQL completion engine.

Provides context-aware SQL autocompletion with:
- Lexical context detection (databases after FROM/USE, tables after FROM/JOIN,
  columns after SELECT/WHERE/SET/ON/BY)
- Column narrowing to the tables named in FROM/JOIN clauses
- Tiered ranking: keywords, databases, tables, columns, functions
"""

from .assembler import (
    build_suggestions,
    column_source_tables,
    column_suggestions,
    database_suggestions,
    function_suggestions,
    keyword_suggestions,
    table_suggestions,
)
from .context import (
    CLAUSE_KEYWORDS,
    NO_SUGGESTION,
    CompletionContext,
    classify_prefix,
    is_comment_line,
)
from .core import (
    SQL_FUNCTIONS,
    CompletionResult,
    ReplacementRange,
    Suggestion,
    SuggestionCategory,
    get_current_word,
)
from .tables import extract_tables_from_query

__all__ = [
    # Types
    "CompletionContext",
    "CompletionResult",
    "ReplacementRange",
    "Suggestion",
    "SuggestionCategory",
    # Constants
    "CLAUSE_KEYWORDS",
    "NO_SUGGESTION",
    "SQL_FUNCTIONS",
    # Context
    "classify_prefix",
    "is_comment_line",
    "get_current_word",
    "extract_tables_from_query",
    # Assembly
    "build_suggestions",
    "keyword_suggestions",
    "database_suggestions",
    "table_suggestions",
    "column_source_tables",
    "column_suggestions",
    "function_suggestions",
]
