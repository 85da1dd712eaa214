"""sqlsense - Context-aware SQL completion for editors."""

from importlib.metadata import PackageNotFoundError, version
from typing import TYPE_CHECKING, Any

__all__ = [
    "__version__",
    "main",
    "CompletionSession",
    "SchemaSnapshot",
    "Suggestion",
]

try:
    __version__ = version("sqlsense")
except PackageNotFoundError:
    __version__ = "0.0.0.dev"

if TYPE_CHECKING:
    from .cli import main
    from sqlsense.domains.query.app.completion_session import CompletionSession
    from sqlsense.domains.query.completion import Suggestion
    from sqlsense.domains.schema.domain.snapshot import SchemaSnapshot


def __getattr__(name: str) -> Any:
    """Lazy import for heavy modules to keep package import side-effect free."""
    if name == "main":
        from .cli import main

        return main
    if name == "CompletionSession":
        from sqlsense.domains.query.app.completion_session import CompletionSession

        return CompletionSession
    if name == "Suggestion":
        from sqlsense.domains.query.completion import Suggestion

        return Suggestion
    if name == "SchemaSnapshot":
        from sqlsense.domains.schema.domain.snapshot import SchemaSnapshot

        return SchemaSnapshot
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
