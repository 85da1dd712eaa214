"""Schema providers: where schema snapshots come from."""

from .exceptions import SchemaFetchError
from .inspector import InspectorSchemaProvider
from .model import SchemaInspector, SchemaProvider
from .sqlite import SQLiteInspector, build_sqlite_provider, sqlite_connector
from .static import StaticSchemaProvider

__all__ = [
    "InspectorSchemaProvider",
    "SQLiteInspector",
    "SchemaFetchError",
    "SchemaInspector",
    "SchemaProvider",
    "StaticSchemaProvider",
    "build_sqlite_provider",
    "sqlite_connector",
]
