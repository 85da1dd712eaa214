"""Settings store and typed completion settings."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from sqlsense.shared.core.store import CONFIG_DIR, JSONFileStore

DEFAULT_COMMENT_MARKERS: tuple[str, ...] = ("--", "#", "/*")
DEFAULT_QUALIFY_THRESHOLD = 5


def _resolve_settings_path() -> Path:
    override = os.environ.get("SQLSENSE_SETTINGS_PATH", "").strip()
    if override:
        return Path(override).expanduser()
    return CONFIG_DIR / "settings.json"


@dataclass(frozen=True)
class CompletionSettings:
    """Tunables for the completion engine.

    Attributes:
        column_qualify_threshold: Column labels are qualified as ``table.column``
            once the schema holds more tables than this.
        comment_markers: Line prefixes that suppress all suggestions.
        auto_refresh: Start a schema fetch from ``complete()`` when nothing is cached.
    """

    column_qualify_threshold: int = DEFAULT_QUALIFY_THRESHOLD
    comment_markers: tuple[str, ...] = DEFAULT_COMMENT_MARKERS
    auto_refresh: bool = True

    @classmethod
    def from_dict(cls, data: Any) -> CompletionSettings:
        """Build settings from a JSON object, ignoring invalid values."""
        if not isinstance(data, dict):
            return cls()

        threshold = data.get("column_qualify_threshold", DEFAULT_QUALIFY_THRESHOLD)
        if isinstance(threshold, bool) or not isinstance(threshold, int) or threshold < 0:
            threshold = DEFAULT_QUALIFY_THRESHOLD

        markers = data.get("comment_markers", DEFAULT_COMMENT_MARKERS)
        if isinstance(markers, (list, tuple)) and all(isinstance(m, str) and m for m in markers):
            comment_markers = tuple(markers)
        else:
            comment_markers = DEFAULT_COMMENT_MARKERS

        auto_refresh = data.get("auto_refresh", True)
        if not isinstance(auto_refresh, bool):
            auto_refresh = True

        return cls(
            column_qualify_threshold=threshold,
            comment_markers=comment_markers,
            auto_refresh=auto_refresh,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "column_qualify_threshold": self.column_qualify_threshold,
            "comment_markers": list(self.comment_markers),
            "auto_refresh": self.auto_refresh,
        }


COMPLETION_SECTION = "completion"


class SettingsStore(JSONFileStore):
    """Settings file made of named sections.

    Lives at ~/.sqlsense/settings.json unless SQLSENSE_SETTINGS_PATH says
    otherwise. Sections this package does not know about are preserved.
    """

    def __init__(self, file_path: Path | None = None) -> None:
        super().__init__(file_path or _resolve_settings_path())

    def sections(self) -> dict[str, Any]:
        data = self.read()
        return data if isinstance(data, dict) else {}

    def section(self, name: str, default: Any = None) -> Any:
        return self.sections().get(name, default)

    def set_section(self, name: str, value: Any) -> None:
        def apply(data: Any) -> dict[str, Any]:
            merged = data if isinstance(data, dict) else {}
            merged[name] = value
            return merged

        self.update(apply)

    def load_completion_settings(self) -> CompletionSettings:
        return CompletionSettings.from_dict(self.section(COMPLETION_SECTION))

    def save_completion_settings(self, completion: CompletionSettings) -> None:
        self.set_section(COMPLETION_SECTION, completion.to_dict())


_store: SettingsStore | None = None


def get_settings_store() -> SettingsStore:
    """Shared store for the current settings path (re-created if the path changes)."""
    global _store
    path = _resolve_settings_path()
    if _store is None or _store.file_path != path:
        _store = SettingsStore(path)
    return _store


def load_completion_settings(path: Path | None = None) -> CompletionSettings:
    """Load completion settings from ``path`` or the default settings file."""
    store = SettingsStore(path) if path is not None else get_settings_store()
    return store.load_completion_settings()
