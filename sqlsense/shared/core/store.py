"""JSON file persistence shared by sqlsense stores."""

from __future__ import annotations

import json
import os
import tempfile
import threading
from collections.abc import Callable
from pathlib import Path
from typing import Any

from textual import log

# Overridable so tests never touch the real home directory
CONFIG_DIR = Path(os.environ.get("SQLSENSE_CONFIG_DIR", Path.home() / ".sqlsense"))


class JSONFileStore:
    """One JSON document on disk.

    A missing or unreadable file reads as ``None``. Writes go through a
    temp file in the same directory and ``os.replace``, so readers never see
    a half-written document. ``update`` serializes read-modify-write cycles
    within the process.
    """

    def __init__(self, file_path: Path):
        self._file_path = Path(file_path)
        self._lock = threading.Lock()

    @property
    def file_path(self) -> Path:
        return self._file_path

    def exists(self) -> bool:
        return self._file_path.exists()

    def read(self) -> Any:
        try:
            text = self._file_path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as error:
            log.warning(f"Could not read {self._file_path}: {error}")
            return None
        try:
            return json.loads(text)
        except json.JSONDecodeError as error:
            log.warning(f"Ignoring invalid JSON in {self._file_path}: {error}")
            return None

    def write(self, data: Any) -> None:
        directory = self._file_path.parent
        directory.mkdir(parents=True, exist_ok=True)
        try:
            os.chmod(directory, 0o700)
        except OSError:
            pass  # not supported everywhere

        fd, tmp_name = tempfile.mkstemp(dir=directory, prefix=f".{self._file_path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
            os.chmod(tmp_name, 0o600)
            os.replace(tmp_name, self._file_path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def update(self, mutate: Callable[[Any], Any]) -> Any:
        """Apply ``mutate`` to the stored document and write back its result."""
        with self._lock:
            data = mutate(self.read())
            self.write(data)
            return data
