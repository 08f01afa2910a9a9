"""Thread-safe key-value store backing per-player settings and game history."""

from __future__ import annotations

import copy
import json
import logging
from pathlib import Path
from threading import Lock
from typing import Any

logger = logging.getLogger(__name__)


class KeyValueStore:
    """JSON-compatible values keyed by string, optionally mirrored to a file."""

    def __init__(self, file_path: Path | None = None) -> None:
        self._lock = Lock()
        self._data: dict[str, Any] = {}
        self._file_path = file_path.resolve() if file_path is not None else None
        if self._file_path is not None and self._file_path.exists():
            self._data = self._read_file(self._file_path)
            logger.info("Loaded %d key(s) from %s", len(self._data), self._file_path)

    def get(self, key: str, default: Any = None) -> Any:
        with self._lock:
            if key not in self._data:
                return default
            return copy.deepcopy(self._data[key])

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            self._data[key] = copy.deepcopy(value)
            self._flush()

    def append(self, key: str, value: Any) -> list[Any]:
        """Append ``value`` to the list stored at ``key`` and return the new list."""
        with self._lock:
            existing = self._data.get(key)
            if existing is None:
                existing = []
            elif not isinstance(existing, list):
                raise TypeError(f"Value stored at {key!r} is not a list.")
            existing.append(copy.deepcopy(value))
            self._data[key] = existing
            self._flush()
            return copy.deepcopy(existing)

    def _flush(self) -> None:
        if self._file_path is None:
            return
        self._file_path.parent.mkdir(parents=True, exist_ok=True)
        temp_path = self._file_path.with_suffix(self._file_path.suffix + ".tmp")
        temp_path.write_text(json.dumps(self._data, indent=2, sort_keys=True), encoding="utf-8")
        temp_path.replace(self._file_path)

    @staticmethod
    def _read_file(file_path: Path) -> dict[str, Any]:
        raw = json.loads(file_path.read_text(encoding="utf-8"))
        if not isinstance(raw, dict):
            raise ValueError(f"Store file {file_path} must contain a JSON object.")
        return raw
