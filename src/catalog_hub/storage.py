"""Prefixed key/value persistence for small session state.

Store backends raise :class:`StorageError`; the ``get_storage`` /
``set_storage`` / ``remove_storage`` helpers are the boundary where those
failures are logged and degraded to "no data".
"""

from __future__ import annotations

import json
import logging
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

from catalog_hub.exceptions import StorageError

logger = logging.getLogger(__name__)

DEFAULT_PREFIX = "shopee_hub_"


class KeyValueStore(ABC):
    """String-keyed store of JSON-serializable values."""

    def __init__(self, prefix: str = DEFAULT_PREFIX):
        self.prefix = prefix

    def key(self, name: str) -> str:
        return f"{self.prefix}{name}"

    @abstractmethod
    def read(self, name: str) -> str | None:
        """Return the serialized value stored under ``name``, or None."""

    @abstractmethod
    def write(self, name: str, value: str) -> None:
        pass

    @abstractmethod
    def delete(self, name: str) -> None:
        pass


class MemoryStore(KeyValueStore):
    """In-process store, useful for tests and one-shot CLI runs."""

    def __init__(self, prefix: str = DEFAULT_PREFIX):
        super().__init__(prefix)
        self._rows: dict[str, str] = {}

    def read(self, name: str) -> str | None:
        return self._rows.get(self.key(name))

    def write(self, name: str, value: str) -> None:
        self._rows[self.key(name)] = value

    def delete(self, name: str) -> None:
        self._rows.pop(self.key(name), None)


class JsonFileStore(KeyValueStore):
    """All keys kept in one JSON object on disk."""

    def __init__(self, path: str | Path, prefix: str = DEFAULT_PREFIX):
        super().__init__(prefix)
        self.path = Path(path)
        self._lock = threading.Lock()

    def read(self, name: str) -> str | None:
        with self._lock:
            value = self._load().get(self.key(name))
        return value if isinstance(value, str) else None

    def write(self, name: str, value: str) -> None:
        with self._lock:
            rows = self._load()
            rows[self.key(name)] = value
            self._dump(rows)

    def delete(self, name: str) -> None:
        with self._lock:
            rows = self._load()
            if rows.pop(self.key(name), None) is not None:
                self._dump(rows)

    def _load(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise StorageError(f"Failed to read store {self.path}: {exc}") from exc
        if not isinstance(data, dict):
            raise StorageError(f"Store {self.path} does not contain a JSON object")
        return data

    def _dump(self, rows: dict[str, Any]) -> None:
        tmp = self.path.with_name(f"{self.path.name}.tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(json.dumps(rows, ensure_ascii=False), encoding="utf-8")
            tmp.replace(self.path)
        except OSError as exc:
            raise StorageError(f"Failed to write store {self.path}: {exc}") from exc


def get_storage(store: KeyValueStore, name: str) -> Any:
    try:
        raw = store.read(name)
        return json.loads(raw) if raw else None
    except (StorageError, ValueError, TypeError):
        logger.exception("Error reading %s from storage", name)
        return None


def set_storage(store: KeyValueStore, name: str, value: Any) -> None:
    try:
        store.write(name, json.dumps(value, ensure_ascii=False))
    except (StorageError, ValueError, TypeError):
        logger.exception("Error writing %s to storage", name)


def remove_storage(store: KeyValueStore, name: str) -> None:
    try:
        store.delete(name)
    except StorageError:
        logger.exception("Error removing %s from storage", name)
