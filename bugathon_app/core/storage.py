"""Persistent key-value store for the cached search result and the timer.

Every browser tab served by the same Streamlit process (or by several
processes on one host) shares the JSON file. Writes replace the file
atomically and the last writer wins; nothing is locked.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

from .errors import StorageError

logger = logging.getLogger(__name__)


class KeyValueStore(ABC):
    """Synchronous get/set/clear of JSON-serializable values.

    ``load`` and ``save`` never raise: a failed read is a cache miss and a
    failed write is dropped, both logged.
    """

    def load(self, key: str) -> Any | None:
        try:
            return self._read(key)
        except StorageError as exc:
            logger.error("Storage load error for %s: %s", key, exc)
            return None

    def save(self, key: str, value: Any) -> None:
        try:
            self._write(key, value)
        except StorageError as exc:
            logger.error("Storage save error for %s: %s", key, exc)

    @abstractmethod
    def clear(self, key: str) -> None: ...

    @abstractmethod
    def _read(self, key: str) -> Any | None: ...

    @abstractmethod
    def _write(self, key: str, value: Any) -> None: ...


class MemoryStore(KeyValueStore):
    """Process-local store; values are kept serialized so callers never share objects."""

    def __init__(self, initial: dict[str, Any] | None = None):
        self._items: dict[str, str] = {}
        for key, value in (initial or {}).items():
            self._write(key, value)

    def clear(self, key: str) -> None:
        self._items.pop(key, None)

    def _read(self, key: str) -> Any | None:
        text = self._items.get(key)
        if text is None:
            return None
        try:
            return json.loads(text)
        except ValueError as exc:
            raise StorageError(f"corrupt value under {key!r}: {exc}") from exc

    def _write(self, key: str, value: Any) -> None:
        try:
            self._items[key] = json.dumps(value)
        except (TypeError, ValueError) as exc:
            raise StorageError(f"value under {key!r} is not JSON serializable: {exc}") from exc


class JsonFileStore(KeyValueStore):
    def __init__(self, path: str | Path):
        self.path = Path(path)

    def clear(self, key: str) -> None:
        try:
            items = self._read_all()
            if items.pop(key, None) is not None:
                self._write_all(items)
        except StorageError as exc:
            logger.error("Storage clear error for %s: %s", key, exc)

    def _read(self, key: str) -> Any | None:
        return self._read_all().get(key)

    def _write(self, key: str, value: Any) -> None:
        try:
            items = self._read_all()
        except StorageError as exc:
            # A corrupt file is replaced rather than blocking every future write
            logger.warning("Discarding unreadable store %s: %s", self.path, exc)
            items = {}
        items[key] = value
        self._write_all(items)

    def _read_all(self) -> dict[str, Any]:
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError as exc:
            raise StorageError(f"cannot read {self.path}: {exc}") from exc
        if not text.strip():
            return {}
        try:
            data = json.loads(text)
        except ValueError as exc:
            raise StorageError(f"corrupt JSON in {self.path}: {exc}") from exc
        if not isinstance(data, dict):
            raise StorageError(f"unexpected top-level {type(data).__name__} in {self.path}")
        return data

    def _write_all(self, items: dict[str, Any]) -> None:
        try:
            payload = json.dumps(items)
        except (TypeError, ValueError) as exc:
            raise StorageError(f"value is not JSON serializable: {exc}") from exc
        tmp_name = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=".store-", suffix=".json")
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(payload)
            os.replace(tmp_name, self.path)
            tmp_name = None
        except OSError as exc:
            raise StorageError(f"cannot write {self.path}: {exc}") from exc
        finally:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
