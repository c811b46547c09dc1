"""
Persistent key-value store.

A small synchronous read/write surface the palette uses to remember things
across sessions (currently only the recent-commands ledger). Values are
strings; callers own their own serialization.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Protocol

from cmdpal.config.constants import CMDPAL_CONFIG_DIR, STORE_FILENAME
from cmdpal.exceptions import StorageError

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    """Minimal synchronous key-value storage."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...


class MemoryStore:
    """Dict-backed store. Nothing survives the process."""

    def __init__(self, initial: dict[str, str] | None = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)


class JsonFileStore:
    """
    Store backed by a single JSON object on disk.

    Reads are forgiving: a missing, unreadable or non-object file reads as
    empty. Writes are strict and raise StorageError so the caller decides
    whether a failed write matters.
    """

    def __init__(self, path: Path | None = None):
        self.path = path or CMDPAL_CONFIG_DIR / STORE_FILENAME

    def _load(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text())
        except (json.JSONDecodeError, OSError, UnicodeDecodeError) as e:
            logger.debug(f"Ignoring unreadable store {self.path}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.debug(f"Ignoring non-object store {self.path}")
            return {}
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _dump(self, data: dict[str, str], key: str) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(data, indent=2) + "\n")
        except OSError as e:
            raise StorageError("Failed to write store", key=key, path=str(self.path)) from e

    def get(self, key: str) -> str | None:
        return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self._dump(data, key)

    def delete(self, key: str) -> None:
        data = self._load()
        if data.pop(key, None) is not None:
            self._dump(data, key)
