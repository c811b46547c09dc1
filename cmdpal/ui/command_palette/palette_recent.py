"""
Recency ledger for the command palette.

Remembers the last few activated leaf commands, most recent first, and
persists them as a JSON array under a single store key. Nothing in here
raises: a corrupt store reads as empty, a failed write is logged.
"""

import json
import logging

from cmdpal.config.constants import MAX_RECENT_COMMANDS, RECENT_COMMANDS_KEY
from cmdpal.exceptions import StorageError
from cmdpal.services.kv_store import KeyValueStore

logger = logging.getLogger(__name__)


class RecencyLedger:
    """Bounded, de-duplicated, persisted most-recently-used command ids."""

    def __init__(
        self,
        store: KeyValueStore,
        key: str = RECENT_COMMANDS_KEY,
        max_items: int = MAX_RECENT_COMMANDS,
    ):
        self._store = store
        self._key = key
        self._max_items = max_items
        self._ids: list[str] = self._load()

    def _load(self) -> list[str]:
        try:
            raw = self._store.get(self._key)
        except Exception as e:
            logger.debug(f"Could not read recent commands: {e}")
            return []
        if raw is None:
            return []

        try:
            data = json.loads(raw)
        except (json.JSONDecodeError, TypeError) as e:
            logger.debug(f"Discarding corrupt recent commands: {e}")
            return []
        if not isinstance(data, list) or not all(isinstance(i, str) for i in data):
            logger.debug("Discarding recent commands: not a list of strings")
            return []

        ids: list[str] = []
        for command_id in data:
            if command_id not in ids:
                ids.append(command_id)
        return ids[: self._max_items]

    def _persist(self) -> None:
        try:
            self._store.set(self._key, json.dumps(self._ids))
        except (StorageError, OSError) as e:
            logger.warning(f"Failed to persist recent commands: {e}")

    def record_activation(self, command_id: str) -> None:
        """Move `command_id` to the front, trim, and persist."""
        ids = [i for i in self._ids if i != command_id]
        ids.insert(0, command_id)
        self._ids = ids[: self._max_items]
        self._persist()

    def list(self) -> tuple[str, ...]:
        """Current ids, most recent first."""
        return tuple(self._ids)

    def clear(self) -> None:
        """Forget every recent command."""
        self._ids = []
        self._persist()

    def __contains__(self, command_id: str) -> bool:
        return command_id in self._ids

    def __len__(self) -> int:
        return len(self._ids)
