"""Services backing the palette engine."""

from .kv_store import JsonFileStore, KeyValueStore, MemoryStore

__all__ = [
    "JsonFileStore",
    "KeyValueStore",
    "MemoryStore",
]
