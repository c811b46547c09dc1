"""Tests for the persistent key-value stores."""

import json

import pytest

from cmdpal.exceptions import StorageError
from cmdpal.services.kv_store import JsonFileStore, MemoryStore


class TestMemoryStore:
    """Test MemoryStore."""

    def test_get_set_delete(self):
        store = MemoryStore()
        assert store.get("k") is None
        store.set("k", "v")
        assert store.get("k") == "v"
        store.delete("k")
        store.delete("k")
        assert store.get("k") is None


class TestJsonFileStore:
    """Test JsonFileStore."""

    def test_persists_across_instances(self, tmp_path):
        path = tmp_path / "store.json"
        JsonFileStore(path).set("recent", '["home"]')
        assert JsonFileStore(path).get("recent") == '["home"]'
        assert json.loads(path.read_text()) == {"recent": '["home"]'}

    def test_creates_parent_directory(self, tmp_path):
        store = JsonFileStore(tmp_path / "nested" / "dir" / "store.json")
        store.set("k", "v")
        assert store.get("k") == "v"

    def test_default_path_in_config_dir(self, isolated_config_dir):
        store = JsonFileStore()
        store.set("k", "v")
        assert (isolated_config_dir / "store.json").exists()

    def test_corrupt_file_reads_empty(self, tmp_path):
        path = tmp_path / "store.json"
        path.write_text("{oops")
        assert JsonFileStore(path).get("k") is None

    def test_non_object_file_reads_empty(self, tmp_path):
        path = tmp_path / "store.json"
        path.write_text("[1, 2, 3]")
        assert JsonFileStore(path).get("k") is None

    def test_write_failure_raises_storage_error(self, tmp_path):
        blocker = tmp_path / "not-a-dir"
        blocker.write_text("")
        store = JsonFileStore(blocker / "store.json")

        with pytest.raises(StorageError) as exc_info:
            store.set("recent", "[]")

        assert exc_info.value.context["key"] == "recent"

    def test_delete(self, tmp_path):
        store = JsonFileStore(tmp_path / "store.json")
        store.set("a", "1")
        store.set("b", "2")
        store.delete("a")
        assert store.get("a") is None
        assert store.get("b") == "2"
