"""Tests for the key-value storage backends."""

import os

import pytest

from finance_tracker.services.storage import (
    CorruptDataError,
    InMemoryKeyValueStore,
    JsonFileKeyValueStore,
    StorageError,
)


@pytest.fixture(params=["memory", "file"])
def backend(request, tmp_path):
    if request.param == "memory":
        return InMemoryKeyValueStore()
    return JsonFileKeyValueStore(tmp_path / "data")


class TestKeyValueContract:
    """Behaviour every backend must share."""

    def test_missing_key(self, backend):
        assert backend.get("nope") is None
        assert "nope" not in backend.keys()

    def test_set_get(self, backend):
        backend.set("k", "v")
        assert backend.get("k") == "v"

    def test_overwrite(self, backend):
        backend.set("k", "v1")
        backend.set("k", "v2")
        assert backend.get("k") == "v2"

    def test_delete(self, backend):
        backend.set("k", "v")
        assert backend.delete("k") is True
        assert backend.get("k") is None
        assert backend.delete("k") is False

    def test_keys_sorted(self, backend):
        backend.set("transactions_b", "[]")
        backend.set("financeUser", "{}")
        backend.set("transactions_a", "[]")
        assert backend.keys() == ["financeUser", "transactions_a", "transactions_b"]

    def test_json_helpers(self, backend):
        backend.write_json("k", {"amount": "₹100", "items": [1, 2]})
        assert backend.read_json("k") == {"amount": "₹100", "items": [1, 2]}
        assert backend.read_json("missing") is None

    def test_corrupt_json(self, backend):
        backend.set("k", "{oops")
        with pytest.raises(CorruptDataError):
            backend.read_json("k")

    def test_corrupt_data_is_a_storage_error(self):
        assert issubclass(CorruptDataError, StorageError)


class TestJsonFileStore:
    """File-specific behaviour."""

    def test_one_file_per_key(self, tmp_path):
        store = JsonFileKeyValueStore(tmp_path)
        store.set("transactions_user_1", "[]")
        assert (tmp_path / "transactions_user_1.json").read_text(encoding="utf-8") == "[]"

    def test_keys_with_unsafe_characters(self, tmp_path):
        store = JsonFileKeyValueStore(tmp_path)
        store.set("a/b:c", "x")
        assert store.get("a/b:c") == "x"
        assert store.keys() == ["a/b:c"]
        assert len(list(tmp_path.iterdir())) == 1

    def test_data_dir_created_on_write(self, tmp_path):
        data_dir = tmp_path / "nested" / "dir"
        store = JsonFileKeyValueStore(data_dir)
        assert store.keys() == []
        store.set("k", "v")
        assert data_dir.is_dir()

    def test_survives_new_instance(self, tmp_path):
        JsonFileKeyValueStore(tmp_path).set("k", "v")
        assert JsonFileKeyValueStore(tmp_path).get("k") == "v"

    def test_empty_key_rejected(self, tmp_path):
        with pytest.raises(StorageError):
            JsonFileKeyValueStore(tmp_path).set("", "v")

    def test_no_temp_files_left(self, tmp_path):
        store = JsonFileKeyValueStore(tmp_path)
        store.set("k", "v1")
        store.set("k", "v2")
        assert [path.name for path in tmp_path.iterdir()] == ["k.json"]


class TestInMemoryStore:
    """Memory-specific behaviour."""

    def test_initial_data(self):
        store = InMemoryKeyValueStore({"k": "v"})
        assert store.get("k") == "v"

    def test_initial_data_is_copied(self):
        initial = {"k": "v"}
        store = InMemoryKeyValueStore(initial)
        store.set("k", "changed")
        assert initial["k"] == "v"


class TestJsonFileRetry:
    """Transient write failures are retried."""

    def test_retries_permission_error(self, tmp_path, monkeypatch):
        real_replace = os.replace
        calls = []

        def flaky_replace(src, dst):
            calls.append(dst)
            if len(calls) == 1:
                raise PermissionError("file in use")
            real_replace(src, dst)

        monkeypatch.setattr(os, "replace", flaky_replace)
        store = JsonFileKeyValueStore(tmp_path)
        store.set("k", "v")
        assert store.get("k") == "v"
        assert len(calls) == 2
        assert [path.name for path in tmp_path.iterdir()] == ["k.json"]

    def test_gives_up_with_storage_error(self, tmp_path, monkeypatch):
        def always_fails(src, dst):
            raise PermissionError("file in use")

        monkeypatch.setattr(os, "replace", always_fails)
        with pytest.raises(StorageError):
            JsonFileKeyValueStore(tmp_path).set("k", "v")
        assert list(tmp_path.iterdir()) == []
