"""
Tests for FileDocumentStore.
"""

import pytest

from scriptreel.services.infrastructure.storage import (
    FileDocumentStore,
    get_document_store,
    reset_document_store,
)


@pytest.fixture
def store(tmp_path):
    return FileDocumentStore(str(tmp_path / "store"))


class TestFileDocumentStore:
    def test_create_and_get(self, store):
        doc_id = store.create("videos", {"owner_id": "u1", "title": "T"})
        assert store.get("videos", doc_id) == {"owner_id": "u1", "title": "T", "id": doc_id}

    def test_each_create_gets_a_new_id(self, store):
        first = store.create("videos", {"owner_id": "u1"})
        second = store.create("videos", {"owner_id": "u1"})
        assert first != second

    def test_query_by_field(self, store):
        store.create("videos", {"owner_id": "u1"})
        store.create("videos", {"owner_id": "u2"})
        store.create("videos", {"owner_id": "u1"})
        assert len(store.query("videos", "owner_id", "u1")) == 2
        assert store.query("scripts", "owner_id", "u1") == []

    def test_delete(self, store):
        doc_id = store.create("videos", {"owner_id": "u1"})
        assert store.delete("videos", doc_id) is True
        assert store.get("videos", doc_id) is None
        assert store.delete("videos", doc_id) is False

    def test_foreign_ids_never_touch_files(self, store):
        assert store.get("videos", "../secrets") is None
        assert store.delete("videos", "../secrets") is False

    def test_invalid_collection_name(self, store):
        with pytest.raises(ValueError):
            store.create("../videos", {})

    def test_unreadable_document_skipped_by_query(self, store):
        store.create("videos", {"owner_id": "u1"})
        (store.root / "videos" / "deadbeef.json").write_text("{broken", encoding="utf-8")
        assert len(store.query("videos", "owner_id", "u1")) == 1

    def test_failed_write_leaves_no_temp_file(self, store):
        data = {"owner_id": "u1"}
        data["self"] = data
        with pytest.raises(ValueError):
            store.create("videos", data)
        assert list((store.root / "videos").iterdir()) == []


class TestSingleton:
    def test_uses_store_data_dir(self, tmp_path, monkeypatch):
        monkeypatch.setenv("STORE_DATA_DIR", str(tmp_path / "elsewhere"))
        reset_document_store()
        store = get_document_store()
        assert store.root == tmp_path / "elsewhere"
        assert get_document_store() is store
