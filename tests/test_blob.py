import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import pytest

from section_notes.store.blob import JsonBlobStore, atomic_write_text


def test_missing_key_reads_none(tmp_path):
    store = JsonBlobStore(tmp_path, "notes")
    assert store.get_json("sections") is None


def test_set_then_get(tmp_path):
    store = JsonBlobStore(tmp_path, "notes")
    store.set_json("sections", [{"id": "a", "title": "Ünïcode"}])

    assert store.get_json("sections") == [{"id": "a", "title": "Ünïcode"}]
    assert (tmp_path / "notes" / "sections.json").exists()


def test_overwrite_leaves_no_temp_files(tmp_path):
    store = JsonBlobStore(tmp_path, "notes")
    store.set_json("sections", [1])
    store.set_json("sections", [2])

    assert store.get_json("sections") == [2]
    assert [p.name for p in store.directory.iterdir()] == ["sections.json"]


def test_delete(tmp_path):
    store = JsonBlobStore(tmp_path, "notes")
    store.set_json("sections", [])
    assert store.delete("sections") is True
    assert store.delete("sections") is False


@pytest.mark.parametrize("key", ["../escape", "a/b", ""])
def test_bad_keys_rejected(tmp_path, key):
    store = JsonBlobStore(tmp_path, "notes")
    with pytest.raises(ValueError):
        store.get_json(key)


def test_atomic_write_creates_parent(tmp_path):
    target = tmp_path / "deep" / "dir" / "f.txt"
    atomic_write_text(target, "hello")
    assert target.read_text(encoding="utf-8") == "hello"
