"""Snapshot persistence adapter tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from tools.snapshot_store import (
    InMemorySnapshotStore,
    JSONSnapshotStore,
    SnapshotCorruptError,
    SnapshotStoreError,
    SQLiteSnapshotStore,
)

PAYLOAD = {
    "schemaVersion": 1,
    "clothingItems": [{"item_id": "1", "name": "Tee", "category": "tops"}],
    "outfits": [],
    "plannedOutfits": [],
    "outfitPhotos": ["file:///photos/look.jpg"],
}


@pytest.fixture(params=["memory", "json", "sqlite"])
def store(request: pytest.FixtureRequest, tmp_path: Path):
    if request.param == "json":
        return JSONSnapshotStore(tmp_path / "snapshots")
    if request.param == "sqlite":
        return SQLiteSnapshotStore(tmp_path / "wardrobe.db")
    return InMemorySnapshotStore()


def test_missing_slot_reads_as_none(store) -> None:
    assert store.read("wardrobe-storage") is None


def test_write_then_read_round_trip(store) -> None:
    store.write("wardrobe-storage", PAYLOAD)
    assert store.read("wardrobe-storage") == PAYLOAD
    assert store.read("other-slot") is None


def test_write_overwrites_previous_snapshot(store) -> None:
    store.write("wardrobe-storage", PAYLOAD)
    store.write("wardrobe-storage", {**PAYLOAD, "outfitPhotos": []})
    assert store.read("wardrobe-storage")["outfitPhotos"] == []


def test_clear_removes_slot(store) -> None:
    store.write("wardrobe-storage", PAYLOAD)
    assert store.clear("wardrobe-storage") is True
    assert store.read("wardrobe-storage") is None
    assert store.clear("wardrobe-storage") is False


def test_json_store_flags_undecodable_file(tmp_path: Path) -> None:
    store = JSONSnapshotStore(tmp_path)
    (tmp_path / "wardrobe-storage.json").write_text("{not json", encoding="utf-8")

    with pytest.raises(SnapshotCorruptError):
        store.read("wardrobe-storage")


def test_json_store_rejects_non_object_payload(tmp_path: Path) -> None:
    store = JSONSnapshotStore(tmp_path)
    (tmp_path / "wardrobe-storage.json").write_text("[1, 2, 3]", encoding="utf-8")

    with pytest.raises(SnapshotCorruptError):
        store.read("wardrobe-storage")


def test_json_store_leaves_no_temp_file(tmp_path: Path) -> None:
    store = JSONSnapshotStore(tmp_path)
    store.write("wardrobe-storage", PAYLOAD)
    assert sorted(p.name for p in tmp_path.iterdir()) == ["wardrobe-storage.json"]


def test_unencodable_payload_raises_store_error(store) -> None:
    store.write("wardrobe-storage", PAYLOAD)

    with pytest.raises(SnapshotStoreError):
        store.write("wardrobe-storage", {**PAYLOAD, "outfitPhotos": {"not", "json"}})
    assert store.read("wardrobe-storage") == PAYLOAD


def test_json_store_flags_non_utf8_file(tmp_path: Path) -> None:
    store = JSONSnapshotStore(tmp_path)
    (tmp_path / "wardrobe-storage.json").write_bytes(b"\xff\xfe")

    with pytest.raises(SnapshotCorruptError):
        store.read("wardrobe-storage")
