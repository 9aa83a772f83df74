import json
from datetime import datetime, timedelta

import pytest

from leverlog.io.entry_store import EntryNotFound, EntryStore, StoreError


@pytest.fixture
def store_path(tmp_path):
    return str(tmp_path / "data" / "entries.json")


def test_missing_file_is_empty_store(store_path):
    store = EntryStore(store_path)
    assert len(store) == 0
    assert store.entries() == []
    assert store.most_recent_pose() is None


def test_insert_persists_and_reloads(store_path):
    store = EntryStore(store_path)
    e = store.insert(16.2, [235.0, -145.0, -35.0, 70.0], date=datetime(2025, 11, 4, 8, 30))

    reloaded = EntryStore(store_path)
    got = reloaded.get(e.id)
    assert got.time_under_tension == 16.2
    assert got.joint_angles == [235.0, -145.0, -35.0, 70.0]
    assert got.date == datetime(2025, 11, 4, 8, 30)

    with open(store_path, encoding="utf-8") as f:
        doc = json.load(f)
    assert doc["version"] == 1 and len(doc["entries"]) == 1


def test_entries_sorted_newest_first(store_path):
    store = EntryStore(store_path)
    base = datetime(2025, 11, 1, 12, 0)
    for days in (0, 3, 1):
        store.insert(10.0 + days, [], date=base + timedelta(days=days))
    assert [e.time_under_tension for e in store.entries()] == [13.0, 11.0, 10.0]


def test_most_recent_pose_requires_four_angles(store_path):
    store = EntryStore(store_path)
    store.insert(5.0, [200.0, -120.0, 0.0, 10.0], date=datetime(2025, 1, 1))
    assert store.most_recent_pose() == [200.0, -120.0, 0.0, 10.0]
    store.insert(5.0, [1.0, 2.0, 3.0], date=datetime(2025, 1, 2))
    assert store.most_recent_pose() is None


def test_update_changes_only_given_fields(store_path):
    store = EntryStore(store_path)
    e = store.insert(30.0, [235.0, -145.0, -35.0, 70.0])
    store.update(e.id, time_under_tension=31.5)
    assert store.get(e.id).time_under_tension == 31.5
    assert store.get(e.id).joint_angles == [235.0, -145.0, -35.0, 70.0]

    store.update(e.id, joint_angles=[200.0, -100.0, 0.0, 0.0])
    reloaded = EntryStore(store_path).get(e.id)
    assert (reloaded.time_under_tension, reloaded.joint_angles) == (31.5, [200.0, -100.0, 0.0, 0.0])
    assert reloaded.date == e.date


def test_delete(store_path):
    store = EntryStore(store_path)
    keep = store.insert(1.0, [])
    gone = store.insert(2.0, [])
    store.delete(gone.id)
    assert [e.id for e in EntryStore(store_path).entries()] == [keep.id]


def test_unknown_id_raises_entry_not_found(store_path):
    store = EntryStore(store_path)
    with pytest.raises(EntryNotFound):
        store.get("nope")
    with pytest.raises(EntryNotFound):
        store.delete("nope")
    with pytest.raises(KeyError):
        store.update("nope", time_under_tension=1.0)


def test_negative_duration_rejected(store_path):
    store = EntryStore(store_path)
    with pytest.raises(StoreError):
        store.insert(-1.0, [])
    e = store.insert(1.0, [])
    with pytest.raises(StoreError):
        store.update(e.id, time_under_tension=-0.5)
    assert store.get(e.id).time_under_tension == 1.0


def test_corrupt_file_raises_store_error(tmp_path):
    path = tmp_path / "entries.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(StoreError):
        EntryStore(str(path))


def test_invalid_document_raises_store_error(tmp_path):
    path = tmp_path / "entries.json"
    path.write_text(json.dumps({"version": 1, "entries": [{"time_under_tension": "lots"}]}), encoding="utf-8")
    with pytest.raises(StoreError):
        EntryStore(str(path))


def test_writes_leave_no_temp_files(store_path, tmp_path):
    store = EntryStore(store_path)
    store.insert(1.0, [])
    store.insert(2.0, [])
    assert sorted(p.name for p in (tmp_path / "data").iterdir()) == ["entries.json"]
