from __future__ import annotations

import json

import pytest

from src.evaluation_system.evaluation_system.storage.base import StorageEvent, read_json, write_json
from src.evaluation_system.evaluation_system.storage.collection import JsonCollection, JsonIdSet
from src.evaluation_system.evaluation_system.storage.json_file import JsonFileStorage
from src.evaluation_system.evaluation_system.storage.memory import MemoryStorage


@pytest.fixture(params=["memory", "json"])
def any_storage(request, tmp_path):
    if request.param == "memory":
        return MemoryStorage()
    return JsonFileStorage(tmp_path / "storage.json")


def test_set_get_remove(any_storage):
    any_storage.set_item("a", "1")
    assert any_storage.get_item("a") == "1"
    assert list(any_storage.keys()) == ["a"]

    any_storage.remove_item("a")
    assert any_storage.get_item("a") is None


def test_writes_emit_events(any_storage):
    events: list[StorageEvent] = []
    any_storage.subscribe(events.append)

    any_storage.set_item("k", "v1")
    any_storage.set_item("k", "v1")
    any_storage.set_item("k", "v2")
    any_storage.remove_item("k")
    any_storage.remove_item("k")

    assert events == [
        StorageEvent("k", None, "v1"),
        StorageEvent("k", "v1", "v2"),
        StorageEvent("k", "v2", None),
    ]


def test_clear_emits_keyless_event(any_storage):
    events = []
    any_storage.set_item("k", "v")
    any_storage.subscribe(events.append)
    any_storage.clear()
    assert events == [StorageEvent(None, None, None)]
    assert list(any_storage.keys()) == []


def test_unsubscribe_and_failing_listener():
    storage = MemoryStorage()
    seen = []

    def broken(_event):
        raise RuntimeError("boom")

    storage.subscribe(broken)
    unsubscribe = storage.subscribe(seen.append)
    storage.set_item("x", "1")
    unsubscribe()
    storage.set_item("x", "2")

    assert storage.get_item("x") == "2"
    assert len(seen) == 1


def test_json_file_is_shared_between_instances(tmp_path):
    path = tmp_path / "nested" / "storage.json"
    JsonFileStorage(path).set_item("accounts", "[]")
    assert JsonFileStorage(path).get_item("accounts") == "[]"
    assert json.loads(path.read_text(encoding="utf-8")) == {"accounts": "[]"}


def test_json_file_with_garbage_starts_empty(tmp_path):
    path = tmp_path / "storage.json"
    path.write_text("not json", encoding="utf-8")
    assert JsonFileStorage(path).keys() == []


def test_read_json_falls_back_on_corrupt_or_wrong_shape():
    storage = MemoryStorage({"bad": "{oops", "obj": '{"a": 1}'})
    assert read_json(storage, "bad", []) == []
    assert read_json(storage, "obj", []) == []
    assert read_json(storage, "obj", {}) == {"a": 1}
    assert read_json(storage, "missing", {}) == {}


def test_collection_upsert_and_delete():
    storage = MemoryStorage()
    rows = JsonCollection(storage, "employees")
    rows.put({"id": 1, "name": "A"})
    rows.put({"id": 2, "name": "B"})
    rows.put({"id": "1", "name": "A2"})

    assert [r["name"] for r in rows.all()] == ["A2", "B"]
    assert rows.get("2")["name"] == "B"
    assert rows.delete(1) is True
    assert rows.delete(1) is False
    assert read_json(storage, "employees", []) == [{"id": 2, "name": "B"}]


def test_id_set_is_idempotent():
    storage = MemoryStorage()
    ids = JsonIdSet(storage, "deletedEmployees")
    assert ids.add(1003) is True
    assert ids.add("1003") is False
    assert ids.contains(1003)
    assert ids.discard(1003) is True
    assert ids.all() == []


def test_write_json_round_trips_unicode():
    storage = MemoryStorage()
    write_json(storage, "notifications", [{"message": "Bienvenido, José"}])
    assert "José" in storage.get_item("notifications")
