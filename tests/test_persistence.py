import json
from pathlib import Path

import pytest

from taskorganizer.state.persistence import JsonFileStore, Persistence
from taskorganizer.state.tasks import STORE_KEY, TaskStore
from taskorganizer.utils.logger import EventLogger


def test_json_file_store_round_trip(tmp_path: Path) -> None:
    path = tmp_path / "data" / "tasks.json"
    store = JsonFileStore(path)

    # Missing file reads as empty
    assert store.get(STORE_KEY) is None

    store.set(STORE_KEY, "[]")
    store.set("other", "value")

    assert store.get(STORE_KEY) == "[]"
    assert json.loads(path.read_text(encoding="utf-8")) == {STORE_KEY: "[]", "other": "value"}
    assert not list(path.parent.glob("*.tmp"))


def test_json_file_store_rejects_damaged_file(tmp_path: Path) -> None:
    path = tmp_path / "tasks.json"
    store = JsonFileStore(path)

    for content in (b"{not json", b"[1, 2]", b'{"todo_tasks": "\xff\xfe"}'):
        path.write_bytes(content)
        with pytest.raises(ValueError):
            store.get(STORE_KEY)

    path.write_text(json.dumps({STORE_KEY: [1, 2]}), encoding="utf-8")
    with pytest.raises(ValueError):
        store.get(STORE_KEY)


def test_load_json_swallows_bad_encoding(tmp_path: Path) -> None:
    path = tmp_path / "latin1.json"
    path.write_bytes(b'{"todo_tasks": "\xff\xfe"}')

    assert Persistence.load_json(path) == {}


def test_load_json_non_object(tmp_path: Path) -> None:
    path = tmp_path / "list.json"
    path.write_text("[1, 2, 3]", encoding="utf-8")

    assert Persistence.load_json(path) == {}


def test_task_store_survives_restart(tmp_path: Path) -> None:
    path = tmp_path / "tasks.json"
    store = TaskStore(JsonFileStore(path), clock=lambda: 0.0)
    store.create("Buy milk")
    store.create("Write report")
    store.toggle_complete(2)
    store.rename(1, "Buy oat milk")

    reopened = TaskStore(JsonFileStore(path), clock=lambda: 0.0)

    assert [t.to_dict() for t in reopened.list_all()] == [
        {"id": 1, "text": "Buy oat milk", "completed": False},
        {"id": 2, "text": "Write report", "completed": True},
    ]


def test_event_logger_writes_json_lines(tmp_path: Path) -> None:
    log_file = tmp_path / "logs" / "events.log"
    logger = EventLogger(log_file)
    store = TaskStore(JsonFileStore(tmp_path / "tasks.json"), logger=logger, clock=lambda: 0.0)
    store.create("Buy milk")

    lines = [json.loads(line) for line in log_file.read_text(encoding="utf-8").splitlines()]

    assert [entry["event"] for entry in lines] == ["store_loaded", "task_created"]
    assert lines[1]["task_id"] == 1
    assert "timestamp" in lines[1]


def test_event_logger_truncates_raw_payload() -> None:
    logger = EventLogger()
    logger.log_store_read_failed("bad", raw="x" * 1000)

    assert len(logger.recent[-1]["raw"]) == 200


def test_non_utf8_file_loads_empty_and_is_logged(tmp_path: Path) -> None:
    path = tmp_path / "tasks.json"
    path.write_bytes(b'{"todo_tasks": "\xff\xfe"}')
    logger = EventLogger()

    store = TaskStore(JsonFileStore(path), logger=logger, clock=lambda: 0.0)

    assert store.list_all() == []
    assert logger.events() == ["store_read_failed", "store_loaded"]


def test_corrupt_file_is_logged_and_kept_aside(tmp_path: Path) -> None:
    path = tmp_path / "tasks.json"
    path.write_text("{not json", encoding="utf-8")
    logger = EventLogger()

    store = TaskStore(JsonFileStore(path), logger=logger, clock=lambda: 0.0)
    assert store.list_all() == []
    assert "store_read_failed" in logger.events()

    assert store.create("Buy milk") is not None
    assert store.persist() is True
    assert "store_write_failed" not in logger.events()
    assert (tmp_path / "tasks.json.corrupt").read_text(encoding="utf-8") == "{not json"
    assert json.loads(json.loads(path.read_text(encoding="utf-8"))[STORE_KEY]) == [
        {"id": 1, "text": "Buy milk", "completed": False}
    ]


def test_non_string_value_is_logged(tmp_path: Path) -> None:
    path = tmp_path / "tasks.json"
    path.write_text(json.dumps({STORE_KEY: [{"id": 1, "text": "a", "completed": False}]}), encoding="utf-8")
    logger = EventLogger()

    store = TaskStore(JsonFileStore(path), logger=logger, clock=lambda: 0.0)

    assert store.list_all() == []
    assert "store_read_failed" in logger.events()


def test_deeply_nested_file_loads_empty(tmp_path: Path) -> None:
    path = tmp_path / "tasks.json"
    path.write_text("[" * 100000 + "]" * 100000, encoding="utf-8")
    logger = EventLogger()

    store = TaskStore(JsonFileStore(path), logger=logger, clock=lambda: 0.0)

    assert store.list_all() == []
    assert "store_read_failed" in logger.events()


def test_event_logger_unwritable_directory(tmp_path: Path) -> None:
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("", encoding="utf-8")

    logger = EventLogger(blocker / "logs" / "events.log")
    store = TaskStore(JsonFileStore(tmp_path / "tasks.json"), logger=logger, clock=lambda: 0.0)
    store.create("Buy milk")

    assert logger.events() == ["store_loaded", "task_created"]
    assert len(store) == 1
