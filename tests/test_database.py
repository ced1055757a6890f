"""Test the JSON file store."""
from pathlib import Path

import pytest

from domain.entities import Task
from domain.errors import StorageError
from infrastructure.database import Database


def test_load_creates_missing_store(tmp_path: Path):
    path = tmp_path / "nested" / "tasks.json"
    db = Database(str(path))

    assert db.load() == []
    assert path.read_text(encoding="utf-8") == "[]"


def test_save_then_load(tmp_path: Path):
    db = Database(str(tmp_path / "tasks.json"))
    task = Task(
        id=1,
        title="Buy milk",
        created_at="2024-01-01T00:00:00.000Z",
        updated_at="2024-01-01T00:00:00.000Z",
        due_date="2024-01-02",
        tags=["shop"],
    )
    db.save([task])

    assert db.load() == [task]
    assert '\n  {\n    "id": 1,' in db.path.read_text(encoding="utf-8")
    assert not (tmp_path / "tasks.json.tmp").exists()


def test_empty_file_reads_as_empty(tmp_path: Path):
    path = tmp_path / "tasks.json"
    path.write_text("", encoding="utf-8")
    assert Database(str(path)).load() == []


@pytest.mark.parametrize("content", ["{not json", '{"id": 1}', '[{"title": "no id"}]'])
def test_corrupt_store_raises(tmp_path: Path, content):
    path = tmp_path / "tasks.json"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(StorageError):
        Database(str(path)).load()


def test_same_file_shares_lock(tmp_path: Path):
    path = str(tmp_path / "tasks.json")
    assert Database(path).lock is Database(path).lock
    assert Database(path).lock is not Database(str(tmp_path / "other.json")).lock


def test_init_never_overwrites_existing_store(tmp_path: Path, monkeypatch):
    path = tmp_path / "tasks.json"
    db = Database(str(path))
    db.save([Task(id=1, title="Kept", created_at="t", updated_at="t")])

    # simulate a reader that checked for the file just before a writer replaced it
    monkeypatch.setattr(Path, "exists", lambda self: False)
    assert [t.title for t in db.load()] == ["Kept"]
