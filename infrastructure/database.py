import json
import logging
import os
import threading
from pathlib import Path
from typing import Dict, List

from domain.entities import Task
from domain.errors import StorageError

logger = logging.getLogger(__name__)

# One writer lock per backing file, shared by every Database opened on it.
_locks: Dict[str, threading.Lock] = {}
_locks_guard = threading.Lock()


def _lock_for(path: Path) -> threading.Lock:
    key = str(path.resolve())
    with _locks_guard:
        if key not in _locks:
            _locks[key] = threading.Lock()
        return _locks[key]


class Database:
    """Whole-file JSON store: the full task list is read and written at once."""

    def __init__(self, file_path: str = "data/tasks.json"):
        self.path = Path(file_path)
        self.lock = _lock_for(self.path)

    def _init_store(self):
        if self.path.exists():
            return
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            # exclusive create: never overwrite a store a writer has just put in place
            with open(self.path, "x", encoding="utf-8") as f:
                f.write("[]")
        except FileExistsError:
            return
        except OSError as e:
            logger.error(f"Failed to create task store at {self.path}: {e}")
            raise StorageError(f"Could not create task store: {e}") from e
        logger.info(f"Created empty task store at {self.path}")

    def load(self) -> List[Task]:
        self._init_store()
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return []
        except OSError as e:
            logger.error(f"Failed to read task store {self.path}: {e}")
            raise StorageError(f"Could not read task store: {e}") from e

        try:
            records = json.loads(raw or "[]")
        except json.JSONDecodeError as e:
            logger.error(f"Task store {self.path} is not valid JSON: {e}")
            raise StorageError(f"Task store is corrupt: {e}") from e
        if not isinstance(records, list):
            logger.error(f"Task store {self.path} does not hold a JSON array")
            raise StorageError("Task store is corrupt: expected a JSON array")

        try:
            return [Task.from_dict(record) for record in records]
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            logger.error(f"Task store {self.path} holds a malformed record: {e}")
            raise StorageError(f"Task store is corrupt: {e}") from e

    def save(self, tasks: List[Task]) -> None:
        json_str = json.dumps([task.to_dict() for task in tasks], ensure_ascii=False, indent=2)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(json_str, encoding="utf-8")
            os.replace(tmp_path, self.path)
        except OSError as e:
            logger.error(f"Failed to write task store {self.path}: {e}")
            raise StorageError(f"Could not write task store: {e}") from e
        logger.debug(f"Saved {len(tasks)} tasks to {self.path}")
