import logging
from dataclasses import replace
from typing import List, Optional, Union

from application.queries import Page, TaskQuery, TaskStats, compute_stats, run_query
from domain.dates import utc_now_iso
from domain.entities import Task, TaskStatus
from domain.errors import NotFoundError
from infrastructure.database import Database
from schemas.task import TaskCreate, TaskUpdate

logger = logging.getLogger(__name__)


class TaskUseCases:
    """Load, then query or mutate and persist, once per call.

    Writes hold the store's lock across the whole load-mutate-save sequence.
    """

    def __init__(self, db: Database):
        self.db = db

    def list_tasks(self, query: Optional[TaskQuery] = None) -> Union[List[Task], Page]:
        return run_query(self.db.load(), query or TaskQuery())

    def get_stats(self) -> TaskStats:
        return compute_stats(self.db.load())

    def get_task(self, task_id: int) -> Task:
        for task in self.db.load():
            if task.id == task_id:
                return task
        raise NotFoundError(f"Task not found: {task_id}")

    def create_task(self, data: TaskCreate) -> Task:
        with self.db.lock:
            tasks = self.db.load()
            now = utc_now_iso()
            task = Task(
                id=max((t.id for t in tasks), default=0) + 1,
                title=data.title,
                description=data.description,
                status=data.status,
                priority=data.priority,
                due_date=data.due_date,
                tags=list(data.tags),
                created_at=now,
                updated_at=now,
            )
            tasks.append(task)
            self.db.save(tasks)
        logger.info(f"Created task {task.id}: {task.title}")
        return task

    def update_task(self, task_id: int, data: TaskUpdate) -> Task:
        changes = data.changes()
        with self.db.lock:
            tasks = self.db.load()
            index = self._index_of(tasks, task_id)
            current = tasks[index]
            updated = replace(current, **changes)
            # updatedAt never moves backwards, even if the clock does
            updated.updated_at = max(utc_now_iso(), current.updated_at)
            tasks[index] = updated
            self.db.save(tasks)
        logger.info(f"Updated task {task_id}: {sorted(changes)}")
        return updated

    def delete_task(self, task_id: int) -> Task:
        with self.db.lock:
            tasks = self.db.load()
            index = self._index_of(tasks, task_id)
            removed = tasks.pop(index)
            self.db.save(tasks)
        logger.info(f"Deleted task {task_id}")
        return removed

    def delete_completed_tasks(self) -> int:
        with self.db.lock:
            tasks = self.db.load()
            remaining = [t for t in tasks if t.status != TaskStatus.COMPLETED.value]
            count = len(tasks) - len(remaining)
            if count:
                self.db.save(remaining)
        logger.info(f"Deleted {count} completed tasks")
        return count

    @staticmethod
    def _index_of(tasks: List[Task], task_id: int) -> int:
        for index, task in enumerate(tasks):
            if task.id == task_id:
                return index
        raise NotFoundError(f"Task not found for ID {task_id}")
