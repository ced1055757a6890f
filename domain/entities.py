from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class TaskStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


class TaskPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


STATUSES = [s.value for s in TaskStatus]
PRIORITIES = [p.value for p in TaskPriority]


@dataclass
class Task:
    id: int
    title: str
    created_at: str
    updated_at: str
    description: str = ""
    status: str = TaskStatus.PENDING.value
    priority: str = TaskPriority.MEDIUM.value
    due_date: Optional[str] = None
    tags: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Persisted shape: camelCase keys, dueDate left out when unset."""
        data: Dict[str, Any] = {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "status": self.status,
            "priority": self.priority,
        }
        if self.due_date is not None:
            data["dueDate"] = self.due_date
        data["tags"] = list(self.tags)
        data["createdAt"] = self.created_at
        data["updatedAt"] = self.updated_at
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Task":
        return cls(
            id=int(data["id"]),
            title=data.get("title", ""),
            description=data.get("description") or "",
            status=data.get("status") or TaskStatus.PENDING.value,
            priority=data.get("priority") or TaskPriority.MEDIUM.value,
            due_date=data.get("dueDate"),
            tags=list(data.get("tags") or []),
            created_at=data.get("createdAt", ""),
            updated_at=data.get("updatedAt", ""),
        )
