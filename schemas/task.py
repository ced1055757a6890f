from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from application.queries import Page, TaskStats
from domain.dates import is_valid_date, is_valid_format
from domain.entities import PRIORITIES, STATUSES, Task, TaskPriority, TaskStatus

MIN_TITLE = 3
MAX_TITLE = 100
MAX_DESC = 500


# ---------------------------------------------------------------------------
# Field checks, shared by create and update
# ---------------------------------------------------------------------------

def check_title(value: Any) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValueError("Title is required and must be a string")
    title = value.strip()
    if not MIN_TITLE <= len(title) <= MAX_TITLE:
        raise ValueError(f"Title must be {MIN_TITLE}-{MAX_TITLE} characters")
    return title


def check_description(value: Any) -> Optional[str]:
    if value is None or value == "":
        return None
    if not isinstance(value, str):
        raise ValueError("Description must be a string")
    if len(value) > MAX_DESC:
        raise ValueError(f"Description too long (max {MAX_DESC} characters)")
    return value.strip()


def check_choice(value: Any, choices: List[str], label: str) -> Optional[str]:
    # an empty string counts as not sent; anything else must match exactly
    if value is None or value == "":
        return None
    if not isinstance(value, str) or value not in choices:
        raise ValueError(f"Invalid {label} value: {value}")
    return value


def check_due_date(value: Any) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str) or not is_valid_format(value.strip()):
        raise ValueError(f"Invalid due date format (expected yyyy-mm-dd): {value}")
    if not is_valid_date(value.strip()):
        raise ValueError(f"Invalid calendar date: {value}")
    return value.strip()


def check_tags(value: Any) -> Optional[List[str]]:
    if value is None:
        return None
    if not isinstance(value, list) or not all(isinstance(tag, str) for tag in value):
        raise ValueError("Tags must be an array of strings")
    return list(value)


# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------

class TaskCreate(BaseModel):
    """New task payload; fields are checked in declaration order."""

    model_config = ConfigDict(populate_by_name=True)

    title: Optional[str] = Field(None, validate_default=True)
    description: str = ""
    status: str = TaskStatus.PENDING.value
    priority: str = TaskPriority.MEDIUM.value
    due_date: Optional[str] = Field(None, alias="dueDate")
    tags: List[str] = Field(default_factory=list)

    @field_validator("title", mode="before")
    @classmethod
    def _title(cls, value):
        return check_title(value)

    @field_validator("description", mode="before")
    @classmethod
    def _description(cls, value):
        return check_description(value) or ""

    @field_validator("status", mode="before")
    @classmethod
    def _status(cls, value):
        return check_choice(value, STATUSES, "status") or TaskStatus.PENDING.value

    @field_validator("priority", mode="before")
    @classmethod
    def _priority(cls, value):
        return check_choice(value, PRIORITIES, "priority") or TaskPriority.MEDIUM.value

    @field_validator("due_date", mode="before")
    @classmethod
    def _due_date(cls, value):
        return check_due_date(value)

    @field_validator("tags", mode="before")
    @classmethod
    def _tags(cls, value):
        return check_tags(value) or []


class TaskUpdate(BaseModel):
    """Partial update: every field optional, anything sent is held to the create rules."""

    model_config = ConfigDict(populate_by_name=True)

    title: Optional[str] = None
    description: Optional[str] = None
    status: Optional[str] = None
    priority: Optional[str] = None
    due_date: Optional[str] = Field(None, alias="dueDate")
    tags: Optional[List[str]] = None

    @field_validator("title", mode="before")
    @classmethod
    def _title(cls, value):
        return None if value is None else check_title(value)

    @field_validator("description", mode="before")
    @classmethod
    def _description(cls, value):
        return check_description(value)

    @field_validator("status", mode="before")
    @classmethod
    def _status(cls, value):
        return check_choice(value, STATUSES, "status")

    @field_validator("priority", mode="before")
    @classmethod
    def _priority(cls, value):
        return check_choice(value, PRIORITIES, "priority")

    @field_validator("due_date", mode="before")
    @classmethod
    def _due_date(cls, value):
        return check_due_date(value)

    @field_validator("tags", mode="before")
    @classmethod
    def _tags(cls, value):
        return check_tags(value)

    def changes(self) -> Dict[str, Any]:
        """Fields to merge over the stored task, keyed by Task attribute name."""
        return self.model_dump(exclude_none=True)


# ---------------------------------------------------------------------------
# Response models
# ---------------------------------------------------------------------------

class TaskResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    title: str
    description: str = ""
    status: str
    priority: str
    due_date: Optional[str] = Field(None, alias="dueDate")
    tags: List[str] = Field(default_factory=list)
    created_at: str = Field(..., alias="createdAt")
    updated_at: str = Field(..., alias="updatedAt")

    @classmethod
    def from_task(cls, task: Task) -> "TaskResponse":
        return cls.model_validate(task.to_dict())


class PaginationInfo(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    page: int
    limit: int
    total_tasks: int = Field(..., alias="totalTasks")
    total_pages: int = Field(..., alias="totalPages")


class PaginatedTasks(BaseModel):
    tasks: List[TaskResponse]
    pagination: PaginationInfo

    @classmethod
    def from_page(cls, page: Page) -> "PaginatedTasks":
        return cls(
            tasks=[TaskResponse.from_task(t) for t in page.tasks],
            pagination=PaginationInfo(
                page=page.page,
                limit=page.limit,
                total_tasks=page.total_tasks,
                total_pages=page.total_pages,
            ),
        )


class TaskStatsResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    status_counts: Dict[str, int] = Field(..., alias="statusCounts")
    priority_counts: Dict[str, int] = Field(..., alias="priorityCounts")

    @classmethod
    def from_stats(cls, stats: TaskStats) -> "TaskStatsResponse":
        return cls(status_counts=stats.status_counts, priority_counts=stats.priority_counts)


class DeleteResponse(BaseModel):
    message: str
    task: TaskResponse


class BulkDeleteResponse(BaseModel):
    message: str
    count: int


class ErrorResponse(BaseModel):
    error: str
    code: int
