# interfaces/api.py
import logging
import os
from typing import List, Optional, Union

from fastapi import APIRouter, Depends

from application.queries import Page, TaskQuery
from application.use_cases import TaskUseCases
from domain.validation import validate_id, validate_pagination, validate_sort_order
from infrastructure.database import Database
from schemas.task import (
    BulkDeleteResponse,
    DeleteResponse,
    ErrorResponse,
    PaginatedTasks,
    TaskCreate,
    TaskResponse,
    TaskStatsResponse,
    TaskUpdate,
)

logger = logging.getLogger(__name__)

TASKS_FILE = os.getenv("TASKS_FILE", "data/tasks.json")

router = APIRouter(tags=["Tasks"])
db = Database(TASKS_FILE)
use_cases = TaskUseCases(db)

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
}


def get_use_cases() -> TaskUseCases:
    return use_cases


@router.get(
    "/tasks",
    response_model=Union[PaginatedTasks, List[TaskResponse]],
    response_model_exclude_none=True,
    responses=ERROR_RESPONSES,
)
def list_tasks(
    status: Optional[str] = None,
    priority: Optional[str] = None,
    sort: Optional[str] = None,
    order: Optional[str] = None,
    search: Optional[str] = None,
    page: Optional[str] = None,
    limit: Optional[str] = None,
    service: TaskUseCases = Depends(get_use_cases),
):
    """List tasks with optional filtering, search, sorting and pagination."""
    query = TaskQuery(
        status=status,
        priority=priority,
        search=search,
        sort=sort,
        order=validate_sort_order(order),
    )
    if page is not None or limit is not None:
        query.page, query.limit = validate_pagination(page, limit)
    logger.debug(f"Listing tasks with {query}")

    result = service.list_tasks(query)
    if isinstance(result, Page):
        return PaginatedTasks.from_page(result)
    return [TaskResponse.from_task(t) for t in result]


@router.get("/tasks/stats", response_model=TaskStatsResponse)
def get_stats(service: TaskUseCases = Depends(get_use_cases)):
    """Task counts grouped by status and by priority."""
    return TaskStatsResponse.from_stats(service.get_stats())


@router.get(
    "/tasks/{task_id}",
    response_model=TaskResponse,
    response_model_exclude_none=True,
    responses=ERROR_RESPONSES,
)
def get_task(task_id: str, service: TaskUseCases = Depends(get_use_cases)):
    return TaskResponse.from_task(service.get_task(validate_id(task_id)))


@router.post(
    "/tasks",
    status_code=201,
    response_model=TaskResponse,
    response_model_exclude_none=True,
    responses=ERROR_RESPONSES,
)
def create_task(task: TaskCreate, service: TaskUseCases = Depends(get_use_cases)):
    created_task = service.create_task(task)
    return TaskResponse.from_task(created_task)


@router.put(
    "/tasks/{task_id}",
    response_model=TaskResponse,
    response_model_exclude_none=True,
    responses=ERROR_RESPONSES,
)
def update_task(task_id: str, task: TaskUpdate, service: TaskUseCases = Depends(get_use_cases)):
    """Merge the sent fields over the stored task; anything not sent is kept."""
    updated_task = service.update_task(validate_id(task_id), task)
    return TaskResponse.from_task(updated_task)


@router.delete(
    "/tasks/{task_id}",
    response_model=DeleteResponse,
    response_model_exclude_none=True,
    responses=ERROR_RESPONSES,
)
def delete_task(task_id: str, service: TaskUseCases = Depends(get_use_cases)):
    removed = service.delete_task(validate_id(task_id))
    return DeleteResponse(message="Task deleted", task=TaskResponse.from_task(removed))


@router.delete("/tasks", response_model=BulkDeleteResponse)
def delete_completed_tasks(service: TaskUseCases = Depends(get_use_cases)):
    """Remove every completed task in one go."""
    count = service.delete_completed_tasks()
    return BulkDeleteResponse(message=f"Deleted {count} completed tasks", count=count)
