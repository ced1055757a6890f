import math
import re
import unicodedata
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Union

from domain.entities import Task
from domain.errors import ValidationError

_DIGITS = re.compile(r"(\d+)", re.ASCII)


@dataclass
class TaskQuery:
    status: Optional[str] = None
    priority: Optional[str] = None
    search: Optional[str] = None
    sort: Optional[str] = None
    order: str = "asc"
    page: Optional[int] = None
    limit: Optional[int] = None

    @property
    def paginated(self) -> bool:
        return self.page is not None or self.limit is not None


@dataclass
class Page:
    tasks: List[Task]
    page: int
    limit: int
    total_tasks: int
    total_pages: int


@dataclass
class TaskStats:
    status_counts: Dict[str, int] = field(default_factory=dict)
    priority_counts: Dict[str, int] = field(default_factory=dict)


def filter_tasks(tasks: List[Task], status: Optional[str] = None, priority: Optional[str] = None) -> List[Task]:
    if status:
        tasks = [t for t in tasks if t.status == status]
    if priority:
        tasks = [t for t in tasks if t.priority == priority]
    return tasks


def search_tasks(tasks: List[Task], term: Optional[str]) -> List[Task]:
    """Case-insensitive substring match on title or description."""
    if not term:
        return tasks
    needle = term.lower()
    return [
        t for t in tasks
        if needle in t.title.lower() or (t.description and needle in t.description.lower())
    ]


def _fold(text: str) -> str:
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(c for c in decomposed if not unicodedata.combining(c)).casefold()


def natural_key(value: Any) -> Tuple[Tuple[int, int, str], ...]:
    """Sort key comparing digit runs numerically and text without case or accents."""
    if value is None:
        text = ""
    elif isinstance(value, list):
        text = ",".join(str(v) for v in value)
    else:
        text = str(value)

    key = []
    for chunk in _DIGITS.split(text):
        if not chunk:
            continue
        # str.isdigit() also accepts "²" and "①", which int() rejects
        if _DIGITS.fullmatch(chunk):
            key.append((0, int(chunk), ""))
        else:
            key.append((1, 0, _fold(chunk)))
    return tuple(key)


def sort_tasks(tasks: List[Task], sort_by: Optional[str], order: str = "asc") -> List[Task]:
    if not sort_by:
        return tasks
    return sorted(
        tasks,
        key=lambda t: natural_key(t.to_dict().get(sort_by)),
        reverse=(order == "desc"),
    )


def paginate_tasks(tasks: List[Task], page: int = 1, limit: int = 10) -> Page:
    total = len(tasks)
    total_pages = math.ceil(total / limit)
    if total > 0 and page > total_pages:
        raise ValidationError(f"Page {page} out of range (total pages: {total_pages})")
    start = (page - 1) * limit
    return Page(
        tasks=tasks[start:start + limit],
        page=page,
        limit=limit,
        total_tasks=total,
        total_pages=total_pages,
    )


def compute_stats(tasks: List[Task]) -> TaskStats:
    return TaskStats(
        status_counts=dict(Counter(t.status for t in tasks)),
        priority_counts=dict(Counter(t.priority for t in tasks)),
    )


def run_query(tasks: List[Task], query: TaskQuery) -> Union[List[Task], Page]:
    """Filter, search, sort, then paginate when a page or limit was requested."""
    result = filter_tasks(tasks, status=query.status, priority=query.priority)
    result = search_tasks(result, query.search)
    result = sort_tasks(result, query.sort, query.order)
    if query.paginated:
        return paginate_tasks(result, page=query.page or 1, limit=query.limit or 10)
    return result
