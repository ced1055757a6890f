import re
from typing import Optional, Tuple

from domain.errors import ValidationError

DEFAULT_LIMIT = 10

_POSITIVE_INT = re.compile(r"^0*[1-9]\d*$", re.ASCII)


def _parse_positive_int(value: Optional[str], name: str) -> int:
    clean = (value or "").strip()
    if not _POSITIVE_INT.fullmatch(clean):
        raise ValidationError(f"Invalid {name}: {value}")
    return int(clean)


def validate_id(id_str: Optional[str]) -> int:
    """Parse a task id from a path segment; leading zeros are accepted."""
    return _parse_positive_int(id_str, "task ID")


def validate_pagination(page: Optional[str], limit: Optional[str]) -> Tuple[int, int]:
    page_num = 1 if page is None else _parse_positive_int(page, "page")
    limit_num = DEFAULT_LIMIT if limit is None else _parse_positive_int(limit, "limit")
    return page_num, limit_num


def validate_sort_order(order: Optional[str]) -> str:
    clean = (order or "asc").strip().lower()
    if clean not in ("asc", "desc"):
        raise ValidationError(f"Invalid sort order: {order}")
    return clean
