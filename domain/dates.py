import re
from datetime import date, datetime, timezone

DATE_PATTERN = re.compile(r"^(\d{4})-(0[1-9]|1[0-2])-(0[1-9]|[12]\d|3[01])$", re.ASCII)  # yyyy-mm-dd


def utc_now_iso() -> str:
    """Current UTC time as ISO-8601 with milliseconds, e.g. 2024-05-01T10:20:30.123Z."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def format_date(value: datetime) -> str:
    return value.strftime("%Y-%m-%d")


def format_time(value: datetime) -> str:
    return value.strftime("%H:%M:%S")


def is_valid_format(date_str: str) -> bool:
    return DATE_PATTERN.fullmatch(date_str) is not None


def is_valid_date(date_str: str) -> bool:
    # assumes date_str already passed is_valid_format
    year, month, day = (int(part) for part in date_str.split("-"))
    try:
        parsed = date(year, month, day)
    except ValueError:
        return False
    return (parsed.year, parsed.month, parsed.day) == (year, month, day)
