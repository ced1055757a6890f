"""Test id, pagination and sort-order parsing plus the date helpers."""
import pytest

from domain.dates import is_valid_date, is_valid_format
from domain.errors import ValidationError
from domain.validation import validate_id, validate_pagination, validate_sort_order


def test_validate_id():
    assert validate_id("7") == 7
    assert validate_id(" 007 ") == 7
    for bad in ["0", "-1", "abc", "1.5", ""]:
        with pytest.raises(ValidationError, match="Invalid task ID"):
            validate_id(bad)


def test_validate_pagination():
    assert validate_pagination(None, None) == (1, 10)
    assert validate_pagination("2", "5") == (2, 5)
    with pytest.raises(ValidationError, match="page"):
        validate_pagination("0", None)
    with pytest.raises(ValidationError, match="limit"):
        validate_pagination(None, "ten")


def test_validate_sort_order():
    assert validate_sort_order(None) == "asc"
    assert validate_sort_order("DESC") == "desc"
    with pytest.raises(ValidationError):
        validate_sort_order("sideways")


def test_date_helpers():
    assert is_valid_format("2024-12-31")
    assert not is_valid_format("2024-13-01")
    assert not is_valid_format("2024-01-01\n")
    assert is_valid_date("2000-02-29")
    assert not is_valid_date("1900-02-29")
