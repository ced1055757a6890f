# tests/conftest.py
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from application.use_cases import TaskUseCases
from infrastructure.database import Database
from interfaces.api import get_use_cases
from main import app


@pytest.fixture()
def db(tmp_path: Path) -> Database:
    return Database(str(tmp_path / "data" / "tasks.json"))


@pytest.fixture()
def use_cases(db: Database) -> TaskUseCases:
    return TaskUseCases(db)


@pytest.fixture()
def client(use_cases: TaskUseCases):
    """TestClient whose routes run against a store under tmp_path."""
    app.dependency_overrides[get_use_cases] = lambda: use_cases
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
