# tests/conftest.py

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from taskmanager.config import Settings
from taskmanager.database import init_db, make_engine, make_session_factory
from taskmanager.main import create_app
from taskmanager.task.task_service import TaskService
from taskmanager.task.task_store import TaskStore


@pytest.fixture()
def engine():
    """Fresh in-memory SQLite database per test."""
    eng = make_engine("sqlite://")
    init_db(eng)
    yield eng
    eng.dispose()


@pytest.fixture()
def store(engine) -> TaskStore:
    return TaskStore(make_session_factory(engine))


@pytest.fixture()
def service(store: TaskStore) -> TaskService:
    return TaskService(store)


@pytest.fixture()
def settings() -> Settings:
    return Settings(database_url="sqlite://")


@pytest.fixture()
def client(settings: Settings):
    app = create_app(settings)
    with TestClient(app) as c:
        yield c
