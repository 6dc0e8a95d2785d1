from datetime import date

import pytest
from fastapi.testclient import TestClient

from dailytasks.core.backend import get_backend, get_socket_backend
from dailytasks.core.config import settings
from dailytasks.core.websocket import manager
from dailytasks.main import app
from dailytasks.schemas.task import TaskCreate

from .fakes import TEST_JWT_SECRET, FakeSupabase


@pytest.fixture(autouse=True)
def test_settings(monkeypatch):
    """Deterministic settings for every test; no .env, no log files."""
    monkeypatch.setattr(settings, "SUPABASE_JWT_SECRET", TEST_JWT_SECRET)
    monkeypatch.setattr(settings, "SUPABASE_JWT_AUDIENCE", "authenticated")
    monkeypatch.setattr(settings, "TASKS_TABLE", "tasks")
    monkeypatch.setattr(settings, "OWNERSHIP_ENABLED", True)
    monkeypatch.setattr(settings, "LOG_TO_FILE", False)
    return settings


@pytest.fixture()
def backend() -> FakeSupabase:
    return FakeSupabase()


@pytest.fixture()
def api(backend):
    app.dependency_overrides[get_backend] = lambda: backend
    app.dependency_overrides[get_socket_backend] = lambda: backend
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
        manager.connections.clear()


@pytest.fixture()
def new_task():
    def build(title="Essay draft", description="Chapter 2", deadline=date(2026, 11, 1), **kw):
        return TaskCreate(title=title, description=description, deadline=deadline, **kw)

    return build
