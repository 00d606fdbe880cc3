from __future__ import annotations

from datetime import datetime, timezone

import pytest

from src.evaluation_system.evaluation_system.container import build_container
from src.evaluation_system.evaluation_system.fixtures.seed import seed_storage
from src.evaluation_system.evaluation_system.storage.memory import MemoryStorage


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2024, 3, 15, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def container(storage):
    c = build_container(storage=storage)
    seed_storage(c.storage, c.fixtures)
    return c


@pytest.fixture
def app(container, monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    from src.evaluation_system.evaluation_system.main import create_app

    return create_app(container)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def login(client):
    def _login(email: str, password: str):
        return client.post("/api/auth/login", json={"email": email, "password": password})

    return _login
