from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Iterator

import pytest
from fastapi.testclient import TestClient

from gestionlait.core.ids import CounterGenerator
from gestionlait.core.settings import Settings
from gestionlait.db import MemoryBackend, Store
from gestionlait.main import create_app
from gestionlait.services.records import RecordService
from gestionlait.services.sessions import SessionStore
from gestionlait.services.statistics import StatisticsService

PASSWORD = "secret"


class Clock:
    """Horloge contrôlable pour les sessions."""

    def __init__(self) -> None:
        self.current = datetime(2024, 3, 1, 8, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.current

    def advance(self, **kwargs: float) -> None:
        self.current += timedelta(**kwargs)


@pytest.fixture
def backend() -> MemoryBackend:
    return MemoryBackend()


@pytest.fixture
def store(backend: MemoryBackend) -> Store:
    s = Store(backend)
    s.load()
    return s


@pytest.fixture
def records(store: Store) -> RecordService:
    return RecordService(store, ids=CounterGenerator(), now=lambda: "2024-03-01T08:00:00+00:00")


@pytest.fixture
def stats(store: Store) -> StatisticsService:
    return StatisticsService(store)


@pytest.fixture
def clock() -> Clock:
    return Clock()


def _settings(**overrides) -> Settings:
    values = dict(ADMIN_USERNAME="admin", ADMIN_PASSWORD=PASSWORD, AUTOSAVE_INTERVAL_SECONDS=0)
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def make_settings():
    return _settings


@pytest.fixture
def client(backend: MemoryBackend, clock: Clock) -> Iterator[TestClient]:
    app = create_app(
        _settings(),
        backend=backend,
        sessions=SessionStore(ttl=timedelta(hours=24), now=clock),
    )
    with TestClient(app) as c:
        yield c


@pytest.fixture
def auth_client(client: TestClient) -> TestClient:
    response = client.post("/api/auth/login", json={"username": "admin", "password": PASSWORD})
    assert response.status_code == 200
    return client


@pytest.fixture
def open_client(backend: MemoryBackend) -> Iterator[TestClient]:
    """Variante non sécurisée (AUTH_ENABLED=false)."""
    app = create_app(_settings(AUTH_ENABLED=False), backend=backend)
    with TestClient(app) as c:
        yield c
