from datetime import datetime, timedelta, timezone

import pytest
from starlette.testclient import TestClient

from ecotrack.catalog.loader import load_seed
from ecotrack.store.memory import MemoryStore


class FakeClock:
    """Deterministic clock: every call moves one second forward."""

    def __init__(self, start: datetime):
        self._now = start

    def __call__(self) -> datetime:
        self._now = self._now + timedelta(seconds=1)
        return self._now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2026, 1, 5, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def store(clock) -> MemoryStore:
    # A fresh store per test: POST endpoints mutate it.
    return MemoryStore.from_seed(load_seed(), clock=clock)


@pytest.fixture
def client(store):
    from ecotrack.api.app import app
    from ecotrack.api.routes import get_store

    app.dependency_overrides[get_store] = lambda: store
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
