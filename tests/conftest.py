"""
Shared fixtures: a clock the tests move by hand, fresh stores for both
backends, and an API client over an app built around the in-memory store.
"""

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.main import create_app
from app.services.sql_storage import SqlStorage
from app.services.storage import MemStorage

START = datetime(2026, 10, 14, 12, 0, 0, tzinfo=timezone.utc)  # a Wednesday


class FrozenClock:
    def __init__(self, now: datetime = START):
        self.current = now

    def __call__(self) -> datetime:
        return self.current

    def advance(self, **kwargs) -> datetime:
        self.current += timedelta(**kwargs)
        return self.current


@pytest.fixture
def clock():
    return FrozenClock()


@pytest.fixture
def settings():
    return Settings(bcrypt_rounds=4, admin_password="s3cret")


@pytest.fixture
def mem_storage(clock):
    return MemStorage(clock=clock, bcrypt_rounds=4)


@pytest.fixture
def sql_storage(clock):
    return SqlStorage("sqlite://", clock=clock, bcrypt_rounds=4)


@pytest.fixture(params=["memory", "sql"])
def storage(request, clock):
    """Runs a test once per backend."""
    if request.param == "sql":
        return SqlStorage("sqlite://", clock=clock, bcrypt_rounds=4)
    return MemStorage(clock=clock, bcrypt_rounds=4)


@pytest.fixture
def api_storage(clock):
    return MemStorage(clock=clock, bcrypt_rounds=4)


@pytest.fixture
def client(api_storage, settings):
    app = create_app(storage=api_storage, settings=settings)
    with TestClient(app) as test_client:
        yield test_client
