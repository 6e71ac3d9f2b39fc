"""Pytest configuration and fixtures."""

import os

# Point the module-level engine and local storage away from the working tree
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("LOCAL_STORAGE_PATH", "")
os.environ.setdefault("SECRET_KEY", "test-secret-key-with-at-least-32-characters")

import pytest
from typing import Generator

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from app.core.local_storage import LocalStorage
from app.db.base import Base
from app.db.session import build_session_factory
from app.main import app
from app.services.app_state import AppState, get_app_state
from app.services.record_store import RecordStore
from app.services.remote_writer import RemoteWriter

# Use in-memory SQLite for tests
TEST_DATABASE_URL = "sqlite:///:memory:"

PASSCODES = {
    "s1": "1234",     # John Doe, MANAGER
    "admin": "0000",  # Super Admin, ADMIN
    "s2": "1111",     # Jane Smith, CHEF
    "s3": "2222",     # Mike Johnson, WAITER
}


class FakeTimer:
    """Stand-in for threading.Timer that only fires when told to."""

    def __init__(self, interval, function):
        self.interval = interval
        self.function = function
        self.started = False
        self.cancelled = False

    def start(self):
        self.started = True

    def cancel(self):
        self.cancelled = True

    def fire(self):
        if self.started and not self.cancelled:
            self.function()

    def run_late(self):
        """Run the callback even if cancelled, like a thread already past its wait."""
        self.function()


class FakeTimerFactory:
    def __init__(self):
        self.timers = []

    def __call__(self, interval, function):
        timer = FakeTimer(interval, function)
        self.timers.append(timer)
        return timer

    @property
    def live(self):
        return [t for t in self.timers if t.started and not t.cancelled]


@pytest.fixture(scope="function")
def db_engine():
    """Create a test database engine."""
    engine = create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def store(db_engine) -> RecordStore:
    return RecordStore(build_session_factory(db_engine))


@pytest.fixture(scope="function")
def writer() -> RemoteWriter:
    """Inline writer: remote writes complete before the call returns."""
    return RemoteWriter(workers=0, max_attempts=3, backoff_seconds=0, sleep=lambda s: None)


@pytest.fixture
def storage() -> LocalStorage:
    return LocalStorage(None)


@pytest.fixture
def timers() -> FakeTimerFactory:
    return FakeTimerFactory()


@pytest.fixture(scope="function")
def state(store, writer, storage, timers) -> Generator[AppState, None, None]:
    """A loaded application state over the seeded in-memory store."""
    app_state = AppState(store, writer, storage, timer_factory=timers)
    app_state.load()
    yield app_state
    app_state.shutdown()


@pytest.fixture(scope="function")
def client(state: AppState) -> Generator[TestClient, None, None]:
    """Create a test client bound to the test state."""
    app.dependency_overrides[get_app_state] = lambda: state
    # Disable rate limiters during tests to avoid flaky failures
    from app.core.rate_limit import limiter
    limiter.enabled = False
    # Don't raise server exceptions so we can test error status codes
    test_client = TestClient(app, raise_server_exceptions=False)
    yield test_client
    limiter.enabled = True
    app.dependency_overrides.clear()


def login(client: TestClient, staff_id: str, passcode: str = None) -> dict:
    """Sign in through the API and return authentication headers."""
    response = client.post(
        "/api/v1/auth/login",
        json={"id": staff_id, "passcode": passcode or PASSCODES[staff_id]},
    )
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


@pytest.fixture
def manager_headers(client) -> dict:
    return login(client, "s1")


@pytest.fixture
def admin_headers(client) -> dict:
    return login(client, "admin")


@pytest.fixture
def chef_headers(client) -> dict:
    return login(client, "s2")


@pytest.fixture
def waiter_headers(client) -> dict:
    return login(client, "s3")


@pytest.fixture
def login_as(client):
    """Sign in as any staff id; returns the headers for that session."""
    def _login(staff_id: str, passcode: str = None) -> dict:
        return login(client, staff_id, passcode)
    return _login
