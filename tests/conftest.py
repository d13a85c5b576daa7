"""Pytest fixtures and configuration for taskboard tests."""

import pytest
from datetime import datetime, timedelta, timezone
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

from taskboard.database.database import Base
from taskboard.database import models  # noqa: F401
from taskboard.database.repository import TaskRepository
from taskboard.models.task import Task, TaskPriority, TaskStatus
from taskboard.service.locking import RecordLocks
from taskboard.service.task_store import TaskStore


# Use in-memory SQLite database for tests
TEST_DATABASE_URL = "sqlite:///:memory:"

FIXED_NOW = datetime(2026, 2, 6, 12, 0, 0, tzinfo=timezone.utc)


class MutableClock:
    """Test clock that only moves when told to."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


@pytest.fixture
def clock():
    """Clock fixed at FIXED_NOW."""
    return MutableClock(FIXED_NOW)


@pytest.fixture
def now(clock):
    return clock.now


@pytest.fixture(scope="function")
def db_session():
    """Create a database session for testing.

    Uses an in-memory SQLite database that is created fresh for each test.
    """
    engine = create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False
    )

    Base.metadata.create_all(bind=engine)

    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()

    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def task_repository(db_session: Session):
    """Create a TaskRepository instance for testing."""
    return TaskRepository(db_session)


@pytest.fixture
def task_store(task_repository, clock):
    """TaskStore on the test database with the test clock and private locks."""
    return TaskStore(task_repository, now_fn=clock, locks=RecordLocks(), lock_timeout=0.5)


@pytest.fixture
def sample_task_base(now):
    """Base task data for building test tasks.

    Returns a dict with default task attributes that can be overridden.
    """
    return {
        "id": 1,
        "title": "Test Task",
        "description": "Test description",
        "status": TaskStatus.TODO,
        "priority": TaskPriority.MEDIUM,
        "owner": "alice",
        "effort_hours": 4,
        "tags": ["backend"],
        "due_date": None,
        "started_at": None,
        "completed_at": None,
        "created_at": now - timedelta(hours=4),
        "updated_at": now - timedelta(hours=4),
    }


@pytest.fixture
def sample_task(sample_task_base):
    """Create a sample Task object for testing."""
    return Task(**sample_task_base)


@pytest.fixture
def unsaved_task_base(sample_task_base):
    """Task data without an id, ready for TaskRepository.create()."""
    return {**sample_task_base, "id": None}


@pytest.fixture
def test_client(db_session: Session, clock):
    """Create a FastAPI test client with overridden database and clock dependencies.

    The client is not entered as a context manager, so the app lifespan
    (logging setup and init_db against DATABASE_URL) does not run.
    """
    from taskboard.api.app import app, get_clock
    from taskboard.database.database import get_db

    def override_get_db():
        try:
            yield db_session
        finally:
            pass  # Don't close the session here, let the fixture handle it

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_clock] = lambda: clock

    yield TestClient(app)

    # Clean up dependency overrides
    app.dependency_overrides.clear()
