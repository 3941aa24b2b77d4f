"""Shared fixtures: temporary database, API client and a manual timer."""

from __future__ import annotations

import os
import sys
import tempfile
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

_TEST_DB_DIR = Path(tempfile.mkdtemp(prefix="timeline-tests-"))
os.environ["DATABASE_URL"] = f"sqlite:///{_TEST_DB_DIR / 'test.db'}"
os.environ["APP_TIMEZONE"] = "UTC"

from app.config import reset_settings_cache  # noqa: E402

reset_settings_cache()

from app.domain.entities import TimelineEvent  # noqa: E402

BASE_TIME = datetime(2024, 5, 10, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def database():
    """Recreate every table so each test starts from an empty schema."""

    from app.infrastructure import database as db_module

    db_module.initialize_database()
    db_module.Base.metadata.drop_all(bind=db_module.engine)
    db_module.Base.metadata.create_all(bind=db_module.engine)
    yield db_module
    db_module.Base.metadata.drop_all(bind=db_module.engine)


@pytest.fixture
def db_session(database):
    session = database.SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(database):
    """Return a test client bound to a clean application instance."""

    from fastapi.testclient import TestClient

    from main import create_app

    app = create_app()
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def make_event():
    """Factory for timeline events placed ``minutes`` after ``BASE_TIME``."""

    def factory(
        event_id: str,
        kind: str = "message",
        minutes: float = 0,
        *,
        title: str | None = None,
        description: str | None = None,
        **metadata,
    ) -> TimelineEvent:
        return TimelineEvent(
            id=event_id,
            kind=kind,
            title=title if title is not None else f"{kind} {event_id}",
            timestamp=BASE_TIME + timedelta(minutes=minutes),
            description=description,
            metadata=metadata,
        )

    return factory


@pytest.fixture
def make_comment(make_event):
    def factory(event_id: str, minutes: float = 0, *, user_id: int = 1, origin: str = "manual", **extra):
        extra.setdefault("user_name", f"user{user_id}")
        return make_event(event_id, "comment", minutes, user_id=user_id, origin=origin, **extra)

    return factory


class _ManualHandle:
    def __init__(self, due: float, callback) -> None:
        self.due = due
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Timer scheduler driven by :meth:`advance` instead of a clock."""

    def __init__(self) -> None:
        self.now = 0.0
        self._handles: list[_ManualHandle] = []

    def call_later(self, delay: float, callback) -> _ManualHandle:
        handle = _ManualHandle(self.now + delay, callback)
        self._handles.append(handle)
        return handle

    @property
    def pending(self) -> int:
        return sum(1 for handle in self._handles if not handle.cancelled)

    def advance(self, seconds: float) -> None:
        target = self.now + seconds
        while True:
            due = [h for h in self._handles if not h.cancelled and h.due <= target]
            if not due:
                break
            handle = min(due, key=lambda h: h.due)
            self._handles.remove(handle)
            self.now = handle.due
            handle.callback()
        self._handles = [h for h in self._handles if not h.cancelled]
        self.now = target


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()
