from __future__ import annotations

from datetime import datetime
from typing import Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, insert

from sampler.api.deps import get_engine, get_push_sender
from sampler.api.main import create_app
from sampler.domain.errors import PushDeliveryError
from sampler.infra.db.tables import (
    checkins_table,
    clients_table,
    events_table,
    metadata,
    notifications_table,
    reviews_table,
    trivia_table,
    user_profiles_table,
)
from sampler.providers.push.base import PushResult

API_KEY_ENV_VARS = ("APPWRITE_FUNCTION_KEY", "APPWRITE_API_KEY")


class FakePushSender:
    def __init__(self, fail_for: Optional[set] = None):
        self.fail_for = fail_for or set()
        self.sent: list[dict] = []

    def send_push(self, *, user_id: str, title: str, body: str, data: Optional[dict] = None) -> PushResult:
        if user_id in self.fail_for:
            raise PushDeliveryError(f"push to {user_id} failed")
        self.sent.append({"user_id": user_id, "title": title, "body": body, "data": data or {}})
        return PushResult(message_id=f"msg-{len(self.sent)}", status="processing")


@pytest.fixture()
def engine(tmp_path):
    engine = create_engine(
        f"sqlite:///{tmp_path / 'sampler.db'}",
        connect_args={"check_same_thread": False},
        future=True,
    )
    metadata.create_all(engine)
    yield engine
    metadata.drop_all(engine)


@pytest.fixture()
def push_sender():
    return FakePushSender()


def _inserter(engine, table, defaults: dict):
    def _insert(**values):
        row = {**defaults, **values}
        with engine.begin() as conn:
            conn.execute(insert(table).values(**row))
        return row["id"]

    return _insert


@pytest.fixture()
def add_client(engine):
    return _inserter(engine, clients_table, {"name": "Client", "created_at": datetime(2026, 1, 5)})


@pytest.fixture()
def add_event(engine):
    return _inserter(
        engine,
        events_table,
        {
            "name": "Event",
            "address": "1 Main St",
            "city": "Austin",
            "check_in_points": 0,
            "review_points": 0,
            "is_archived": False,
            "is_hidden": False,
        },
    )


@pytest.fixture()
def add_profile(engine):
    return _inserter(
        engine,
        user_profiles_table,
        {"total_points": 0, "is_blocked": False, "created_at": datetime(2026, 1, 5)},
    )


@pytest.fixture()
def add_notification(engine):
    return _inserter(
        engine,
        notifications_table,
        {"title": "Hello", "message": "World", "type": "Promotional", "target_audience": "All", "status": "Draft"},
    )


@pytest.fixture()
def add_review(engine):
    return _inserter(engine, reviews_table, {"points_earned": 0})


@pytest.fixture()
def add_check_in(engine):
    return _inserter(engine, checkins_table, {})


@pytest.fixture()
def add_trivia(engine):
    return _inserter(
        engine,
        trivia_table,
        {
            "question": "Which one?",
            "answers": ["A", "B", "C"],
            "correct_option_index": 1,
            "points": 50,
            "skipped_users": [],
        },
    )


@pytest.fixture()
def api_client(engine, push_sender, monkeypatch):
    for name in API_KEY_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("APPWRITE_API_KEY", "test-key")
    app = create_app(engine=engine)
    app.dependency_overrides[get_engine] = lambda: engine
    app.dependency_overrides[get_push_sender] = lambda: push_sender
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture()
def failing_sender():
    """Build a sender whose pushes to the given auth ids fail."""

    def _build(*user_ids):
        return FakePushSender(fail_for=set(user_ids))

    return _build
