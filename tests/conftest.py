"""Shared test fixtures and utilities."""

import os

# Must be set before lostfound reads its settings
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["CELERY_BROKER_URL"] = "memory://"
os.environ["CELERY_RESULT_BACKEND"] = "cache+memory://"

import pytest

from lostfound.database import Base, SessionLocal, engine
from lostfound.models import Item, Match
from lostfound.services.match_manager import MatchLifecycleManager
from lostfound.services.notifications import NotificationSink


class RecordingSink(NotificationSink):
    """Keeps every notice instead of delivering it."""

    def __init__(self, fail=False):
        self.sent = []
        self.fail = fail

    def notify(self, user_id, title, message, link=None):
        if self.fail:
            raise RuntimeError("notification service down")
        self.sent.append({"user_id": user_id, "title": title, "message": message, "link": link})


@pytest.fixture
def db():
    """Fresh in-memory schema per test."""
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()

    yield session

    session.close()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def manager(db, sink):
    return MatchLifecycleManager.from_session(db, sink)


@pytest.fixture
def make_item(db):
    """Create and commit an item; lost items default to location_lost, found to location_found."""

    def _make_item(status="lost", user_id=1, location=None, **fields):
        data = {
            "title": "Black iPhone 13",
            "description": "Black iPhone 13 with a cracked screen",
            "category": "electronics",
            "item_status": "active",
        }
        data.update(fields)
        if location is not None:
            data["location_lost" if status == "lost" else "location_found"] = location
        item = Item(user_id=user_id, status=status, **data)
        db.add(item)
        db.commit()
        db.refresh(item)
        return item

    return _make_item


@pytest.fixture
def make_match(db):
    """Insert a match row directly with a chosen score."""

    def _make_match(lost_item, found_item, score, status="pending"):
        match = Match(
            lost_item_id=lost_item.id,
            found_item_id=found_item.id,
            match_score=score,
            status=status,
        )
        db.add(match)
        db.commit()
        db.refresh(match)
        return match

    return _make_match


@pytest.fixture
def matching_pair(make_item):
    """A lost/found pair that clears the acceptance threshold."""
    lost = make_item("lost", user_id=1, location="Library Building")
    found = make_item("found", user_id=2, location="library building, 2nd floor")
    return lost, found
