"""Pytest configuration and fixtures."""

import os

# Set test environment variables before importing app modules
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("FIREBASE_PROJECT_ID", "schedule-test")
os.environ.setdefault("DB_LOG_SLOW_QUERIES", "false")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from app.auth import get_current_member  # noqa: E402
from app.database import Base, SessionLocal, engine, get_db  # noqa: E402
from app.main import app  # noqa: E402
from app.models import ContentNode, ContentType, Member  # noqa: E402

SCHEDULE_ITEM_TYPE_KEY = "0b6f2d3e-8a34-4c1e-9f52-3d7a6c1b9e40"
WORKOUT_NODE_KEY = "6f1c2b8e-4d3a-4e5f-9a7b-1c2d3e4f5a6b"


@pytest.fixture
def db():
    """Fresh in-memory schema per test."""
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def content(db):
    """Seed the schedule item element type and one workout node."""
    db.add(ContentType(alias="scheduleItem", key=SCHEDULE_ITEM_TYPE_KEY, name="Schedule Item"))
    workout = ContentNode(id=1234, key=WORKOUT_NODE_KEY, name="Leg day", content_type_alias="workout")
    db.add(workout)
    db.commit()
    return workout


@pytest.fixture
def member(db, content):
    member = Member(
        username="anna@example.com",
        email="anna@example.com",
        name="Anna",
        firebase_uid="firebase-anna",
    )
    db.add(member)
    db.commit()
    db.refresh(member)
    return member


@pytest.fixture
def client(db, member):
    """Test client authenticated as ``member``."""

    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_current_member] = lambda: member
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def anonymous_client(db):
    """Test client with the real member dependency and no credentials."""

    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
