"""
Shared test fixtures and utilities for the Lyfe test suite.

This module holds the TestClient, mock object factories and the database
session fixture reused across test files. Route tests swap service static
methods with monkeypatch and authenticate through ``login_as``; service
tests use ``db_session`` against the in-memory SQLite database.
"""

import uuid
from types import SimpleNamespace
from datetime import datetime, date
from decimal import Decimal
from typing import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from api.dependencies import get_current_user
from domain.enums import PantryCategory, Priority, TaskStatus
from domain.models import AppUser, Base, engine, SessionLocal
from main import app

# Lifespan is not entered, so no database or MongoDB start-up happens here
client = TestClient(app)


def unique_email(prefix: str = "test") -> str:
    """Generate unique email address using UUID to avoid conflicts"""
    return f"{prefix}-{uuid.uuid4()}@example.com"


# Realistic default user profiles
REALISTIC_USERS = {
    "default": {"name": "Priya Sharma", "email_prefix": "priya.sharma"},
    "athlete": {"name": "Arjun Mehta", "email_prefix": "arjun.mehta"},
    "casual": {"name": "Emma Johnson", "email_prefix": "emma.johnson"},
}


def make_user(user_id=None, email=None, name=None, profile_type="default"):
    """
    Create a mock user object with the attributes routes read.

    Example:
        >>> user = make_user()
        >>> user.name
        'Priya Sharma'
    """
    profile = REALISTIC_USERS.get(profile_type, REALISTIC_USERS["default"])
    now = datetime.utcnow()
    return SimpleNamespace(
        user_id=user_id or uuid.uuid4(),
        email=email or unique_email(profile["email_prefix"]),
        name=name or profile["name"],
        password_hash="",
        timezone="Asia/Kolkata",
        onboarding_completed=False,
        profile={},
        created_at=now,
        updated_at=now,
    )


def login_as(user) -> None:
    """Make every request in this test authenticate as ``user``"""
    app.dependency_overrides[get_current_user] = lambda: user


@pytest.fixture
def auth_user():
    """A mock user that is authenticated for the duration of the test"""
    user = make_user()
    login_as(user)
    try:
        yield user
    finally:
        app.dependency_overrides.pop(get_current_user, None)


def make_food(food_id="ifct-paneer", name="Paneer", **overrides):
    """A food catalog document as stored in MongoDB"""
    doc = {
        "_id": food_id,
        "name": name,
        "name_fold": name.lower(),
        "aliases": [],
        "source": "ifct",
        "tags": ["dairy", "protein"],
        "portion_units": [{"unit": "grams", "grams": 1.0}],
        "portion_grams_default": 50.0,
        "nutrients": {
            "kcal": 265,
            "protein": 18.3,
            "fat": 20.8,
            "carbs": 1.2,
            "fiber": 0,
            "sugar": 1.2,
        },
        "gi": None,
        "nova_class": 1,
        "fodmap": "Low",
        "provenance": {"source": "ifct", "measured": True, "confidence": 0.9},
    }
    doc.update(overrides)
    return doc


def make_meal(meal_id=None, user_id=None, score=3.5):
    """Mock Meal with a stored analysis block"""
    now = datetime.utcnow()
    return SimpleNamespace(
        meal_id=meal_id or uuid.uuid4(),
        user_id=user_id or uuid.uuid4(),
        ts=now,
        items=[{"food_id": "ifct-paneer", "custom_name": None, "grams": 100}],
        notes=None,
        context={"post_workout": False},
        presence=4,
        energy=3,
        computed={
            "totals": {"kcal": 265, "protein": 18.3},
            "badges": {"protein": True, "veg": False, "gi": None, "fodmap": "Low", "nova": 1},
            "mindful_meal_score": score,
            "rationale": ["Good protein content"],
            "tip": "Add vegetables or a salad for fiber and micronutrients.",
            "effects": {},
        },
        created_at=now,
        updated_at=now,
    )


def make_task(task_id=None, user_id=None, title="Write weekly review", **overrides):
    """Mock Task, completed by default like a logged task"""
    now = datetime.utcnow()
    fields = dict(
        task_id=task_id or uuid.uuid4(),
        user_id=user_id or uuid.uuid4(),
        title=title,
        description=None,
        status=TaskStatus.COMPLETED,
        priority=Priority.MEDIUM,
        category="work",
        energy_level=None,
        due_date=None,
        completed_at=now,
        completion_notes=None,
        duration_minutes=30,
        mindful_rating=4,
        goal_ids=[],
        tags=[],
        subtasks=[],
        created_at=now,
        updated_at=now,
    )
    fields.update(overrides)
    return SimpleNamespace(**fields)


def make_goal(goal_id=None, user_id=None, name="Deep work"):
    return SimpleNamespace(
        goal_id=goal_id or uuid.uuid4(),
        user_id=user_id or uuid.uuid4(),
        name=name,
        color="#10B981",
        description=None,
        category="career",
        target_hours=2.0,
        priority=Priority.HIGH,
        is_active=True,
        created_at=datetime.utcnow(),
    )


def make_pantry_item(
    item_id=None,
    user_id=None,
    item_name="Basmati rice",
    quantity=Decimal("2"),
    unit="kg",
    low_threshold=Decimal("1"),
    category=PantryCategory.ESSENTIALS,
):
    """
    Mock pantry item; ``is_low`` follows quantity <= low_threshold.

    Example:
        >>> make_pantry_item(quantity=Decimal("0.5")).is_low
        True
    """
    return SimpleNamespace(
        item_id=item_id or uuid.uuid4(),
        user_id=user_id or uuid.uuid4(),
        category=category,
        subcategory=None,
        item_name=item_name,
        quantity=quantity,
        unit=unit,
        last_ordered=None,
        is_low=quantity <= low_threshold,
        low_threshold=low_threshold,
        notes=None,
        updated_at=datetime.utcnow(),
    )


def make_day_snapshot(user_id=None, day=None, minutes=120.0, current=1, longest=1):
    score24 = min(24, round(minutes / 60, 1))
    return SimpleNamespace(
        day_id=uuid.uuid4(),
        user_id=user_id or uuid.uuid4(),
        date=day or date.today(),
        score24=score24,
        score_percentage=round(score24 / 24 * 100, 1),
        total_goal_aligned_minutes=minutes,
        tasks_goal_aligned=1,
        current_streak=current,
        longest_streak=longest,
        target_hours=8,
    )


# =============================================================================
# DATABASE SESSION FIXTURE FOR SERVICE TESTS
# =============================================================================


@pytest.fixture(scope="function")
def db_session() -> Generator[Session, None, None]:
    """
    Fresh schema on the in-memory SQLite database for each test.

    Tables are created before the test and dropped afterwards so tests do
    not see each other's rows.
    """
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_user(db_session: Session) -> AppUser:
    """A persisted user to own the rows a service test creates"""
    user = AppUser(
        email=unique_email("priya"),
        name="Priya Sharma",
        password_hash="not-a-real-hash",
        profile={},
    )
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user
