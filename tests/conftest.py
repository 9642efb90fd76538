"""Pytest configuration and shared fixtures for habitengine tests.

Provides an in-memory status store, habit factories, an engine factory pinned
to a fixed "today", and an isolated SQLite database for the SQLModel store.
"""

from __future__ import annotations

import tempfile
from datetime import date, timedelta
from pathlib import Path

import pytest
from sqlmodel import Session, SQLModel, create_engine

from habitengine import models  # noqa: F401  (registers tables with SQLModel metadata)
from habitengine.config import TestConfig
from habitengine.engine import HabitEngine
from habitengine.infra.repositories.memory import InMemoryStatusStore
from habitengine.models import (
    CheckGoal,
    Daily,
    Habit,
    QuantityGoal,
    Schedule,
)

FIXED_TODAY = "2024-06-01"


def iso_range(start: str, end: str) -> list[str]:
    """Inclusive list of ISO dates from start to end."""

    first = date.fromisoformat(start)
    last = date.fromisoformat(end)
    return [(first + timedelta(days=i)).isoformat() for i in range((last - first).days + 1)]


# =============================================================================
# Engine Fixtures
# =============================================================================


@pytest.fixture
def config():
    """Deterministic engine settings."""
    return TestConfig()


@pytest.fixture
def store():
    """Empty in-memory status store."""
    return InMemoryStatusStore()


@pytest.fixture
def make_engine(store, config):
    """Factory building an engine over the shared store with a fixed today."""

    def _make_engine(habits, *, today: str = FIXED_TODAY, engine_config=None):
        return HabitEngine(
            habits,
            store,
            config=engine_config or config,
            today=lambda: today,
        )

    return _make_engine


# =============================================================================
# Test Data Factories
# =============================================================================


@pytest.fixture
def habit_factory():
    """Factory for habits with a single open-ended schedule.

    Usage:
        habit = habit_factory(frequency=Daily(), goal=QuantityGoal(total=20))
    """

    counter = {"n": 0}

    def _create_habit(
        habit_id: str | None = None,
        *,
        created_on: str = "2024-01-01",
        frequency=None,
        goal=None,
        times: tuple[str, ...] = ("Morning",),
        **kwargs,
    ) -> Habit:
        counter["n"] += 1
        schedule = Schedule(
            start_date=created_on,
            times=times,
            frequency=frequency or Daily(),
            goal=goal or CheckGoal(),
        )
        return Habit(
            id=habit_id or f"habit-{counter['n']}",
            created_on=created_on,
            schedule_history=(schedule,),
            **kwargs,
        )

    return _create_habit


@pytest.fixture
def quantity_habit(habit_factory):
    """Daily quantity habit with a base goal of 20, created 2024-01-01."""
    return habit_factory("reading", goal=QuantityGoal(total=20, unit="pages"))


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture(scope="function")
def db_engine():
    """Create an isolated SQLite database file for each test."""
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)

    engine = create_engine(f"sqlite:///{db_path}", echo=False)
    SQLModel.metadata.create_all(engine)

    yield engine

    engine.dispose()
    db_path.unlink(missing_ok=True)


@pytest.fixture(scope="function")
def session_factory(db_engine):
    """Session factory matching the Callable[[], Session] repository contract."""

    def factory():
        return Session(db_engine, expire_on_commit=False)

    return factory


@pytest.fixture(name="iso_range")
def iso_range_fixture():
    """Expose :func:`iso_range` to tests."""
    return iso_range
