"""Engine configuration objects and helpers."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

load_dotenv()

ENV_PREFIX = "HABITENGINE_"


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(ENV_PREFIX + name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    """Read an integer environment variable, rejecting garbage loudly."""

    value = os.getenv(ENV_PREFIX + name)
    if value is None or not value.strip():
        return default
    try:
        return int(value.strip())
    except ValueError as exc:
        raise ValueError(f"{ENV_PREFIX}{name} must be an integer, got {value!r}") from exc


class EngineConfig:
    """Tunables for the scheduling/streak engine.

    Every attribute can be set through a ``HABITENGINE_*`` environment variable
    (a ``.env`` file is honoured) and overridden by keyword arguments.
    """

    DB_FILENAME = "habitengine.db"

    def __init__(self, **overrides: Any) -> None:
        self.STREAK_LOOKBACK_DAYS = _env_int("STREAK_LOOKBACK_DAYS", 730)
        self.MAX_CACHE_SIZE = _env_int("MAX_CACHE_SIZE", 750)
        self.ANCHOR_CACHE_SIZE = _env_int("ANCHOR_CACHE_SIZE", 365)
        self.SMART_GOAL_LOOKBACK_DAYS = _env_int("SMART_GOAL_LOOKBACK_DAYS", 14)
        self.GOAL_STEP = _env_int("GOAL_STEP", 5)
        self.MIN_GOAL = _env_int("MIN_GOAL", 5)
        self.SUMMARY_MAX_DEPTH = _env_int("SUMMARY_MAX_DEPTH", 2)
        self.SEMI_CONSOLIDATED_DAYS = _env_int("SEMI_CONSOLIDATED_DAYS", 21)
        self.CONSOLIDATED_DAYS = _env_int("CONSOLIDATED_DAYS", 66)
        self.DEV_MODE = _env_bool("DEV_MODE", default=True)
        self.DATA_DIR = Path(os.getenv(ENV_PREFIX + "DATA_DIR", "instance")).expanduser()
        self.DATABASE_URL = os.getenv(ENV_PREFIX + "DATABASE_URL") or self._build_sqlite_url()

        for key, value in overrides.items():
            attr = key.upper()
            if not hasattr(self, attr):
                raise ValueError(f"Unknown engine setting: {key}")
            if attr == "DATA_DIR":
                value = Path(value).expanduser()
            setattr(self, attr, value)

        self.validate()

    def validate(self) -> None:
        """Reject settings that would make the engine thrash or misbehave."""

        for attr in (
            "STREAK_LOOKBACK_DAYS",
            "MAX_CACHE_SIZE",
            "ANCHOR_CACHE_SIZE",
            "SMART_GOAL_LOOKBACK_DAYS",
        ):
            if getattr(self, attr) <= 0:
                raise ValueError(f"{attr} must be positive.")
        if self.GOAL_STEP < 0 or self.MIN_GOAL < 1:
            raise ValueError("GOAL_STEP must be >= 0 and MIN_GOAL must be >= 1.")
        if self.SUMMARY_MAX_DEPTH < 1:
            raise ValueError("SUMMARY_MAX_DEPTH must be at least 1.")
        if not 0 < self.SEMI_CONSOLIDATED_DAYS < self.CONSOLIDATED_DAYS:
            raise ValueError("Streak tiers need 0 < SEMI_CONSOLIDATED_DAYS < CONSOLIDATED_DAYS.")
        # A flush in the middle of a cold streak walk would discard the walk's own work.
        if self.MAX_CACHE_SIZE <= self.STREAK_LOOKBACK_DAYS:
            raise ValueError("MAX_CACHE_SIZE must be larger than STREAK_LOOKBACK_DAYS.")

    def _build_sqlite_url(self) -> str:
        """Construct the default SQLite URL for the persisted status store."""

        return f"sqlite:///{self.DATA_DIR / self.DB_FILENAME}"

    def ensure_data_dir(self) -> Path:
        """Create DATA_DIR on demand; only logging and the SQLite store need it."""

        path = self.DATA_DIR.resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    def sqlalchemy_engine_options(self) -> dict[str, Any]:
        """Expose engine kwargs for SQLModel to consume."""

        return {"connect_args": {"check_same_thread": False}}


class TestConfig(EngineConfig):
    """Small, deterministic settings for test suites."""

    __test__ = False

    def __init__(self, **overrides: Any) -> None:
        overrides.setdefault("dev_mode", True)
        overrides.setdefault("database_url", "sqlite://")
        super().__init__(**overrides)
