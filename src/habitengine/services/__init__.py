"""Service module exports."""

from . import cache, context, goals, recurrence, schedule, streaks, summary

__all__ = [
    "cache",
    "context",
    "goals",
    "recurrence",
    "schedule",
    "streaks",
    "summary",
]
