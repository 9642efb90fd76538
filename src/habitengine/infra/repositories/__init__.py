"""Concrete status store implementations."""

from .memory import InMemoryStatusStore
from .status import SQLModelStatusStore

__all__ = ["InMemoryStatusStore", "SQLModelStatusStore"]
