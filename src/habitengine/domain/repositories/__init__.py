"""Repository protocol definitions for domain layer."""

from .status import StatusStore

__all__ = ["StatusStore"]
