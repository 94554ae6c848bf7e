"""Entity storage for users, agents and tasks."""

from .base import BaseStorage
from .memory import InMemoryStorage

__all__ = ["BaseStorage", "InMemoryStorage"]
