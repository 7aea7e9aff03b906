"""Abstract key-value storage for whole collections.

Values are plain JSON-compatible structures (lists, dicts, strings,
numbers).  A collection is always read and written as a whole; there are
no partial updates.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class StoragePort(ABC):

    @abstractmethod
    def load(self, key: str) -> Any | None:
        """Return the value stored under *key*, or None if absent or unreadable."""

    @abstractmethod
    def save(self, key: str, value: Any) -> None:
        """Replace the value stored under *key*."""
