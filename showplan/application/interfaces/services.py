"""Service interfaces (ports) for the application layer.

Protocols define contracts for infrastructure services (DIP).
"""

from __future__ import annotations

from contextlib import AbstractAsyncContextManager
from typing import Protocol


# Unit of work interface
class IUnitOfWork(Protocol):
    """Protocol for an all-or-nothing scope (SAVEPOINT in the SQL implementation)."""

    def atomic(self) -> AbstractAsyncContextManager[None]:
        """Return an async context; an exception inside undoes every write made in it."""


# UID generator interface
class IUidGenerator(Protocol):
    """Protocol for collision-resistant external identifiers."""

    def new_uid(self, prefix: str) -> str:
        """Return a new uid for the given entity prefix (e.g. 'show')."""
