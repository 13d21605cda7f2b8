"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs only; no infrastructure imports.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from typing import TYPE_CHECKING, Any, Protocol

from showplan.domain.enums import ReferenceKind, SortOrder

if TYPE_CHECKING:
    from showplan.application.dtos.schedule import ScheduleCreate, ScheduleResult
    from showplan.application.dtos.schedule_snapshot import (
        ScheduleSnapshotCreate,
        ScheduleSnapshotResult,
    )
    from showplan.application.dtos.show import (
        ShowCreate,
        ShowMcCreate,
        ShowMcResult,
        ShowPlatformCreate,
        ShowPlatformResult,
        ShowResult,
    )


# Schedule repository interface
class IScheduleRepository(Protocol):
    """Protocol for schedule repository (DIP).

    increment_version_if_current is the only method that writes the version column.
    """

    async def get_by_id(self, schedule_id: str) -> ScheduleResult | None:
        """Return active (not soft-deleted) schedule by internal id."""

    async def get_by_uid(self, uid: str) -> ScheduleResult | None:
        """Return active (not soft-deleted) schedule by external uid."""

    async def create_schedule(self, data: ScheduleCreate) -> ScheduleResult:
        """Insert a draft schedule at version 1."""

    async def increment_version_if_current(
        self, schedule_id: str, expected_version: int
    ) -> ScheduleResult | None:
        """Atomically set version = version + 1 iff version == expected_version.

        Returns the bumped schedule, or None when no active row matched.
        """

    async def update_fields(self, schedule_id: str, changes: dict[str, Any]) -> ScheduleResult:
        """Update non-version columns (plan_document, status, published_at, published_by)."""

    async def soft_delete_many(self, row_ids: Sequence[str], deleted_at: datetime) -> int:
        """Set deleted_at on the active schedules among row_ids; returns rows changed."""


# Schedule snapshot repository interface (append-only)
class IScheduleSnapshotRepository(Protocol):
    """Protocol for schedule snapshot repository. No update or delete."""

    async def create_snapshot(self, data: ScheduleSnapshotCreate) -> ScheduleSnapshotResult:
        """Append an immutable snapshot row."""

    async def get_by_uid(self, uid: str) -> ScheduleSnapshotResult | None:
        """Return snapshot by external uid."""

    async def list_by_schedule(
        self,
        schedule_id: str,
        *,
        limit: int,
        offset: int = 0,
        order: SortOrder = SortOrder.DESC,
    ) -> list[ScheduleSnapshotResult]:
        """Return snapshots for schedule ordered by created_at (ties broken by version)."""


# Rows mutated by the assignment reconciler
class IReconcilableStore[RowT, CreateT](Protocol):
    """Write side shared by show, show_mc and show_platform repositories."""

    async def create_many(self, items: Sequence[CreateT]) -> list[RowT]:
        """Insert rows in order and return them."""

    async def update_fields(self, row_id: str, changes: dict[str, Any]) -> RowT:
        """Overwrite the given columns on one active row and return it."""

    async def soft_delete_many(self, row_ids: Sequence[str], deleted_at: datetime) -> int:
        """Set deleted_at on active rows; return number of rows affected."""


# Show repository interface
class IShowRepository(IReconcilableStore["ShowResult", "ShowCreate"], Protocol):
    """Protocol for show repository (DIP)."""

    async def get_by_uid(self, uid: str) -> ShowResult | None:
        """Return active show by external uid."""

    async def get_by_uid_for_update(self, uid: str) -> ShowResult | None:
        """Return active show by external uid, locked for the rest of the transaction."""

    async def get_by_id(self, show_id: str, include_deleted: bool = False) -> ShowResult | None:
        """Return show by internal id (soft-deleted rows only when include_deleted)."""

    async def list_by_schedule(
        self, schedule_id: str, include_deleted: bool = False
    ) -> list[ShowResult]:
        """Return shows materialized from the schedule."""


# Show MC assignment repository interface
class IShowMcRepository(IReconcilableStore["ShowMcResult", "ShowMcCreate"], Protocol):
    """Protocol for show_mc repository (DIP)."""

    async def get_by_id(self, row_id: str) -> ShowMcResult | None:
        """Return assignment by id, including soft-deleted rows (history)."""

    async def list_by_shows(
        self, show_ids: Sequence[str], include_deleted: bool = False
    ) -> list[ShowMcResult]:
        """Return assignments for many shows in one query."""

    async def soft_delete_by_shows(self, show_ids: Sequence[str], deleted_at: datetime) -> int:
        """Soft-delete every active assignment of the given shows."""


# Show platform assignment repository interface
class IShowPlatformRepository(
    IReconcilableStore["ShowPlatformResult", "ShowPlatformCreate"], Protocol
):
    """Protocol for show_platform repository (DIP)."""

    async def get_by_id(self, row_id: str) -> ShowPlatformResult | None:
        """Return assignment by id, including soft-deleted rows (history)."""

    async def list_by_shows(
        self, show_ids: Sequence[str], include_deleted: bool = False
    ) -> list[ShowPlatformResult]:
        """Return assignments for many shows in one query."""

    async def soft_delete_by_shows(self, show_ids: Sequence[str], deleted_at: datetime) -> int:
        """Soft-delete every active assignment of the given shows."""


# Reference (lookup table) resolution
class IReferenceLookup(Protocol):
    """Protocol for resolving external uids of lookup entities to internal ids."""

    async def lookup_ids(self, kind: ReferenceKind, uids: set[str]) -> dict[str, str]:
        """Return uid -> id for active rows of kind; missing uids are absent from the result."""
