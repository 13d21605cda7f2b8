"""Snapshot queries and manual capture."""

from __future__ import annotations

from typing import TYPE_CHECKING

from showplan.application.dtos.schedule_snapshot import ScheduleSnapshotResult
from showplan.application.use_cases.planning.schedule_operations import get_schedule_or_raise
from showplan.domain.enums import REQUESTABLE_SNAPSHOT_REASONS, SnapshotReason, SortOrder
from showplan.domain.exceptions import ResourceNotFoundException, ValidationException

if TYPE_CHECKING:
    from showplan.application.interfaces.repositories import (
        IScheduleRepository,
        IScheduleSnapshotRepository,
    )
    from showplan.application.services.snapshot_recorder import SnapshotRecorder


class SnapshotService:
    """Manual snapshots and recency-ordered listing for a schedule."""

    def __init__(
        self,
        schedule_repo: IScheduleRepository,
        snapshot_repo: IScheduleSnapshotRepository,
        snapshot_recorder: SnapshotRecorder,
        default_limit: int = 50,
        max_limit: int = 200,
    ) -> None:
        self.schedule_repo = schedule_repo
        self.snapshot_repo = snapshot_repo
        self.snapshot_recorder = snapshot_recorder
        self.default_limit = default_limit
        self.max_limit = max_limit

    async def create_manual_snapshot(
        self,
        schedule_uid: str,
        acting_user_id: str | None,
        reason: SnapshotReason = SnapshotReason.MANUAL,
    ) -> ScheduleSnapshotResult:
        """Capture the current document without changing the schedule (no version bump).

        Raises:
            ValidationException: reason is one only publish or restore may record.
        """
        if reason not in REQUESTABLE_SNAPSHOT_REASONS:
            raise ValidationException(
                f"Snapshot reason '{reason.value}' is recorded by the system only", field="reason"
            )
        schedule = await get_schedule_or_raise(self.schedule_repo, schedule_uid)
        return await self.snapshot_recorder.capture(schedule.id, reason, acting_user_id)

    async def list_snapshots(
        self,
        schedule_uid: str,
        limit: int | None = None,
        offset: int = 0,
        order: SortOrder = SortOrder.DESC,
    ) -> list[ScheduleSnapshotResult]:
        """List snapshots newest first (order=asc for oldest first). limit is capped at max_limit."""
        if limit is not None and limit < 1:
            raise ValidationException("limit must be at least 1", field="limit")
        if offset < 0:
            raise ValidationException("offset must not be negative", field="offset")
        schedule = await get_schedule_or_raise(self.schedule_repo, schedule_uid)
        effective = min(limit or self.default_limit, self.max_limit)
        return await self.snapshot_recorder.list_recent(
            schedule.id, limit=effective, offset=offset, order=order
        )

    async def get_snapshot(self, snapshot_uid: str) -> ScheduleSnapshotResult:
        snapshot = await self.snapshot_repo.get_by_uid(snapshot_uid)
        if snapshot is None:
            raise ResourceNotFoundException("schedule_snapshot", snapshot_uid)
        return snapshot
