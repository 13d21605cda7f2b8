"""Snapshot recorder: immutable plan document copies captured before mutations."""

from __future__ import annotations

import copy
from typing import TYPE_CHECKING

from showplan.application.dtos.schedule_snapshot import (
    ScheduleSnapshotCreate,
    ScheduleSnapshotResult,
)
from showplan.domain.enums import SnapshotReason, SortOrder
from showplan.domain.exceptions import ResourceNotFoundException
from showplan.shared.logging import get_logger

if TYPE_CHECKING:
    from showplan.application.interfaces.repositories import (
        IScheduleRepository,
        IScheduleSnapshotRepository,
    )
    from showplan.application.interfaces.services import IUidGenerator

logger = get_logger(__name__)

SNAPSHOT_UID_PREFIX = "snapshot"


class SnapshotRecorder:
    """Appends ScheduleSnapshot rows and lists them by recency.

    capture() must complete before the mutation it precedes; a failed write
    propagates so the caller never reaches the mutation.
    """

    def __init__(
        self,
        schedule_repo: IScheduleRepository,
        snapshot_repo: IScheduleSnapshotRepository,
        uid_generator: IUidGenerator,
    ) -> None:
        self._schedule_repo = schedule_repo
        self._snapshot_repo = snapshot_repo
        self._uids = uid_generator

    async def capture(
        self,
        schedule_id: str,
        reason: SnapshotReason,
        acting_user_id: str | None,
    ) -> ScheduleSnapshotResult:
        """Copy the schedule's current plan document and version into a new snapshot."""
        schedule = await self._schedule_repo.get_by_id(schedule_id)
        if schedule is None:
            raise ResourceNotFoundException("schedule", schedule_id)
        snapshot = await self._snapshot_repo.create_snapshot(
            ScheduleSnapshotCreate(
                uid=self._uids.new_uid(SNAPSHOT_UID_PREFIX),
                schedule_id=schedule.id,
                plan_document=copy.deepcopy(schedule.plan_document),
                version=schedule.version,
                status=schedule.status,
                snapshot_reason=reason,
                created_by=acting_user_id,
            )
        )
        logger.info(
            "Captured %s snapshot %s of schedule %s at version %s",
            reason.value,
            snapshot.uid,
            schedule.uid,
            schedule.version,
        )
        return snapshot

    async def list_recent(
        self,
        schedule_id: str,
        *,
        limit: int,
        offset: int = 0,
        order: SortOrder = SortOrder.DESC,
    ) -> list[ScheduleSnapshotResult]:
        """Return snapshots for schedule, newest first by default."""
        return await self._snapshot_repo.list_by_schedule(
            schedule_id, limit=limit, offset=offset, order=order
        )
