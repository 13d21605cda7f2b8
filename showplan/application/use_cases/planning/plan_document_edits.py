"""Plan document mutations: edit and restore. Both snapshot first, then go through the version guard."""

from __future__ import annotations

import copy
from typing import TYPE_CHECKING, Any

from showplan.application.dtos.schedule import ScheduleResult
from showplan.application.services.plan_document_schema import parse_plan_document
from showplan.application.use_cases.planning.schedule_operations import get_schedule_or_raise
from showplan.domain.enums import SnapshotReason
from showplan.domain.exceptions import ResourceNotFoundException, ScheduleStateException
from showplan.shared.logging import get_logger

if TYPE_CHECKING:
    from showplan.application.interfaces.repositories import (
        IScheduleRepository,
        IScheduleSnapshotRepository,
    )
    from showplan.application.interfaces.services import IUnitOfWork
    from showplan.application.services.snapshot_recorder import SnapshotRecorder
    from showplan.application.services.version_guard import VersionGuard

logger = get_logger(__name__)


class UpdatePlanDocumentUseCase:
    """Replace a draft schedule's plan document under optimistic locking.

    Caller must run this within a single DB transaction (e.g. get_db_transactional).
    """

    def __init__(
        self,
        schedule_repo: IScheduleRepository,
        snapshot_recorder: SnapshotRecorder,
        version_guard: VersionGuard,
        uow: IUnitOfWork,
    ) -> None:
        self.schedule_repo = schedule_repo
        self.snapshot_recorder = snapshot_recorder
        self.version_guard = version_guard
        self.uow = uow

    async def execute(
        self,
        schedule_uid: str,
        plan_document: dict[str, Any],
        expected_version: int,
        acting_user_id: str | None,
    ) -> ScheduleResult:
        """Snapshot the current document (auto_save), then write the new one.

        Raises:
            ResourceNotFoundException: Unknown schedule.
            ScheduleStateException: Schedule is already published.
            SchemaValidationException: New document violates the plan schema.
            VersionConflictException: expected_version is stale; nothing is written.
        """
        schedule = await get_schedule_or_raise(self.schedule_repo, schedule_uid)
        if not schedule.is_draft:
            raise ScheduleStateException(schedule.uid, schedule.status.value, "edit")
        parse_plan_document(plan_document)

        async def write_document(bumped: ScheduleResult) -> ScheduleResult:
            return await self.schedule_repo.update_fields(
                bumped.id, {"plan_document": plan_document}
            )

        async with self.uow.atomic():
            await self.snapshot_recorder.capture(
                schedule.id, SnapshotReason.AUTO_SAVE, acting_user_id
            )
            updated = await self.version_guard.apply_if_version_matches(
                schedule.id, expected_version, write_document
            )
        logger.info("Updated plan document of schedule %s (version %s)", updated.uid, updated.version)
        return updated


class RestoreFromSnapshotUseCase:
    """Write a snapshot's plan document back onto its (draft) schedule."""

    def __init__(
        self,
        schedule_repo: IScheduleRepository,
        snapshot_repo: IScheduleSnapshotRepository,
        snapshot_recorder: SnapshotRecorder,
        version_guard: VersionGuard,
        uow: IUnitOfWork,
    ) -> None:
        self.schedule_repo = schedule_repo
        self.snapshot_repo = snapshot_repo
        self.snapshot_recorder = snapshot_recorder
        self.version_guard = version_guard
        self.uow = uow

    async def execute(
        self,
        snapshot_uid: str,
        expected_version: int,
        acting_user_id: str | None,
    ) -> ScheduleResult:
        """Capture a before_restore snapshot, then restore under the version guard."""
        snapshot = await self.snapshot_repo.get_by_uid(snapshot_uid)
        if snapshot is None:
            raise ResourceNotFoundException("schedule_snapshot", snapshot_uid)
        schedule = await self.schedule_repo.get_by_id(snapshot.schedule_id)
        if schedule is None:
            raise ResourceNotFoundException("schedule", snapshot.schedule_id)
        if not schedule.is_draft:
            raise ScheduleStateException(schedule.uid, schedule.status.value, "restore")
        document = copy.deepcopy(snapshot.plan_document)
        parse_plan_document(document)

        async def write_document(bumped: ScheduleResult) -> ScheduleResult:
            return await self.schedule_repo.update_fields(bumped.id, {"plan_document": document})

        async with self.uow.atomic():
            await self.snapshot_recorder.capture(
                schedule.id, SnapshotReason.BEFORE_RESTORE, acting_user_id
            )
            restored = await self.version_guard.apply_if_version_matches(
                schedule.id, expected_version, write_document
            )
        logger.info(
            "Restored schedule %s from snapshot %s (snapshot version %s, now version %s)",
            restored.uid,
            snapshot.uid,
            snapshot.version,
            restored.version,
        )
        return restored
