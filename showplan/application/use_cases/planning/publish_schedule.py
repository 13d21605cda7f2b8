"""Publish a draft schedule: materialize its plan document into Show/ShowMC/ShowPlatform rows."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

from showplan.application.dtos.reconciliation import PublishResult
from showplan.application.dtos.schedule import ScheduleResult
from showplan.application.services.plan_document_schema import parse_plan_document
from showplan.application.use_cases.planning.schedule_operations import get_schedule_or_raise
from showplan.domain.enums import ScheduleStatus, SnapshotReason
from showplan.domain.exceptions import ScheduleStateException, ValidationException
from showplan.shared.logging import get_logger
from showplan.shared.telemetry import add_span_attributes, traced
from showplan.shared.utils.datetime import utc_now

if TYPE_CHECKING:
    from showplan.application.interfaces.repositories import (
        IScheduleRepository,
        IShowMcRepository,
        IShowPlatformRepository,
        IShowRepository,
    )
    from showplan.application.interfaces.services import IUnitOfWork
    from showplan.application.services.assignment_reconciler import AssignmentReconciler
    from showplan.application.services.reference_resolver import ReferenceResolver
    from showplan.application.services.snapshot_recorder import SnapshotRecorder
    from showplan.application.services.version_guard import VersionGuard
    from showplan.domain.plan_document import PlanDocument

logger = get_logger(__name__)


def _group_by_show(rows: Iterable[Any]) -> dict[str, list[Any]]:
    grouped: dict[str, list[Any]] = defaultdict(list)
    for row in rows:
        grouped[row.show_id].append(row)
    return grouped


class PublishScheduleUseCase:
    """draft --publish(version)--> published. All-or-nothing.

    Order: load and check state, parse document, pre_publish snapshot, then
    inside the version guard: resolve references, reconcile the show set, reconcile
    each show's MCs and platforms, flip status. Does not run advisory validation.
    Caller must run this within a single DB transaction (e.g. get_db_transactional).
    """

    def __init__(
        self,
        schedule_repo: IScheduleRepository,
        show_repo: IShowRepository,
        show_mc_repo: IShowMcRepository,
        show_platform_repo: IShowPlatformRepository,
        reference_resolver: ReferenceResolver,
        reconciler: AssignmentReconciler,
        snapshot_recorder: SnapshotRecorder,
        version_guard: VersionGuard,
        uow: IUnitOfWork,
    ) -> None:
        self.schedule_repo = schedule_repo
        self.show_repo = show_repo
        self.show_mc_repo = show_mc_repo
        self.show_platform_repo = show_platform_repo
        self.reference_resolver = reference_resolver
        self.reconciler = reconciler
        self.snapshot_recorder = snapshot_recorder
        self.version_guard = version_guard
        self.uow = uow

    @traced("schedule.publish")
    async def execute(
        self,
        schedule_uid: str,
        expected_version: int,
        acting_user_id: str,
    ) -> PublishResult:
        """Publish the schedule.

        Raises:
            ResourceNotFoundException: Unknown schedule.
            ValidationException: Schedule has no creator.
            ScheduleStateException: Schedule is not a draft.
            SchemaValidationException: Stored plan document violates the schema.
            VersionConflictException: expected_version is stale.
            ReferenceNotFoundException: A client/MC/platform/... uid does not resolve.
            DuplicateNaturalKeyException: Two shows (or assignments of one show) share a key.
        """
        add_span_attributes(schedule_uid=schedule_uid, expected_version=expected_version)
        schedule = await get_schedule_or_raise(self.schedule_repo, schedule_uid)
        if not schedule.created_by:
            raise ValidationException(
                "Schedule has no creator; publishing requires an attributable owner",
                field="created_by",
            )
        if not schedule.is_draft:
            raise ScheduleStateException(schedule.uid, schedule.status.value, "publish")
        document = parse_plan_document(schedule.plan_document)

        async def materialize(bumped: ScheduleResult) -> PublishResult:
            return await self._materialize(bumped, document, acting_user_id)

        async with self.uow.atomic():
            await self.snapshot_recorder.capture(
                schedule.id, SnapshotReason.PRE_PUBLISH, acting_user_id
            )
            result = await self.version_guard.apply_if_version_matches(
                schedule.id, expected_version, materialize
            )
        logger.info(
            "Published schedule %s at version %s: shows created=%d updated=%d deleted=%d",
            result.schedule.uid,
            result.schedule.version,
            result.shows_created,
            result.shows_updated,
            result.shows_deleted,
        )
        add_span_attributes(
            shows_created=result.shows_created,
            shows_updated=result.shows_updated,
            shows_deleted=result.shows_deleted,
        )
        return result

    async def _materialize(
        self,
        schedule: ScheduleResult,
        document: PlanDocument,
        acting_user_id: str,
    ) -> PublishResult:
        desired_shows = await self.reference_resolver.resolve_plan(document)
        existing_shows = await self.show_repo.list_by_schedule(schedule.id)
        shows = await self.reconciler.reconcile_show_set(
            schedule.id, desired_shows, existing_shows
        )

        # New shows have no assignments yet; only matched shows need a fetch.
        matched_ids = [row.id for row in shows.updated + shows.unchanged]
        existing_mcs: dict[str, list[Any]] = {}
        existing_platforms: dict[str, list[Any]] = {}
        if matched_ids:
            existing_mcs = _group_by_show(await self.show_mc_repo.list_by_shows(matched_ids))
            existing_platforms = _group_by_show(
                await self.show_platform_repo.list_by_shows(matched_ids)
            )

        rows_by_key = {row.plan_key: row for row in shows.active}
        for item in desired_shows:
            show = rows_by_key[item.plan_key]
            await self.reconciler.reconcile_show_mcs(
                show.id, item.mcs, existing_mcs.get(show.id, [])
            )
            await self.reconciler.reconcile_show_platforms(
                show.id, item.platforms, existing_platforms.get(show.id, [])
            )

        published = await self.schedule_repo.update_fields(
            schedule.id,
            {
                "status": ScheduleStatus.PUBLISHED,
                "published_at": utc_now(),
                "published_by": acting_user_id,
            },
        )
        return PublishResult(
            schedule=published,
            shows_created=len(shows.created),
            shows_deleted=len(shows.soft_deleted),
            shows_updated=len(shows.updated),
        )
