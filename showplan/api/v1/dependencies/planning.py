"""Schedule planning dependencies (composition root)."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from showplan.application.services.assignment_reconciler import AssignmentReconciler
from showplan.application.services.plan_validator import PlanValidator
from showplan.application.services.reference_resolver import ReferenceResolver
from showplan.application.services.snapshot_recorder import SnapshotRecorder
from showplan.application.services.version_guard import VersionGuard
from showplan.application.use_cases.planning import (
    PublishScheduleUseCase,
    RestoreFromSnapshotUseCase,
    ScheduleService,
    SnapshotService,
    UpdatePlanDocumentUseCase,
    ValidateScheduleUseCase,
)
from showplan.application.use_cases.shows import SyncShowAssignmentsUseCase
from showplan.core.config import get_settings
from showplan.infrastructure.persistence.database import get_db, get_db_transactional
from showplan.infrastructure.persistence.repositories import (
    ReferenceLookupRepository,
    ScheduleRepository,
    ScheduleSnapshotRepository,
    ShowMcRepository,
    ShowPlatformRepository,
    ShowRepository,
    SqlAlchemyUnitOfWork,
)
from showplan.infrastructure.services import CuidUidGenerator


def _build_snapshot_recorder(db: AsyncSession) -> SnapshotRecorder:
    return SnapshotRecorder(
        ScheduleRepository(db), ScheduleSnapshotRepository(db), CuidUidGenerator()
    )


def _build_reconciler(db: AsyncSession, uow: SqlAlchemyUnitOfWork) -> AssignmentReconciler:
    return AssignmentReconciler(
        show_repo=ShowRepository(db),
        show_mc_repo=ShowMcRepository(db),
        show_platform_repo=ShowPlatformRepository(db),
        uow=uow,
        uid_generator=CuidUidGenerator(),
    )


def _build_schedule_service(db: AsyncSession) -> ScheduleService:
    return ScheduleService(
        schedule_repo=ScheduleRepository(db),
        reference_resolver=ReferenceResolver(ReferenceLookupRepository(db)),
        uid_generator=CuidUidGenerator(),
    )


def _build_snapshot_service(db: AsyncSession) -> SnapshotService:
    settings = get_settings()
    return SnapshotService(
        schedule_repo=ScheduleRepository(db),
        snapshot_repo=ScheduleSnapshotRepository(db),
        snapshot_recorder=_build_snapshot_recorder(db),
        default_limit=settings.snapshot_list_default_limit,
        max_limit=settings.snapshot_list_max_limit,
    )


async def get_schedule_service(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ScheduleService:
    """ScheduleService for read paths."""
    return _build_schedule_service(db)


async def get_schedule_service_for_write(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> ScheduleService:
    """ScheduleService for create/duplicate/delete (commits on success)."""
    return _build_schedule_service(db)


async def get_snapshot_service(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> SnapshotService:
    return _build_snapshot_service(db)


async def get_snapshot_service_for_write(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> SnapshotService:
    return _build_snapshot_service(db)


async def get_validate_schedule_use_case(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ValidateScheduleUseCase:
    return ValidateScheduleUseCase(
        schedule_repo=ScheduleRepository(db),
        plan_validator=PlanValidator(ReferenceResolver(ReferenceLookupRepository(db))),
    )


async def get_update_plan_document_use_case(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> UpdatePlanDocumentUseCase:
    """Edit use case; snapshot, version bump and write share the request transaction."""
    schedule_repo = ScheduleRepository(db)
    uow = SqlAlchemyUnitOfWork(db)
    return UpdatePlanDocumentUseCase(
        schedule_repo=schedule_repo,
        snapshot_recorder=_build_snapshot_recorder(db),
        version_guard=VersionGuard(schedule_repo, uow),
        uow=uow,
    )


async def get_restore_from_snapshot_use_case(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> RestoreFromSnapshotUseCase:
    schedule_repo = ScheduleRepository(db)
    uow = SqlAlchemyUnitOfWork(db)
    return RestoreFromSnapshotUseCase(
        schedule_repo=schedule_repo,
        snapshot_repo=ScheduleSnapshotRepository(db),
        snapshot_recorder=_build_snapshot_recorder(db),
        version_guard=VersionGuard(schedule_repo, uow),
        uow=uow,
    )


async def get_publish_schedule_use_case(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> PublishScheduleUseCase:
    """Publish use case; every write of the publish runs in the request transaction."""
    schedule_repo = ScheduleRepository(db)
    uow = SqlAlchemyUnitOfWork(db)
    return PublishScheduleUseCase(
        schedule_repo=schedule_repo,
        show_repo=ShowRepository(db),
        show_mc_repo=ShowMcRepository(db),
        show_platform_repo=ShowPlatformRepository(db),
        reference_resolver=ReferenceResolver(ReferenceLookupRepository(db)),
        reconciler=_build_reconciler(db, uow),
        snapshot_recorder=_build_snapshot_recorder(db),
        version_guard=VersionGuard(schedule_repo, uow),
        uow=uow,
    )


async def get_sync_show_assignments_use_case(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> SyncShowAssignmentsUseCase:
    uow = SqlAlchemyUnitOfWork(db)
    return SyncShowAssignmentsUseCase(
        show_repo=ShowRepository(db),
        show_mc_repo=ShowMcRepository(db),
        show_platform_repo=ShowPlatformRepository(db),
        reference_resolver=ReferenceResolver(ReferenceLookupRepository(db)),
        reconciler=_build_reconciler(db, uow),
        uow=uow,
    )
