"""Application use cases: one entry point per workflow."""

from showplan.application.use_cases.planning import (
    PublishScheduleUseCase,
    RestoreFromSnapshotUseCase,
    ScheduleService,
    SnapshotService,
    UpdatePlanDocumentUseCase,
    ValidateScheduleUseCase,
)
from showplan.application.use_cases.shows import SyncShowAssignmentsUseCase

__all__ = [
    "PublishScheduleUseCase",
    "RestoreFromSnapshotUseCase",
    "ScheduleService",
    "SnapshotService",
    "SyncShowAssignmentsUseCase",
    "UpdatePlanDocumentUseCase",
    "ValidateScheduleUseCase",
]
