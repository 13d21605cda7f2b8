"""Schedule planning use cases: edit, validate, snapshot, publish."""

from showplan.application.use_cases.planning.plan_document_edits import (
    RestoreFromSnapshotUseCase,
    UpdatePlanDocumentUseCase,
)
from showplan.application.use_cases.planning.publish_schedule import PublishScheduleUseCase
from showplan.application.use_cases.planning.schedule_operations import ScheduleService
from showplan.application.use_cases.planning.snapshots import SnapshotService
from showplan.application.use_cases.planning.validate_schedule import ValidateScheduleUseCase

__all__ = [
    "PublishScheduleUseCase",
    "RestoreFromSnapshotUseCase",
    "ScheduleService",
    "SnapshotService",
    "UpdatePlanDocumentUseCase",
    "ValidateScheduleUseCase",
]
