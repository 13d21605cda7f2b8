"""Application DTOs (no ORM dependency)."""

from showplan.application.dtos.reconciliation import (
    PublishResult,
    ReconcilePlan,
    ReconcileResult,
    ShowAssignmentsResult,
)
from showplan.application.dtos.schedule import ScheduleCreate, ScheduleResult
from showplan.application.dtos.schedule_snapshot import (
    ScheduleSnapshotCreate,
    ScheduleSnapshotResult,
)
from showplan.application.dtos.show import (
    McAssignmentInput,
    PlatformAssignmentInput,
    ShowCreate,
    ShowInput,
    ShowMcCreate,
    ShowMcResult,
    ShowPlatformCreate,
    ShowPlatformResult,
    ShowResult,
)
from showplan.application.dtos.validation import ValidationIssue, ValidationResult

__all__ = [
    "McAssignmentInput",
    "PlatformAssignmentInput",
    "PublishResult",
    "ReconcilePlan",
    "ReconcileResult",
    "ScheduleCreate",
    "ScheduleResult",
    "ScheduleSnapshotCreate",
    "ScheduleSnapshotResult",
    "ShowAssignmentsResult",
    "ShowCreate",
    "ShowInput",
    "ShowMcCreate",
    "ShowMcResult",
    "ShowPlatformCreate",
    "ShowPlatformResult",
    "ShowResult",
    "ValidationIssue",
    "ValidationResult",
]
