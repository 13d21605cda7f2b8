"""DTOs for schedule snapshot (append-only plan document audit trail)."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from showplan.domain.enums import ScheduleStatus, SnapshotReason


@dataclass(frozen=True)
class ScheduleSnapshotResult:
    """Snapshot read-model."""

    id: str
    uid: str
    schedule_id: str
    plan_document: dict[str, Any]
    version: int
    status: ScheduleStatus
    snapshot_reason: SnapshotReason
    created_by: str | None
    created_at: datetime


@dataclass(frozen=True)
class ScheduleSnapshotCreate:
    uid: str
    schedule_id: str
    plan_document: dict[str, Any]
    version: int
    status: ScheduleStatus
    snapshot_reason: SnapshotReason
    created_by: str | None
