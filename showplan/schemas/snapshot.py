"""Schedule snapshot API schemas."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from showplan.domain.enums import REQUESTABLE_SNAPSHOT_REASONS, ScheduleStatus, SnapshotReason


class ManualSnapshotRequest(BaseModel):
    """Reason is manual (default) or auto_save; pre_publish and before_restore are rejected."""

    reason: SnapshotReason = SnapshotReason.MANUAL

    @field_validator("reason")
    @classmethod
    def reason_is_requestable(cls, value: SnapshotReason) -> SnapshotReason:
        if value not in REQUESTABLE_SNAPSHOT_REASONS:
            raise ValueError(f"'{value.value}' snapshots are recorded by the system only")
        return value


class RestoreSnapshotRequest(BaseModel):
    version: int = Field(..., ge=1)


class SnapshotResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    uid: str
    plan_document: dict[str, Any]
    version: int
    status: ScheduleStatus
    snapshot_reason: SnapshotReason
    created_by: str | None
    created_at: datetime


class SnapshotListItem(BaseModel):
    """Snapshot list item (plan document omitted; fetch one snapshot for it)."""

    model_config = ConfigDict(from_attributes=True)

    uid: str
    version: int
    status: ScheduleStatus
    snapshot_reason: SnapshotReason
    created_by: str | None
    created_at: datetime
