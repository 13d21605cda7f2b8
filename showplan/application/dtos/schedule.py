"""DTOs for schedule (plan document owner)."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from showplan.domain.enums import ScheduleStatus


@dataclass(frozen=True)
class ScheduleResult:
    """Schedule read-model (repository return type)."""

    id: str
    uid: str
    name: str
    start_date: datetime
    end_date: datetime
    status: ScheduleStatus
    plan_document: dict[str, Any]
    version: int
    client_id: str | None
    created_by: str | None
    published_at: datetime | None
    published_by: str | None
    created_at: datetime
    updated_at: datetime
    deleted_at: datetime | None = None

    @property
    def is_draft(self) -> bool:
        return self.status == ScheduleStatus.DRAFT


@dataclass(frozen=True)
class ScheduleCreate:
    """Data for inserting a new schedule (always draft at version 1)."""

    uid: str
    name: str
    start_date: datetime
    end_date: datetime
    plan_document: dict[str, Any]
    client_id: str | None
    created_by: str | None
