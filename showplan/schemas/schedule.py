"""Schedule API schemas.

plan_document is passed through as-is (camelCase keys); it is checked
against the plan document JSON schema by the application layer.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from showplan.domain.enums import ScheduleStatus


class ScheduleCreateRequest(BaseModel):
    """Request body for creating a draft schedule."""

    name: str = Field(..., min_length=1, max_length=255)
    start_date: datetime
    end_date: datetime
    client_uid: str | None = Field(default=None, max_length=128)
    plan_document: dict[str, Any] | None = None


class PlanDocumentUpdateRequest(BaseModel):
    """Replace the plan document; version is the version the client last read."""

    plan_document: dict[str, Any]
    version: int = Field(..., ge=1)


class PublishRequest(BaseModel):
    version: int = Field(..., ge=1)


class DuplicateScheduleRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)


class ScheduleResponse(BaseModel):
    """Schedule response (internal id omitted; uid is the public identifier)."""

    model_config = ConfigDict(from_attributes=True)

    uid: str
    name: str
    start_date: datetime
    end_date: datetime
    status: ScheduleStatus
    plan_document: dict[str, Any]
    version: int
    created_by: str | None
    published_at: datetime | None
    published_by: str | None
    created_at: datetime
    updated_at: datetime


class PublishResponse(BaseModel):
    schedule: ScheduleResponse
    shows_created: int
    shows_updated: int
    shows_deleted: int
