"""Show assignment API schemas."""

from datetime import datetime
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from showplan.domain.plan_document import McPlanEntry, PlatformPlanEntry


class McAssignmentRequest(BaseModel):
    mc_uid: str = Field(..., min_length=1, max_length=128)
    note: str | None = None
    metadata: dict[str, Any] | None = None

    def to_entry(self) -> McPlanEntry:
        return McPlanEntry(mc_uid=self.mc_uid, note=self.note, metadata=self.metadata)


class PlatformAssignmentRequest(BaseModel):
    platform_uid: str = Field(..., min_length=1, max_length=128)
    live_stream_link: str | None = None
    platform_show_id: str | None = None
    viewer_count: int | None = Field(default=None, ge=0)
    metadata: dict[str, Any] | None = None

    def to_entry(self) -> PlatformPlanEntry:
        return PlatformPlanEntry(
            platform_uid=self.platform_uid,
            live_stream_link=self.live_stream_link,
            platform_show_id=self.platform_show_id,
            viewer_count=self.viewer_count,
            metadata=self.metadata,
        )


class ShowAssignmentsRequest(BaseModel):
    """Omit a list to leave that kind untouched; send [] to clear it."""

    mcs: list[McAssignmentRequest] | None = None
    platforms: list[PlatformAssignmentRequest] | None = None


class ShowMcResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    uid: str
    mc_id: str
    note: str | None
    metadata: dict[str, Any]
    deleted_at: datetime | None = None


class ShowPlatformResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    uid: str
    platform_id: str
    live_stream_link: str | None
    platform_show_id: str | None
    viewer_count: int
    metadata: dict[str, Any]
    deleted_at: datetime | None = None


ItemT = TypeVar("ItemT")


class AssignmentChangesResponse(BaseModel, Generic[ItemT]):
    created: list[ItemT]
    updated: list[ItemT]
    unchanged: list[ItemT]
    soft_deleted: list[ItemT]


class ShowAssignmentsResponse(BaseModel):
    show_uid: str
    mcs: AssignmentChangesResponse[ShowMcResponse] | None = None
    platforms: AssignmentChangesResponse[ShowPlatformResponse] | None = None
