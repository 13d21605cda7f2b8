"""DTOs for materialized shows and their MC/platform assignments.

*Result types are repository read-models; *Create types are insert payloads;
*Input types are desired state after natural-key resolution (internal ids).
On *Input, a None field means "unspecified": updates keep the persisted value.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class ShowResult:
    id: str
    uid: str
    schedule_id: str | None
    plan_key: str | None
    name: str
    start_time: datetime
    end_time: datetime
    client_id: str
    studio_room_id: str | None
    show_type_id: str
    show_status_id: str
    show_standard_id: str
    metadata: dict[str, Any]
    created_at: datetime
    updated_at: datetime
    deleted_at: datetime | None = None


@dataclass(frozen=True)
class ShowCreate:
    uid: str
    schedule_id: str | None
    plan_key: str | None
    name: str
    start_time: datetime
    end_time: datetime
    client_id: str
    studio_room_id: str | None
    show_type_id: str
    show_status_id: str
    show_standard_id: str
    metadata: dict[str, Any]


@dataclass(frozen=True)
class McAssignmentInput:
    """Desired MC on a show; natural key is mc_id."""

    mc_id: str
    note: str | None = None
    metadata: dict[str, Any] | None = None

    def specified_fields(self) -> dict[str, Any]:
        return {
            k: v
            for k, v in (("note", self.note), ("metadata", self.metadata))
            if v is not None
        }


@dataclass(frozen=True)
class PlatformAssignmentInput:
    """Desired platform on a show; natural key is platform_id."""

    platform_id: str
    live_stream_link: str | None = None
    platform_show_id: str | None = None
    viewer_count: int | None = None
    metadata: dict[str, Any] | None = None

    def specified_fields(self) -> dict[str, Any]:
        candidates = {
            "live_stream_link": self.live_stream_link,
            "platform_show_id": self.platform_show_id,
            "viewer_count": self.viewer_count,
            "metadata": self.metadata,
        }
        return {k: v for k, v in candidates.items() if v is not None}


@dataclass(frozen=True)
class ShowInput:
    """Desired show under a schedule; natural key is plan_key (the plan item's tempId).

    studio_room_id is always specified: a plan item without a room clears it.
    """

    plan_key: str
    name: str
    start_time: datetime
    end_time: datetime
    client_id: str
    show_type_id: str
    show_status_id: str
    show_standard_id: str
    studio_room_id: str | None = None
    metadata: dict[str, Any] | None = None
    mcs: tuple[McAssignmentInput, ...] = field(default=())
    platforms: tuple[PlatformAssignmentInput, ...] = field(default=())

    def specified_fields(self) -> dict[str, Any]:
        fields_ = {
            "name": self.name,
            "start_time": self.start_time,
            "end_time": self.end_time,
            "client_id": self.client_id,
            "studio_room_id": self.studio_room_id,
            "show_type_id": self.show_type_id,
            "show_status_id": self.show_status_id,
            "show_standard_id": self.show_standard_id,
        }
        if self.metadata is not None:
            fields_["metadata"] = self.metadata
        return fields_


@dataclass(frozen=True)
class ShowMcResult:
    id: str
    uid: str
    show_id: str
    mc_id: str
    note: str | None
    metadata: dict[str, Any]
    created_at: datetime
    updated_at: datetime
    deleted_at: datetime | None = None


@dataclass(frozen=True)
class ShowMcCreate:
    uid: str
    show_id: str
    mc_id: str
    note: str | None
    metadata: dict[str, Any]


@dataclass(frozen=True)
class ShowPlatformResult:
    id: str
    uid: str
    show_id: str
    platform_id: str
    live_stream_link: str | None
    platform_show_id: str | None
    viewer_count: int
    metadata: dict[str, Any]
    created_at: datetime
    updated_at: datetime
    deleted_at: datetime | None = None


@dataclass(frozen=True)
class ShowPlatformCreate:
    uid: str
    show_id: str
    platform_id: str
    live_stream_link: str | None
    platform_show_id: str | None
    viewer_count: int
    metadata: dict[str, Any]
