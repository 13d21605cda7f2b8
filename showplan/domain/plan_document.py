"""Plan document value objects.

A plan document is the draft JSON a schedule carries before publish:
{"metadata": {...}, "shows": [ShowPlanItem, ...]}. Storage keeps it opaque;
these immutable types are the parsed view used by validation and publish.
Keys in the stored JSON are camelCase (written by the planning UI).
"""

import copy
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from showplan.domain.exceptions import ValidationException
from showplan.shared.utils.datetime import parse_iso_datetime


def default_plan_document() -> dict[str, Any]:
    """Return the document a new schedule starts with."""
    return {"metadata": {}, "shows": []}


def windows_overlap(
    a_start: datetime, a_end: datetime, b_start: datetime, b_end: datetime
) -> bool:
    """Return True if [a_start, a_end) and [b_start, b_end) intersect. Touching ends do not overlap."""
    return a_start < b_end and b_start < a_end


def _parse_time(value: str, path: str) -> datetime:
    try:
        return parse_iso_datetime(value)
    except ValueError as e:
        raise ValidationException(f"Invalid ISO-8601 timestamp at {path}: {value!r}", field=path) from e


@dataclass(frozen=True)
class McPlanEntry:
    """One MC assignment on a planned show. note/metadata None means unspecified."""

    mc_uid: str
    note: str | None = None
    metadata: dict[str, Any] | None = None


@dataclass(frozen=True)
class PlatformPlanEntry:
    """One platform assignment on a planned show. None fields are unspecified."""

    platform_uid: str
    live_stream_link: str | None = None
    platform_show_id: str | None = None
    viewer_count: int | None = None
    metadata: dict[str, Any] | None = None


@dataclass(frozen=True)
class ShowPlanItem:
    """A show as planned in the document; temp_id is its stable natural key."""

    temp_id: str
    name: str
    start_time: datetime
    end_time: datetime
    client_uid: str
    show_type_uid: str
    show_status_uid: str
    show_standard_uid: str
    studio_room_uid: str | None = None
    existing_show_uid: str | None = None
    mcs: tuple[McPlanEntry, ...] = ()
    platforms: tuple[PlatformPlanEntry, ...] = ()
    metadata: dict[str, Any] | None = None

    @property
    def has_valid_time_window(self) -> bool:
        return self.end_time > self.start_time

    def overlaps(self, other: "ShowPlanItem") -> bool:
        return windows_overlap(self.start_time, self.end_time, other.start_time, other.end_time)

    @classmethod
    def from_dict(cls, raw: dict[str, Any], index: int) -> "ShowPlanItem":
        """Build from a schema-valid show dict. Raises ValidationException on bad timestamps."""
        path = f"shows[{index}]"
        return cls(
            temp_id=raw["tempId"],
            name=raw["name"],
            start_time=_parse_time(raw["startTime"], f"{path}.startTime"),
            end_time=_parse_time(raw["endTime"], f"{path}.endTime"),
            client_uid=raw["clientUid"],
            show_type_uid=raw["showTypeUid"],
            show_status_uid=raw["showStatusUid"],
            show_standard_uid=raw["showStandardUid"],
            studio_room_uid=raw.get("studioRoomUid"),
            existing_show_uid=raw.get("existingShowUid"),
            mcs=tuple(
                McPlanEntry(
                    mc_uid=m["mcUid"],
                    note=m.get("note"),
                    metadata=m.get("metadata"),
                )
                for m in raw.get("mcs", [])
            ),
            platforms=tuple(
                PlatformPlanEntry(
                    platform_uid=p["platformUid"],
                    live_stream_link=p.get("liveStreamLink"),
                    platform_show_id=p.get("platformShowId"),
                    viewer_count=p.get("viewerCount"),
                    metadata=p.get("metadata"),
                )
                for p in raw.get("platforms", [])
            ),
            metadata=raw.get("metadata"),
        )


@dataclass(frozen=True)
class PlanDocument:
    """Parsed plan document: metadata (echoed as-is) and planned shows in document order."""

    metadata: dict[str, Any] = field(default_factory=dict)
    shows: tuple[ShowPlanItem, ...] = ()

    @property
    def declared_total_shows(self) -> int | None:
        value = self.metadata.get("totalShows")
        return value if isinstance(value, int) else None

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "PlanDocument":
        """Build from a schema-valid document dict."""
        return cls(
            metadata=dict(raw.get("metadata") or {}),
            shows=tuple(
                ShowPlanItem.from_dict(show, index)
                for index, show in enumerate(raw.get("shows", []))
            ),
        )


def clone_with_fresh_temp_ids(
    raw: dict[str, Any], new_temp_id: Callable[[], str]
) -> dict[str, Any]:
    """Deep-copy a raw plan document, giving every show a new tempId and no existingShowUid.

    Used when duplicating a schedule: the copy must not match the source's materialized shows.
    """
    cloned = copy.deepcopy(raw)
    for show in cloned.get("shows", []):
        show["tempId"] = new_temp_id()
        show.pop("existingShowUid", None)
    return cloned
