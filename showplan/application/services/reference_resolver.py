"""Batched natural-key resolution: external uids in a plan document -> internal ids."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from showplan.application.dtos.show import (
    McAssignmentInput,
    PlatformAssignmentInput,
    ShowInput,
)
from showplan.domain.enums import ReferenceKind
from showplan.domain.exceptions import ReferenceNotFoundException

if TYPE_CHECKING:
    from showplan.application.interfaces.repositories import IReferenceLookup
    from showplan.domain.plan_document import (
        McPlanEntry,
        PlanDocument,
        PlatformPlanEntry,
        ShowPlanItem,
    )


def collect_plan_references(document: PlanDocument) -> dict[ReferenceKind, set[str]]:
    """Return every uid the document references, grouped by kind."""
    wanted: dict[ReferenceKind, set[str]] = {kind: set() for kind in ReferenceKind}
    for show in document.shows:
        wanted[ReferenceKind.CLIENT].add(show.client_uid)
        wanted[ReferenceKind.SHOW_TYPE].add(show.show_type_uid)
        wanted[ReferenceKind.SHOW_STATUS].add(show.show_status_uid)
        wanted[ReferenceKind.SHOW_STANDARD].add(show.show_standard_uid)
        if show.studio_room_uid:
            wanted[ReferenceKind.STUDIO_ROOM].add(show.studio_room_uid)
        wanted[ReferenceKind.MC].update(mc.mc_uid for mc in show.mcs)
        wanted[ReferenceKind.PLATFORM].update(p.platform_uid for p in show.platforms)
    return wanted


@dataclass(frozen=True)
class ResolvedReferences:
    """uid -> id maps per kind, plus whatever did not resolve."""

    ids: dict[ReferenceKind, dict[str, str]] = field(default_factory=dict)
    missing: dict[ReferenceKind, tuple[str, ...]] = field(default_factory=dict)

    @property
    def is_complete(self) -> bool:
        return not self.missing

    def id_for(self, kind: ReferenceKind, uid: str) -> str | None:
        return self.ids.get(kind, {}).get(uid)

    def is_missing(self, kind: ReferenceKind, uid: str | None) -> bool:
        return uid is not None and uid in self.missing.get(kind, ())

    def require_complete(self) -> None:
        """Raise ReferenceNotFoundException listing every unresolved key."""
        if self.missing:
            raise ReferenceNotFoundException(
                {kind.value: list(uids) for kind, uids in self.missing.items()}
            )

    def _require(self, kind: ReferenceKind, uid: str) -> str:
        resolved = self.id_for(kind, uid)
        if resolved is None:
            raise ReferenceNotFoundException({kind.value: [uid]})
        return resolved

    def mc_inputs(self, entries: Iterable[McPlanEntry]) -> tuple[McAssignmentInput, ...]:
        return tuple(
            McAssignmentInput(
                mc_id=self._require(ReferenceKind.MC, entry.mc_uid),
                note=entry.note,
                metadata=entry.metadata,
            )
            for entry in entries
        )

    def platform_inputs(
        self, entries: Iterable[PlatformPlanEntry]
    ) -> tuple[PlatformAssignmentInput, ...]:
        return tuple(
            PlatformAssignmentInput(
                platform_id=self._require(ReferenceKind.PLATFORM, entry.platform_uid),
                live_stream_link=entry.live_stream_link,
                platform_show_id=entry.platform_show_id,
                viewer_count=entry.viewer_count,
                metadata=entry.metadata,
            )
            for entry in entries
        )

    def show_input(self, item: ShowPlanItem) -> ShowInput:
        return ShowInput(
            plan_key=item.temp_id,
            name=item.name,
            start_time=item.start_time,
            end_time=item.end_time,
            client_id=self._require(ReferenceKind.CLIENT, item.client_uid),
            show_type_id=self._require(ReferenceKind.SHOW_TYPE, item.show_type_uid),
            show_status_id=self._require(ReferenceKind.SHOW_STATUS, item.show_status_uid),
            show_standard_id=self._require(ReferenceKind.SHOW_STANDARD, item.show_standard_uid),
            studio_room_id=(
                self._require(ReferenceKind.STUDIO_ROOM, item.studio_room_uid)
                if item.studio_room_uid
                else None
            ),
            metadata=item.metadata,
            mcs=self.mc_inputs(item.mcs),
            platforms=self.platform_inputs(item.platforms),
        )


class ReferenceResolver:
    """Resolves uids with one lookup per reference kind (never one per show)."""

    def __init__(self, lookup: IReferenceLookup) -> None:
        self._lookup = lookup

    async def lookup(self, wanted: dict[ReferenceKind, set[str]]) -> ResolvedReferences:
        """Resolve what exists; unresolved uids are reported in .missing, not raised."""
        ids: dict[ReferenceKind, dict[str, str]] = {}
        missing: dict[ReferenceKind, tuple[str, ...]] = {}
        for kind in ReferenceKind:
            uids = wanted.get(kind) or set()
            if not uids:
                continue
            found = await self._lookup.lookup_ids(kind, set(uids))
            ids[kind] = found
            absent = sorted(uid for uid in uids if uid not in found)
            if absent:
                missing[kind] = tuple(absent)
        return ResolvedReferences(ids=ids, missing=missing)

    async def resolve(self, wanted: dict[ReferenceKind, set[str]]) -> ResolvedReferences:
        """Resolve all uids or raise ReferenceNotFoundException naming the unresolved ones."""
        resolved = await self.lookup(wanted)
        resolved.require_complete()
        return resolved

    async def resolve_plan(self, document: PlanDocument) -> list[ShowInput]:
        """Resolve every reference in the document and return desired shows in document order."""
        resolved = await self.resolve(collect_plan_references(document))
        return [resolved.show_input(item) for item in document.shows]
