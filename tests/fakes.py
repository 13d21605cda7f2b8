"""In-memory doubles for the repository and service ports.

All fake repositories share one InMemoryStore; FakeUnitOfWork checkpoints the
store on entry and restores it when the block raises, mirroring a SAVEPOINT.
The store also enforces the partial unique indexes (one active row per
natural key) so write ordering bugs surface in unit tests.
"""

from __future__ import annotations

import copy
from collections.abc import AsyncIterator, Sequence
from contextlib import asynccontextmanager
from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta, timezone
from typing import Any

from showplan.application.dtos.schedule import ScheduleCreate, ScheduleResult
from showplan.application.dtos.schedule_snapshot import (
    ScheduleSnapshotCreate,
    ScheduleSnapshotResult,
)
from showplan.application.dtos.show import (
    ShowCreate,
    ShowMcCreate,
    ShowMcResult,
    ShowPlatformCreate,
    ShowPlatformResult,
    ShowResult,
)
from showplan.application.services.assignment_reconciler import AssignmentReconciler
from showplan.application.services.plan_validator import PlanValidator
from showplan.application.services.reference_resolver import ReferenceResolver
from showplan.application.services.snapshot_recorder import SnapshotRecorder
from showplan.application.services.version_guard import VersionGuard
from showplan.application.use_cases.planning import (
    PublishScheduleUseCase,
    RestoreFromSnapshotUseCase,
    ScheduleService,
    SnapshotService,
    UpdatePlanDocumentUseCase,
    ValidateScheduleUseCase,
)
from showplan.application.use_cases.shows import SyncShowAssignmentsUseCase
from showplan.domain.enums import ReferenceKind, ScheduleStatus, SortOrder
from showplan.domain.exceptions import PersistenceException, ResourceNotFoundException

SCHEDULE_START = datetime(2026, 3, 1, tzinfo=timezone.utc)
SCHEDULE_END = datetime(2026, 3, 31, tzinfo=timezone.utc)

CLIENT = "client_acme"
SHOW_TYPE = "show_type_bau"
SHOW_STATUS = "show_status_confirmed"
SHOW_STANDARD = "show_standard_standard"

DEFAULT_REFERENCES: dict[ReferenceKind, tuple[str, ...]] = {
    ReferenceKind.CLIENT: (CLIENT, "client_northwind"),
    ReferenceKind.STUDIO_ROOM: ("room_a", "room_b"),
    ReferenceKind.SHOW_TYPE: (SHOW_TYPE,),
    ReferenceKind.SHOW_STATUS: (SHOW_STATUS,),
    ReferenceKind.SHOW_STANDARD: (SHOW_STANDARD,),
    ReferenceKind.MC: ("mc_alex", "mc_sam", "mc_jo"),
    ReferenceKind.PLATFORM: ("platform_shopee", "platform_tiktok"),
}


def reference_id(kind: ReferenceKind, uid: str) -> str:
    """Internal id the store assigns to a seeded reference row."""
    return f"{kind.value}-id:{uid}"


def plan_show(
    temp_id: str,
    name: str | None = None,
    *,
    start: str = "2026-03-05T10:00:00Z",
    end: str = "2026-03-05T12:00:00Z",
    client: str = CLIENT,
    room: str | None = None,
    mcs: Sequence[str | dict[str, Any]] = (),
    platforms: Sequence[str | dict[str, Any]] = (),
    **extra: Any,
) -> dict[str, Any]:
    """Build one camelCase plan document show; mcs/platforms accept uids or full dicts."""
    show: dict[str, Any] = {
        "tempId": temp_id,
        "name": name or f"Show {temp_id}",
        "startTime": start,
        "endTime": end,
        "clientUid": client,
        "showTypeUid": SHOW_TYPE,
        "showStatusUid": SHOW_STATUS,
        "showStandardUid": SHOW_STANDARD,
        "mcs": [m if isinstance(m, dict) else {"mcUid": m} for m in mcs],
        "platforms": [p if isinstance(p, dict) else {"platformUid": p} for p in platforms],
    }
    if room is not None:
        show["studioRoomUid"] = room
    show.update(extra)
    return show


def plan_document(*shows: dict[str, Any], **metadata: Any) -> dict[str, Any]:
    return {"metadata": dict(metadata), "shows": list(shows)}


@dataclass
class InMemoryStore:
    """Tables keyed by internal id, plus seeded reference rows (kind -> uid -> id)."""

    schedules: dict[str, ScheduleResult] = field(default_factory=dict)
    snapshots: dict[str, ScheduleSnapshotResult] = field(default_factory=dict)
    shows: dict[str, ShowResult] = field(default_factory=dict)
    show_mcs: dict[str, ShowMcResult] = field(default_factory=dict)
    show_platforms: dict[str, ShowPlatformResult] = field(default_factory=dict)
    references: dict[ReferenceKind, dict[str, str]] = field(default_factory=dict)
    # Nesting depth of FakeUnitOfWork.atomic() blocks currently open.
    atomic_depth: int = 0
    _ticks: int = 0
    _ids: int = 0

    _TABLES = ("schedules", "snapshots", "shows", "show_mcs", "show_platforms")

    def now(self) -> datetime:
        """Strictly increasing clock (one microsecond per call)."""
        self._ticks += 1
        return SCHEDULE_START - timedelta(days=1) + timedelta(microseconds=self._ticks)

    def next_id(self, prefix: str) -> str:
        self._ids += 1
        return f"{prefix}-{self._ids}"

    def seed_references(
        self, references: dict[ReferenceKind, Sequence[str]] | None = None
    ) -> None:
        for kind, uids in (references or DEFAULT_REFERENCES).items():
            table = self.references.setdefault(kind, {})
            for uid in uids:
                table[uid] = reference_id(kind, uid)

    def checkpoint(self) -> dict[str, Any]:
        return {name: copy.deepcopy(getattr(self, name)) for name in self._TABLES}

    def restore(self, saved: dict[str, Any]) -> None:
        for name, table in saved.items():
            setattr(self, name, table)

    def active(self, table: str) -> list[Any]:
        return [row for row in getattr(self, table).values() if row.deleted_at is None]


class FakeUnitOfWork:
    """atomic() restores the store to its entry state when the block raises."""

    def __init__(self, store: InMemoryStore) -> None:
        self.store = store
        self.rollbacks = 0

    @asynccontextmanager
    async def atomic(self) -> AsyncIterator[None]:
        saved = self.store.checkpoint()
        self.store.atomic_depth += 1
        try:
            yield
        except Exception:
            self.store.restore(saved)
            self.rollbacks += 1
            raise
        finally:
            self.store.atomic_depth -= 1


class SequentialUidGenerator:
    def __init__(self) -> None:
        self.count = 0

    def new_uid(self, prefix: str) -> str:
        self.count += 1
        return f"{prefix}_{self.count:04d}"


class FakeReferenceLookup:
    """Resolves against store.references and records every call for batching checks."""

    def __init__(self, store: InMemoryStore) -> None:
        self.store = store
        self.calls: list[tuple[ReferenceKind, set[str]]] = []

    async def lookup_ids(self, kind: ReferenceKind, uids: set[str]) -> dict[str, str]:
        self.calls.append((kind, set(uids)))
        known = self.store.references.get(kind, {})
        return {uid: known[uid] for uid in uids if uid in known}


class FakeScheduleRepository:
    def __init__(self, store: InMemoryStore) -> None:
        self.store = store

    async def get_by_id(self, schedule_id: str) -> ScheduleResult | None:
        row = self.store.schedules.get(schedule_id)
        return row if row is not None and row.deleted_at is None else None

    async def get_by_uid(self, uid: str) -> ScheduleResult | None:
        for row in self.store.active("schedules"):
            if row.uid == uid:
                return row
        return None

    async def create_schedule(self, data: ScheduleCreate) -> ScheduleResult:
        now = self.store.now()
        row = ScheduleResult(
            id=self.store.next_id("sch"),
            uid=data.uid,
            name=data.name,
            start_date=data.start_date,
            end_date=data.end_date,
            status=ScheduleStatus.DRAFT,
            plan_document=copy.deepcopy(data.plan_document),
            version=1,
            client_id=data.client_id,
            created_by=data.created_by,
            published_at=None,
            published_by=None,
            created_at=now,
            updated_at=now,
        )
        self.store.schedules[row.id] = row
        return row

    async def increment_version_if_current(
        self, schedule_id: str, expected_version: int
    ) -> ScheduleResult | None:
        row = await self.get_by_id(schedule_id)
        if row is None or row.version != expected_version:
            return None
        bumped = replace(row, version=row.version + 1, updated_at=self.store.now())
        self.store.schedules[schedule_id] = bumped
        return bumped

    async def update_fields(self, schedule_id: str, changes: dict[str, Any]) -> ScheduleResult:
        if "version" in changes:
            raise ValueError("version is written only by increment_version_if_current")
        row = await self.get_by_id(schedule_id)
        if row is None:
            raise ResourceNotFoundException("schedule", schedule_id)
        updated = replace(row, **copy.deepcopy(changes), updated_at=self.store.now())
        self.store.schedules[schedule_id] = updated
        return updated

    async def soft_delete_many(self, row_ids: Sequence[str], deleted_at: datetime) -> int:
        count = 0
        for row_id in row_ids:
            row = self.store.schedules.get(row_id)
            if row is not None and row.deleted_at is None:
                self.store.schedules[row_id] = replace(row, deleted_at=deleted_at)
                count += 1
        return count


class FakeScheduleSnapshotRepository:
    def __init__(self, store: InMemoryStore) -> None:
        self.store = store

    async def create_snapshot(self, data: ScheduleSnapshotCreate) -> ScheduleSnapshotResult:
        row = ScheduleSnapshotResult(
            id=self.store.next_id("snap"),
            uid=data.uid,
            schedule_id=data.schedule_id,
            plan_document=copy.deepcopy(data.plan_document),
            version=data.version,
            status=data.status,
            snapshot_reason=data.snapshot_reason,
            created_by=data.created_by,
            created_at=self.store.now(),
        )
        self.store.snapshots[row.id] = row
        return row

    async def get_by_uid(self, uid: str) -> ScheduleSnapshotResult | None:
        for row in self.store.snapshots.values():
            if row.uid == uid:
                return row
        return None

    async def list_by_schedule(
        self,
        schedule_id: str,
        *,
        limit: int,
        offset: int = 0,
        order: SortOrder = SortOrder.DESC,
    ) -> list[ScheduleSnapshotResult]:
        rows = sorted(
            (r for r in self.store.snapshots.values() if r.schedule_id == schedule_id),
            key=lambda r: (r.created_at, r.version),
            reverse=order == SortOrder.DESC,
        )
        return rows[offset : offset + limit]


class _FakeSoftDeleteStore:
    """Shared create/update/soft-delete over one store table."""

    table: str
    id_prefix: str

    def __init__(self, store: InMemoryStore) -> None:
        self.store = store

    @property
    def rows(self) -> dict[str, Any]:
        return getattr(self.store, self.table)

    def _unique_key(self, row: Any) -> tuple[Any, ...] | None:
        raise NotImplementedError

    def _build(self, row_id: str, item: Any, now: datetime) -> Any:
        raise NotImplementedError

    def _check_unique(self, row: Any) -> None:
        key = self._unique_key(row)
        if key is None:
            return
        for other in self.rows.values():
            if other.id != row.id and other.deleted_at is None and self._unique_key(other) == key:
                raise PersistenceException("insert", f"unique violation on {self.table} {key}")

    async def create_many(self, items: Sequence[Any]) -> list[Any]:
        created = []
        for item in items:
            row = self._build(self.store.next_id(self.id_prefix), item, self.store.now())
            self._check_unique(row)
            self.rows[row.id] = row
            created.append(row)
        return created

    async def update_fields(self, row_id: str, changes: dict[str, Any]) -> Any:
        row = self.rows.get(row_id)
        if row is None or row.deleted_at is not None:
            raise ResourceNotFoundException(self.table, row_id)
        updated = replace(row, **copy.deepcopy(changes), updated_at=self.store.now())
        self.rows[row_id] = updated
        return updated

    async def soft_delete_many(self, row_ids: Sequence[str], deleted_at: datetime) -> int:
        count = 0
        for row_id in row_ids:
            row = self.rows.get(row_id)
            if row is not None and row.deleted_at is None:
                self.rows[row_id] = replace(row, deleted_at=deleted_at)
                count += 1
        return count


class FakeShowRepository(_FakeSoftDeleteStore):
    table = "shows"
    id_prefix = "show"

    def __init__(self, store: InMemoryStore) -> None:
        super().__init__(store)
        # (show uid, atomic depth) for every row lock taken.
        self.row_locks: list[tuple[str, int]] = []

    def _unique_key(self, row: ShowResult) -> tuple[Any, ...] | None:
        if row.schedule_id is None or row.plan_key is None:
            return None
        return (row.schedule_id, row.plan_key)

    def _build(self, row_id: str, item: ShowCreate, now: datetime) -> ShowResult:
        return ShowResult(
            id=row_id,
            uid=item.uid,
            schedule_id=item.schedule_id,
            plan_key=item.plan_key,
            name=item.name,
            start_time=item.start_time,
            end_time=item.end_time,
            client_id=item.client_id,
            studio_room_id=item.studio_room_id,
            show_type_id=item.show_type_id,
            show_status_id=item.show_status_id,
            show_standard_id=item.show_standard_id,
            metadata=copy.deepcopy(item.metadata),
            created_at=now,
            updated_at=now,
        )

    async def get_by_uid(self, uid: str) -> ShowResult | None:
        for row in self.store.active("shows"):
            if row.uid == uid:
                return row
        return None

    async def get_by_uid_for_update(self, uid: str) -> ShowResult | None:
        self.row_locks.append((uid, self.store.atomic_depth))
        return await self.get_by_uid(uid)

    async def get_by_id(self, show_id: str, include_deleted: bool = False) -> ShowResult | None:
        row = self.rows.get(show_id)
        if row is None or (row.deleted_at is not None and not include_deleted):
            return None
        return row

    async def list_by_schedule(
        self, schedule_id: str, include_deleted: bool = False
    ) -> list[ShowResult]:
        return [
            row
            for row in self.rows.values()
            if row.schedule_id == schedule_id and (include_deleted or row.deleted_at is None)
        ]


class _FakeShowAssignmentStore(_FakeSoftDeleteStore):
    key_field: str

    def _unique_key(self, row: Any) -> tuple[Any, ...]:
        return (row.show_id, getattr(row, self.key_field))

    async def get_by_id(self, row_id: str) -> Any:
        return self.rows.get(row_id)

    async def list_by_shows(
        self, show_ids: Sequence[str], include_deleted: bool = False
    ) -> list[Any]:
        wanted = set(show_ids)
        return [
            row
            for row in self.rows.values()
            if row.show_id in wanted and (include_deleted or row.deleted_at is None)
        ]

    async def soft_delete_by_shows(self, show_ids: Sequence[str], deleted_at: datetime) -> int:
        active = await self.list_by_shows(show_ids)
        return await self.soft_delete_many([row.id for row in active], deleted_at)


class FakeShowMcRepository(_FakeShowAssignmentStore):
    table = "show_mcs"
    id_prefix = "smc"
    key_field = "mc_id"

    def _build(self, row_id: str, item: ShowMcCreate, now: datetime) -> ShowMcResult:
        return ShowMcResult(
            id=row_id,
            uid=item.uid,
            show_id=item.show_id,
            mc_id=item.mc_id,
            note=item.note,
            metadata=copy.deepcopy(item.metadata),
            created_at=now,
            updated_at=now,
        )


class FakeShowPlatformRepository(_FakeShowAssignmentStore):
    table = "show_platforms"
    id_prefix = "spl"
    key_field = "platform_id"

    def _build(self, row_id: str, item: ShowPlatformCreate, now: datetime) -> ShowPlatformResult:
        return ShowPlatformResult(
            id=row_id,
            uid=item.uid,
            show_id=item.show_id,
            platform_id=item.platform_id,
            live_stream_link=item.live_stream_link,
            platform_show_id=item.platform_show_id,
            viewer_count=item.viewer_count,
            metadata=copy.deepcopy(item.metadata),
            created_at=now,
            updated_at=now,
        )


class Planning:
    """Every planning service wired against one in-memory store."""

    def __init__(self, store: InMemoryStore | None = None) -> None:
        self.store = store or InMemoryStore()
        self.uow = FakeUnitOfWork(self.store)
        self.uids = SequentialUidGenerator()
        self.lookup = FakeReferenceLookup(self.store)

        self.schedule_repo = FakeScheduleRepository(self.store)
        self.snapshot_repo = FakeScheduleSnapshotRepository(self.store)
        self.show_repo = FakeShowRepository(self.store)
        self.show_mc_repo = FakeShowMcRepository(self.store)
        self.show_platform_repo = FakeShowPlatformRepository(self.store)

        self.resolver = ReferenceResolver(self.lookup)
        self.version_guard = VersionGuard(self.schedule_repo, self.uow)
        self.recorder = SnapshotRecorder(self.schedule_repo, self.snapshot_repo, self.uids)
        self.reconciler = AssignmentReconciler(
            self.show_repo, self.show_mc_repo, self.show_platform_repo, self.uow, self.uids
        )

        self.schedules = ScheduleService(self.schedule_repo, self.resolver, self.uids)
        self.snapshots = SnapshotService(
            self.schedule_repo, self.snapshot_repo, self.recorder, default_limit=50, max_limit=200
        )
        self.validate = ValidateScheduleUseCase(self.schedule_repo, PlanValidator(self.resolver))
        self.update_plan = UpdatePlanDocumentUseCase(
            self.schedule_repo, self.recorder, self.version_guard, self.uow
        )
        self.restore = RestoreFromSnapshotUseCase(
            self.schedule_repo, self.snapshot_repo, self.recorder, self.version_guard, self.uow
        )
        self.publish = PublishScheduleUseCase(
            self.schedule_repo,
            self.show_repo,
            self.show_mc_repo,
            self.show_platform_repo,
            self.resolver,
            self.reconciler,
            self.recorder,
            self.version_guard,
            self.uow,
        )
        self.sync_assignments = SyncShowAssignmentsUseCase(
            self.show_repo,
            self.show_mc_repo,
            self.show_platform_repo,
            self.resolver,
            self.reconciler,
            self.uow,
        )

    async def draft(
        self,
        document: dict[str, Any] | None = None,
        *,
        created_by: str | None = "user-1",
        client_uid: str | None = None,
    ) -> ScheduleResult:
        """Create a draft schedule over March 2026, optionally with a plan document."""
        return await self.schedules.create_schedule(
            name="March live shows",
            start_date=SCHEDULE_START,
            end_date=SCHEDULE_END,
            acting_user_id=created_by,
            client_uid=client_uid,
            plan_document=document,
        )

    def active_shows(self, schedule_id: str) -> dict[str, ShowResult]:
        """Active shows of a schedule keyed by plan_key."""
        return {
            row.plan_key: row
            for row in self.store.active("shows")
            if row.schedule_id == schedule_id
        }

    def active_mc_uids(self, show_id: str) -> set[str]:
        by_id = {v: k for k, v in self.store.references.get(ReferenceKind.MC, {}).items()}
        return {by_id[row.mc_id] for row in self.store.active("show_mcs") if row.show_id == show_id}

    def active_platform_uids(self, show_id: str) -> set[str]:
        by_id = {v: k for k, v in self.store.references.get(ReferenceKind.PLATFORM, {}).items()}
        return {
            by_id[row.platform_id]
            for row in self.store.active("show_platforms")
            if row.show_id == show_id
        }
