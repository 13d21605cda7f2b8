"""Schedule snapshot repository. Append-only: no update or delete methods."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from showplan.application.dtos.schedule_snapshot import (
    ScheduleSnapshotCreate,
    ScheduleSnapshotResult,
)
from showplan.domain.enums import ScheduleStatus, SnapshotReason, SortOrder
from showplan.infrastructure.persistence.models.schedule_snapshot import ScheduleSnapshot
from showplan.infrastructure.persistence.repositories.base import BaseRepository


def _to_result(s: ScheduleSnapshot) -> ScheduleSnapshotResult:
    """Map ORM to DTO."""
    return ScheduleSnapshotResult(
        id=s.id,
        uid=s.uid,
        schedule_id=s.schedule_id,
        plan_document=s.plan_document,
        version=s.version,
        status=ScheduleStatus(s.status),
        snapshot_reason=SnapshotReason(s.snapshot_reason),
        created_by=s.created_by,
        created_at=s.created_at,
    )


class ScheduleSnapshotRepository(BaseRepository[ScheduleSnapshot]):
    """Schedule snapshot repository. create_snapshot, get_by_uid, list_by_schedule."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, ScheduleSnapshot)

    async def create_snapshot(self, data: ScheduleSnapshotCreate) -> ScheduleSnapshotResult:
        snapshot = ScheduleSnapshot(
            uid=data.uid,
            schedule_id=data.schedule_id,
            plan_document=data.plan_document,
            version=data.version,
            status=data.status.value,
            snapshot_reason=data.snapshot_reason.value,
            created_by=data.created_by,
        )
        created = await self.create(snapshot)
        return _to_result(created)

    async def get_by_uid(self, uid: str) -> ScheduleSnapshotResult | None:
        result = await self.db.execute(select(ScheduleSnapshot).where(ScheduleSnapshot.uid == uid))
        row = result.scalar_one_or_none()
        return _to_result(row) if row else None

    async def list_by_schedule(
        self,
        schedule_id: str,
        *,
        limit: int,
        offset: int = 0,
        order: SortOrder = SortOrder.DESC,
    ) -> list[ScheduleSnapshotResult]:
        """Return snapshots ordered by created_at, then version (newest first unless order=asc)."""
        if order == SortOrder.ASC:
            ordering = (ScheduleSnapshot.created_at.asc(), ScheduleSnapshot.version.asc())
        else:
            ordering = (ScheduleSnapshot.created_at.desc(), ScheduleSnapshot.version.desc())
        result = await self.db.execute(
            select(ScheduleSnapshot)
            .where(ScheduleSnapshot.schedule_id == schedule_id)
            .order_by(*ordering)
            .offset(offset)
            .limit(limit)
        )
        return [_to_result(row) for row in result.scalars().all()]
