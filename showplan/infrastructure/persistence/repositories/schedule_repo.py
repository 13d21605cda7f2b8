"""Schedule repository. The conditional version increment lives here (optimistic lock)."""

from typing import Any

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from showplan.application.dtos.schedule import ScheduleCreate, ScheduleResult
from showplan.domain.enums import ScheduleStatus
from showplan.infrastructure.persistence.models.schedule import Schedule
from showplan.infrastructure.persistence.repositories.base import SoftDeleteRepository
from showplan.shared.utils.datetime import ensure_utc

_VERSION_COLUMN = "version"


def _to_result(s: Schedule) -> ScheduleResult:
    """Map ORM to DTO."""
    return ScheduleResult(
        id=s.id,
        uid=s.uid,
        name=s.name,
        start_date=ensure_utc(s.start_date),
        end_date=ensure_utc(s.end_date),
        status=ScheduleStatus(s.status),
        plan_document=s.plan_document,
        version=s.version,
        client_id=s.client_id,
        created_by=s.created_by,
        published_at=ensure_utc(s.published_at),
        published_by=s.published_by,
        created_at=s.created_at,
        updated_at=s.updated_at,
        deleted_at=s.deleted_at,
    )


class ScheduleRepository(SoftDeleteRepository[Schedule, ScheduleResult]):
    """Schedule repository. Only increment_version_if_current writes the version column."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Schedule)

    def _to_result(self, obj: Schedule) -> ScheduleResult:
        return _to_result(obj)

    async def get_by_id(self, schedule_id: str) -> ScheduleResult | None:
        result = await self.db.execute(
            select(Schedule).where(Schedule.id == schedule_id, Schedule.deleted_at.is_(None))
        )
        row = result.scalar_one_or_none()
        return _to_result(row) if row else None

    async def get_by_uid(self, uid: str) -> ScheduleResult | None:
        result = await self.db.execute(
            select(Schedule).where(Schedule.uid == uid, Schedule.deleted_at.is_(None))
        )
        row = result.scalar_one_or_none()
        return _to_result(row) if row else None

    async def create_schedule(self, data: ScheduleCreate) -> ScheduleResult:
        schedule = Schedule(
            uid=data.uid,
            name=data.name,
            start_date=data.start_date,
            end_date=data.end_date,
            status=ScheduleStatus.DRAFT.value,
            plan_document=data.plan_document,
            version=1,
            client_id=data.client_id,
            created_by=data.created_by,
        )
        created = await self.create(schedule)
        return _to_result(created)

    async def increment_version_if_current(
        self, schedule_id: str, expected_version: int
    ) -> ScheduleResult | None:
        """UPDATE ... SET version = version + 1 WHERE version = expected (row lock serializes racers).

        Returns the bumped schedule, or None if no active row had expected_version.
        """
        stmt = (
            update(Schedule)
            .where(
                Schedule.id == schedule_id,
                Schedule.version == expected_version,
                Schedule.deleted_at.is_(None),
            )
            .values(version=Schedule.version + 1)
            .returning(Schedule)
            .execution_options(populate_existing=True)
        )
        result = await self.db.execute(stmt)
        row = result.scalar_one_or_none()
        return _to_result(row) if row else None

    async def update_fields(self, schedule_id: str, changes: dict[str, Any]) -> ScheduleResult:
        """Update non-version columns (plan_document, status, published_at, published_by)."""
        if _VERSION_COLUMN in changes:
            raise ValueError("version is written only by increment_version_if_current")
        return await super().update_fields(schedule_id, changes)
