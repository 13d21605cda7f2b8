"""Show repository. Writes come only from the assignment reconciler."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from showplan.application.dtos.show import ShowCreate, ShowResult
from showplan.infrastructure.persistence.models.show import Show
from showplan.infrastructure.persistence.repositories.base import SoftDeleteRepository
from showplan.shared.utils.datetime import ensure_utc


def _to_result(s: Show) -> ShowResult:
    """Map ORM to DTO."""
    return ShowResult(
        id=s.id,
        uid=s.uid,
        schedule_id=s.schedule_id,
        plan_key=s.plan_key,
        name=s.name,
        start_time=ensure_utc(s.start_time),
        end_time=ensure_utc(s.end_time),
        client_id=s.client_id,
        studio_room_id=s.studio_room_id,
        show_type_id=s.show_type_id,
        show_status_id=s.show_status_id,
        show_standard_id=s.show_standard_id,
        metadata=s.extra_metadata or {},
        created_at=s.created_at,
        updated_at=s.updated_at,
        deleted_at=s.deleted_at,
    )


class ShowRepository(SoftDeleteRepository[Show, ShowResult]):
    """Show repository: lookups by uid/id/schedule plus reconciler writes."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Show)

    def _to_result(self, obj: Show) -> ShowResult:
        return _to_result(obj)

    def _to_model(self, data: ShowCreate) -> Show:
        return Show(
            uid=data.uid,
            schedule_id=data.schedule_id,
            plan_key=data.plan_key,
            name=data.name,
            start_time=data.start_time,
            end_time=data.end_time,
            client_id=data.client_id,
            studio_room_id=data.studio_room_id,
            show_type_id=data.show_type_id,
            show_status_id=data.show_status_id,
            show_standard_id=data.show_standard_id,
            extra_metadata=data.metadata,
        )

    async def get_by_uid(self, uid: str) -> ShowResult | None:
        result = await self.db.execute(
            select(Show).where(Show.uid == uid, Show.deleted_at.is_(None))
        )
        row = result.scalar_one_or_none()
        return _to_result(row) if row else None

    async def get_by_uid_for_update(self, uid: str) -> ShowResult | None:
        """Active show by uid, row-locked (SELECT ... FOR UPDATE) until the transaction ends."""
        result = await self.db.execute(
            select(Show)
            .where(Show.uid == uid, Show.deleted_at.is_(None))
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        row = result.scalar_one_or_none()
        return _to_result(row) if row else None

    async def get_by_id(self, show_id: str, include_deleted: bool = False) -> ShowResult | None:
        stmt = select(Show).where(Show.id == show_id)
        if not include_deleted:
            stmt = stmt.where(Show.deleted_at.is_(None))
        result = await self.db.execute(stmt)
        row = result.scalar_one_or_none()
        return _to_result(row) if row else None

    async def list_by_schedule(
        self, schedule_id: str, include_deleted: bool = False
    ) -> list[ShowResult]:
        stmt = select(Show).where(Show.schedule_id == schedule_id)
        if not include_deleted:
            stmt = stmt.where(Show.deleted_at.is_(None))
        result = await self.db.execute(stmt.order_by(Show.start_time, Show.id))
        return [_to_result(row) for row in result.scalars().all()]
