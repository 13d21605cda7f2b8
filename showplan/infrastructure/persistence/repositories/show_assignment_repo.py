"""ShowMC and ShowPlatform repositories (soft-deleted rows are kept as history)."""

from collections.abc import Sequence
from datetime import datetime
from typing import Any

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from showplan.application.dtos.show import (
    ShowMcCreate,
    ShowMcResult,
    ShowPlatformCreate,
    ShowPlatformResult,
)
from showplan.infrastructure.persistence.database import Base
from showplan.infrastructure.persistence.models.show import ShowMC, ShowPlatform
from showplan.infrastructure.persistence.repositories.base import SoftDeleteRepository


class _ShowAssignmentRepository[ModelType: Base, ResultT](
    SoftDeleteRepository[ModelType, ResultT]
):
    """Queries shared by assignment tables keyed by show_id."""

    async def get_by_id(self, row_id: str) -> ResultT | None:
        """Return assignment by id, including soft-deleted rows."""
        row = await self._get_orm_by_id(row_id)
        return self._to_result(row) if row else None

    async def list_by_shows(
        self, show_ids: Sequence[str], include_deleted: bool = False
    ) -> list[ResultT]:
        if not show_ids:
            return []
        model: Any = self.model
        stmt = select(self.model).where(model.show_id.in_(list(show_ids)))
        if not include_deleted:
            stmt = stmt.where(model.deleted_at.is_(None))
        result = await self.db.execute(stmt.order_by(model.show_id, model.created_at, model.id))
        return [self._to_result(row) for row in result.scalars().all()]

    async def soft_delete_by_shows(self, show_ids: Sequence[str], deleted_at: datetime) -> int:
        if not show_ids:
            return 0
        model: Any = self.model
        result = await self.db.execute(
            update(self.model)
            .where(model.show_id.in_(list(show_ids)), model.deleted_at.is_(None))
            .values(deleted_at=deleted_at)
            .execution_options(synchronize_session="fetch")
        )
        return result.rowcount


def _mc_to_result(m: ShowMC) -> ShowMcResult:
    """Map ORM to DTO."""
    return ShowMcResult(
        id=m.id,
        uid=m.uid,
        show_id=m.show_id,
        mc_id=m.mc_id,
        note=m.note,
        metadata=m.extra_metadata or {},
        created_at=m.created_at,
        updated_at=m.updated_at,
        deleted_at=m.deleted_at,
    )


def _platform_to_result(p: ShowPlatform) -> ShowPlatformResult:
    """Map ORM to DTO."""
    return ShowPlatformResult(
        id=p.id,
        uid=p.uid,
        show_id=p.show_id,
        platform_id=p.platform_id,
        live_stream_link=p.live_stream_link,
        platform_show_id=p.platform_show_id,
        viewer_count=p.viewer_count,
        metadata=p.extra_metadata or {},
        created_at=p.created_at,
        updated_at=p.updated_at,
        deleted_at=p.deleted_at,
    )


class ShowMcRepository(_ShowAssignmentRepository[ShowMC, ShowMcResult]):
    """ShowMC repository. Natural key (show_id, mc_id) among active rows."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, ShowMC)

    def _to_result(self, obj: ShowMC) -> ShowMcResult:
        return _mc_to_result(obj)

    def _to_model(self, data: ShowMcCreate) -> ShowMC:
        return ShowMC(
            uid=data.uid,
            show_id=data.show_id,
            mc_id=data.mc_id,
            note=data.note,
            extra_metadata=data.metadata,
        )


class ShowPlatformRepository(_ShowAssignmentRepository[ShowPlatform, ShowPlatformResult]):
    """ShowPlatform repository. Natural key (show_id, platform_id) among active rows."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, ShowPlatform)

    def _to_result(self, obj: ShowPlatform) -> ShowPlatformResult:
        return _platform_to_result(obj)

    def _to_model(self, data: ShowPlatformCreate) -> ShowPlatform:
        return ShowPlatform(
            uid=data.uid,
            show_id=data.show_id,
            platform_id=data.platform_id,
            live_stream_link=data.live_stream_link,
            platform_show_id=data.platform_show_id,
            viewer_count=data.viewer_count,
            extra_metadata=data.metadata,
        )
