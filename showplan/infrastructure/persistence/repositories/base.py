"""Base repositories: primary-key access, inserts, and soft-delete aware writes."""

from collections.abc import Sequence
from datetime import datetime
from enum import Enum
from typing import Any, ClassVar

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from showplan.domain.exceptions import ResourceNotFoundException
from showplan.infrastructure.persistence.database import Base


class BaseRepository[ModelType: Base]:
    """Base repository with _get_orm_by_id and create.

    Public methods of subclasses return application DTOs, never ORM objects.
    """

    def __init__(self, db: AsyncSession, model: type[ModelType]) -> None:
        self.db = db
        self.model = model

    async def _get_orm_by_id(self, entity_id: str) -> ModelType | None:
        """Return a single ORM record by primary key, or None. Always reloads from the database."""
        model: Any = self.model
        result = await self.db.execute(
            select(self.model)
            .where(model.id == entity_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def create(self, obj: ModelType) -> ModelType:
        """Persist a new record (flush + refresh for server defaults)."""
        self.db.add(obj)
        await self.db.flush()
        await self.db.refresh(obj)
        return obj


class SoftDeleteRepository[ModelType: Base, ResultT](BaseRepository[ModelType]):
    """Write side used by the reconciler: create_many, update_fields, soft_delete_many.

    Subclasses implement _to_result and _to_model. DTO field names that differ
    from ORM attribute names are listed in _attribute_aliases.
    """

    _attribute_aliases: ClassVar[dict[str, str]] = {"metadata": "extra_metadata"}

    def _to_result(self, obj: ModelType) -> ResultT:
        raise NotImplementedError

    def _to_model(self, data: Any) -> ModelType:
        raise NotImplementedError

    async def create_many(self, items: Sequence[Any]) -> list[ResultT]:
        """Insert rows in order and return them."""
        objs = [self._to_model(item) for item in items]
        if not objs:
            return []
        self.db.add_all(objs)
        await self.db.flush()
        for obj in objs:
            await self.db.refresh(obj)
        return [self._to_result(obj) for obj in objs]

    async def update_fields(self, row_id: str, changes: dict[str, Any]) -> ResultT:
        """Overwrite the given columns on one active row."""
        obj: Any = await self._get_orm_by_id(row_id)
        if obj is None or getattr(obj, "deleted_at", None) is not None:
            raise ResourceNotFoundException(self.model.__tablename__, row_id)
        for name, value in changes.items():
            if isinstance(value, Enum):
                value = value.value
            setattr(obj, self._attribute_aliases.get(name, name), value)
        await self.db.flush()
        await self.db.refresh(obj)
        return self._to_result(obj)

    async def soft_delete_many(self, row_ids: Sequence[str], deleted_at: datetime) -> int:
        """Set deleted_at on active rows; already-deleted rows keep their original timestamp."""
        if not row_ids:
            return 0
        model: Any = self.model
        result = await self.db.execute(
            update(self.model)
            .where(model.id.in_(list(row_ids)), model.deleted_at.is_(None))
            .values(deleted_at=deleted_at)
            .execution_options(synchronize_session="fetch")
        )
        return result.rowcount
