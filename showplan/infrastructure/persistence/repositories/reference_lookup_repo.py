"""Batched uid -> id lookups over the reference (lookup) tables."""

from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from showplan.domain.enums import ReferenceKind
from showplan.infrastructure.persistence.models.reference import (
    Client,
    Mc,
    Platform,
    ReferenceEntity,
    ShowStandard,
    ShowStatus,
    ShowType,
    StudioRoom,
)

_MODELS: dict[ReferenceKind, type[ReferenceEntity]] = {
    ReferenceKind.CLIENT: Client,
    ReferenceKind.STUDIO_ROOM: StudioRoom,
    ReferenceKind.SHOW_TYPE: ShowType,
    ReferenceKind.SHOW_STATUS: ShowStatus,
    ReferenceKind.SHOW_STANDARD: ShowStandard,
    ReferenceKind.MC: Mc,
    ReferenceKind.PLATFORM: Platform,
}


class ReferenceLookupRepository:
    """One SELECT per kind; soft-deleted reference rows do not resolve."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def lookup_ids(self, kind: ReferenceKind, uids: set[str]) -> dict[str, str]:
        if not uids:
            return {}
        model: Any = _MODELS[kind]
        result = await self.db.execute(
            select(model.uid, model.id).where(
                model.uid.in_(sorted(uids)), model.deleted_at.is_(None)
            )
        )
        return {uid: id_ for uid, id_ in result.all()}
