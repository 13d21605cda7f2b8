"""Schedule lifecycle operations outside publish: create, get, duplicate, delete."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Any

from showplan.application.dtos.schedule import ScheduleCreate, ScheduleResult
from showplan.application.services.plan_document_schema import parse_plan_document
from showplan.domain.enums import ReferenceKind
from showplan.domain.exceptions import (
    ResourceNotFoundException,
    ScheduleStateException,
    ValidationException,
)
from showplan.domain.plan_document import clone_with_fresh_temp_ids, default_plan_document
from showplan.shared.logging import get_logger
from showplan.shared.utils.datetime import ensure_utc, utc_now

if TYPE_CHECKING:
    from showplan.application.interfaces.repositories import IScheduleRepository
    from showplan.application.interfaces.services import IUidGenerator
    from showplan.application.services.reference_resolver import ReferenceResolver

logger = get_logger(__name__)

SCHEDULE_UID_PREFIX = "schedule"
TEMP_ID_PREFIX = "tmp"


async def get_schedule_or_raise(
    schedule_repo: IScheduleRepository, schedule_uid: str
) -> ScheduleResult:
    """Return the active schedule or raise ResourceNotFoundException."""
    schedule = await schedule_repo.get_by_uid(schedule_uid)
    if schedule is None:
        raise ResourceNotFoundException("schedule", schedule_uid)
    return schedule


class ScheduleService:
    """Create, read, duplicate and delete schedules. New schedules are drafts at version 1."""

    def __init__(
        self,
        schedule_repo: IScheduleRepository,
        reference_resolver: ReferenceResolver,
        uid_generator: IUidGenerator,
    ) -> None:
        self.schedule_repo = schedule_repo
        self.reference_resolver = reference_resolver
        self.uids = uid_generator

    async def create_schedule(
        self,
        name: str,
        start_date: datetime,
        end_date: datetime,
        acting_user_id: str | None,
        client_uid: str | None = None,
        plan_document: dict[str, Any] | None = None,
    ) -> ScheduleResult:
        """Create a draft schedule. Raises ValidationException when end_date <= start_date.

        Naive dates are taken as UTC.
        """
        if not name or not name.strip():
            raise ValidationException("Schedule name must not be empty", field="name")
        start_date, end_date = ensure_utc(start_date), ensure_utc(end_date)
        if end_date <= start_date:
            raise ValidationException("End date must be after start date", field="end_date")
        document = plan_document if plan_document is not None else default_plan_document()
        parse_plan_document(document)
        client_id = None
        if client_uid:
            resolved = await self.reference_resolver.resolve(
                {ReferenceKind.CLIENT: {client_uid}}
            )
            client_id = resolved.id_for(ReferenceKind.CLIENT, client_uid)
        schedule = await self.schedule_repo.create_schedule(
            ScheduleCreate(
                uid=self.uids.new_uid(SCHEDULE_UID_PREFIX),
                name=name.strip(),
                start_date=start_date,
                end_date=end_date,
                plan_document=document,
                client_id=client_id,
                created_by=acting_user_id,
            )
        )
        logger.info("Created schedule %s (%s)", schedule.uid, schedule.name)
        return schedule

    async def get_schedule(self, schedule_uid: str) -> ScheduleResult:
        return await get_schedule_or_raise(self.schedule_repo, schedule_uid)

    async def duplicate_schedule(
        self, schedule_uid: str, name: str, acting_user_id: str | None
    ) -> ScheduleResult:
        """Copy a schedule's plan into a new draft.

        Shows get fresh tempIds and lose existingShowUid, so publishing the copy
        never touches the source schedule's materialized shows.
        """
        if not name or not name.strip():
            raise ValidationException("Schedule name must not be empty", field="name")
        source = await get_schedule_or_raise(self.schedule_repo, schedule_uid)
        document = clone_with_fresh_temp_ids(
            source.plan_document, lambda: self.uids.new_uid(TEMP_ID_PREFIX)
        )
        copy = await self.schedule_repo.create_schedule(
            ScheduleCreate(
                uid=self.uids.new_uid(SCHEDULE_UID_PREFIX),
                name=name.strip(),
                start_date=source.start_date,
                end_date=source.end_date,
                plan_document=document,
                client_id=source.client_id,
                created_by=acting_user_id,
            )
        )
        logger.info("Duplicated schedule %s into %s", source.uid, copy.uid)
        return copy

    async def delete_schedule(self, schedule_uid: str, acting_user_id: str | None) -> None:
        """Soft-delete a draft schedule. Its snapshots are kept.

        Raises:
            ResourceNotFoundException: Unknown or already deleted schedule.
            ScheduleStateException: Schedule is published.
        """
        schedule = await get_schedule_or_raise(self.schedule_repo, schedule_uid)
        if not schedule.is_draft:
            raise ScheduleStateException(schedule.uid, schedule.status.value, "delete")
        await self.schedule_repo.soft_delete_many([schedule.id], utc_now())
        logger.info("Schedule %s deleted by %s", schedule.uid, acting_user_id)
