"""Optimistic concurrency for schedules: compare-and-increment on the version column."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING

from showplan.domain.exceptions import ResourceNotFoundException, VersionConflictException
from showplan.shared.logging import get_logger
from showplan.shared.telemetry import add_span_attributes, add_span_event, traced

if TYPE_CHECKING:
    from showplan.application.dtos.schedule import ScheduleResult
    from showplan.application.interfaces.repositories import IScheduleRepository
    from showplan.application.interfaces.services import IUnitOfWork

logger = get_logger(__name__)


class VersionGuard:
    """Gate for every plan document mutation. Sole writer of Schedule.version.

    The conditional increment runs first so the row lock it takes serializes
    racing callers: exactly one wins, the rest get VersionConflictException.
    No automatic retry; callers re-fetch and resubmit.
    """

    def __init__(self, schedule_repo: IScheduleRepository, uow: IUnitOfWork) -> None:
        self._schedule_repo = schedule_repo
        self._uow = uow

    @traced("schedule.version_guard")
    async def apply_if_version_matches[T](
        self,
        schedule_id: str,
        expected_version: int,
        mutation: Callable[[ScheduleResult], Awaitable[T]],
    ) -> T:
        """Increment version iff it equals expected_version, then run mutation, atomically.

        mutation receives the schedule with its new version. If it raises,
        the increment and every write it made are undone.

        Raises:
            ResourceNotFoundException: Schedule does not exist (or is soft-deleted).
            VersionConflictException: Persisted version differs from expected_version.
        """
        add_span_attributes(schedule_id=schedule_id, expected_version=expected_version)
        async with self._uow.atomic():
            bumped = await self._schedule_repo.increment_version_if_current(
                schedule_id, expected_version
            )
            if bumped is None:
                current = await self._schedule_repo.get_by_id(schedule_id)
                if current is None:
                    raise ResourceNotFoundException("schedule", schedule_id)
                add_span_event("version_conflict", {"current_version": current.version})
                logger.warning(
                    "Version conflict on schedule %s: expected %s, current %s",
                    schedule_id,
                    expected_version,
                    current.version,
                )
                raise VersionConflictException(
                    "schedule", current.uid, expected_version, current.version
                )
            return await mutation(bumped)
