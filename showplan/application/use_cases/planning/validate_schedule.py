"""Validate a schedule's plan document (read-only, no version required)."""

from __future__ import annotations

from typing import TYPE_CHECKING

from showplan.application.dtos.validation import ValidationResult
from showplan.application.use_cases.planning.schedule_operations import get_schedule_or_raise

if TYPE_CHECKING:
    from showplan.application.interfaces.repositories import IScheduleRepository
    from showplan.application.services.plan_validator import PlanValidator


class ValidateScheduleUseCase:
    """Returns structured errors and warnings; plan problems are data, not exceptions."""

    def __init__(self, schedule_repo: IScheduleRepository, plan_validator: PlanValidator) -> None:
        self.schedule_repo = schedule_repo
        self.plan_validator = plan_validator

    async def execute(self, schedule_uid: str) -> ValidationResult:
        """Raises ResourceNotFoundException only when the schedule does not exist."""
        schedule = await get_schedule_or_raise(self.schedule_repo, schedule_uid)
        return await self.plan_validator.validate(schedule)
