"""DTOs for set reconciliation (desired vs existing rows) and publish outcomes."""

from dataclasses import dataclass

from showplan.application.dtos.schedule import ScheduleResult
from showplan.application.dtos.show import ShowMcResult, ShowPlatformResult


@dataclass(frozen=True)
class ReconcilePlan[DesiredT, RowT]:
    """Classification of one reconciliation call before anything is written.

    Natural keys are disjoint across creates, updates, and soft_deletes.
    """

    creates: tuple[DesiredT, ...]
    updates: tuple[tuple[RowT, DesiredT], ...]
    soft_deletes: tuple[RowT, ...]


@dataclass(frozen=True)
class ReconcileResult[RowT]:
    """Rows after applying a plan. unchanged rows were matched but needed no write."""

    created: tuple[RowT, ...] = ()
    updated: tuple[RowT, ...] = ()
    unchanged: tuple[RowT, ...] = ()
    soft_deleted: tuple[RowT, ...] = ()

    @property
    def active(self) -> tuple[RowT, ...]:
        """Rows that remain active after the call (created + updated + unchanged)."""
        return self.created + self.updated + self.unchanged


@dataclass(frozen=True)
class PublishResult:
    """Outcome of publishing a schedule."""

    schedule: ScheduleResult
    shows_created: int
    shows_deleted: int
    shows_updated: int


@dataclass(frozen=True)
class ShowAssignmentsResult:
    """Outcome of syncing one show's assignments. None means that kind was not touched."""

    show_id: str
    mcs: ReconcileResult[ShowMcResult] | None
    platforms: ReconcileResult[ShowPlatformResult] | None
