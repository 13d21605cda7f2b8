"""Repository implementations (SQLAlchemy). Return application DTOs."""

from showplan.infrastructure.persistence.repositories.reference_lookup_repo import (
    ReferenceLookupRepository,
)
from showplan.infrastructure.persistence.repositories.schedule_repo import ScheduleRepository
from showplan.infrastructure.persistence.repositories.schedule_snapshot_repo import (
    ScheduleSnapshotRepository,
)
from showplan.infrastructure.persistence.repositories.show_assignment_repo import (
    ShowMcRepository,
    ShowPlatformRepository,
)
from showplan.infrastructure.persistence.repositories.show_repo import ShowRepository
from showplan.infrastructure.persistence.repositories.unit_of_work import SqlAlchemyUnitOfWork

__all__ = [
    "ReferenceLookupRepository",
    "ScheduleRepository",
    "ScheduleSnapshotRepository",
    "ShowMcRepository",
    "ShowPlatformRepository",
    "ShowRepository",
    "SqlAlchemyUnitOfWork",
]
