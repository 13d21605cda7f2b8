"""SQLAlchemy ORM models. Import from here so Base.metadata sees every table (Alembic)."""

from showplan.infrastructure.persistence.models.reference import (
    Client,
    Mc,
    Platform,
    ShowStandard,
    ShowStatus,
    ShowType,
    StudioRoom,
)
from showplan.infrastructure.persistence.models.schedule import Schedule
from showplan.infrastructure.persistence.models.schedule_snapshot import ScheduleSnapshot
from showplan.infrastructure.persistence.models.show import Show, ShowMC, ShowPlatform

__all__ = [
    "Client",
    "Mc",
    "Platform",
    "Schedule",
    "ScheduleSnapshot",
    "Show",
    "ShowMC",
    "ShowPlatform",
    "ShowStandard",
    "ShowStatus",
    "ShowType",
    "StudioRoom",
]
