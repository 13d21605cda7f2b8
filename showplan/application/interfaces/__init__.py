"""Application ports: repository and service Protocols (DIP)."""

from showplan.application.interfaces.repositories import (
    IReconcilableStore,
    IReferenceLookup,
    IScheduleRepository,
    IScheduleSnapshotRepository,
    IShowMcRepository,
    IShowPlatformRepository,
    IShowRepository,
)
from showplan.application.interfaces.services import IUidGenerator, IUnitOfWork

__all__ = [
    "IReconcilableStore",
    "IReferenceLookup",
    "IScheduleRepository",
    "IScheduleSnapshotRepository",
    "IShowMcRepository",
    "IShowPlatformRepository",
    "IShowRepository",
    "IUidGenerator",
    "IUnitOfWork",
]
