"""Show use cases."""

from showplan.application.use_cases.shows.sync_show_assignments import (
    SyncShowAssignmentsUseCase,
)

__all__ = ["SyncShowAssignmentsUseCase"]
