"""Presentation-layer dependency injection (composition root).

Routes depend only on these providers, never on infrastructure directly.
Read paths use get_db; write paths use get_db_transactional so a use case,
its snapshot and its version bump share one transaction.
"""

from showplan.api.v1.dependencies.actor import get_acting_user_id, get_optional_acting_user_id
from showplan.api.v1.dependencies.planning import (
    get_publish_schedule_use_case,
    get_restore_from_snapshot_use_case,
    get_schedule_service,
    get_schedule_service_for_write,
    get_snapshot_service,
    get_snapshot_service_for_write,
    get_sync_show_assignments_use_case,
    get_update_plan_document_use_case,
    get_validate_schedule_use_case,
)

__all__ = [
    "get_acting_user_id",
    "get_optional_acting_user_id",
    "get_publish_schedule_use_case",
    "get_restore_from_snapshot_use_case",
    "get_schedule_service",
    "get_schedule_service_for_write",
    "get_snapshot_service",
    "get_snapshot_service_for_write",
    "get_sync_show_assignments_use_case",
    "get_update_plan_document_use_case",
    "get_validate_schedule_use_case",
]
