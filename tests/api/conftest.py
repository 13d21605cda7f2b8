"""API test fixtures: route dependencies overridden with in-memory planning services."""

import pytest

from showplan.api.v1.dependencies import (
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
from showplan.core.limiter import limiter
from showplan.main import app


@pytest.fixture
def api_planning(planning):
    """Point every planning dependency at the in-memory harness for the test's duration."""
    limiter.reset()
    app.dependency_overrides.update(
        {
            get_schedule_service: lambda: planning.schedules,
            get_schedule_service_for_write: lambda: planning.schedules,
            get_snapshot_service: lambda: planning.snapshots,
            get_snapshot_service_for_write: lambda: planning.snapshots,
            get_validate_schedule_use_case: lambda: planning.validate,
            get_update_plan_document_use_case: lambda: planning.update_plan,
            get_restore_from_snapshot_use_case: lambda: planning.restore,
            get_publish_schedule_use_case: lambda: planning.publish,
            get_sync_show_assignments_use_case: lambda: planning.sync_assignments,
        }
    )
    yield planning
    app.dependency_overrides.clear()
