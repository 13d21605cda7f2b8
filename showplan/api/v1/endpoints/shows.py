"""Show API: ad-hoc MC/platform assignment sync for a materialized show."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from showplan.api.v1.dependencies import (
    get_acting_user_id,
    get_sync_show_assignments_use_case,
)
from showplan.application.dtos.reconciliation import ReconcileResult
from showplan.application.use_cases.shows import SyncShowAssignmentsUseCase
from showplan.core.limiter import limit_writes
from showplan.schemas.show import (
    AssignmentChangesResponse,
    ShowAssignmentsRequest,
    ShowAssignmentsResponse,
    ShowMcResponse,
    ShowPlatformResponse,
)

router = APIRouter()


def _changes(result: ReconcileResult, item_model: type) -> AssignmentChangesResponse:
    return AssignmentChangesResponse[item_model](
        created=[item_model.model_validate(r) for r in result.created],
        updated=[item_model.model_validate(r) for r in result.updated],
        unchanged=[item_model.model_validate(r) for r in result.unchanged],
        soft_deleted=[item_model.model_validate(r) for r in result.soft_deleted],
    )


@router.put("/{show_uid}/assignments", response_model=ShowAssignmentsResponse)
@limit_writes
async def sync_show_assignments(
    request: Request,
    show_uid: str,
    body: ShowAssignmentsRequest,
    _: Annotated[str, Depends(get_acting_user_id)],
    use_case: Annotated[
        SyncShowAssignmentsUseCase, Depends(get_sync_show_assignments_use_case)
    ],
):
    """Reconcile the show's MCs and/or platforms. An omitted list is left untouched."""
    result = await use_case.execute(
        show_uid,
        mcs=[m.to_entry() for m in body.mcs] if body.mcs is not None else None,
        platforms=(
            [p.to_entry() for p in body.platforms] if body.platforms is not None else None
        ),
    )
    return ShowAssignmentsResponse(
        show_uid=show_uid,
        mcs=_changes(result.mcs, ShowMcResponse) if result.mcs is not None else None,
        platforms=(
            _changes(result.platforms, ShowPlatformResponse)
            if result.platforms is not None
            else None
        ),
    )
