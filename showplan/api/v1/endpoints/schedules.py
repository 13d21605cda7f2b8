"""Schedule API: thin routes delegating to planning use cases."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, Response

from showplan.api.v1.dependencies import (
    get_acting_user_id,
    get_publish_schedule_use_case,
    get_schedule_service,
    get_schedule_service_for_write,
    get_snapshot_service,
    get_snapshot_service_for_write,
    get_update_plan_document_use_case,
    get_validate_schedule_use_case,
)
from showplan.application.use_cases.planning import (
    PublishScheduleUseCase,
    ScheduleService,
    SnapshotService,
    UpdatePlanDocumentUseCase,
    ValidateScheduleUseCase,
)
from showplan.core.limiter import limit_publish, limit_writes
from showplan.domain.enums import SortOrder
from showplan.schemas.schedule import (
    DuplicateScheduleRequest,
    PlanDocumentUpdateRequest,
    PublishRequest,
    PublishResponse,
    ScheduleCreateRequest,
    ScheduleResponse,
)
from showplan.schemas.snapshot import (
    ManualSnapshotRequest,
    SnapshotListItem,
    SnapshotResponse,
)
from showplan.schemas.validation import ValidationResultResponse

router = APIRouter()


@router.post("", response_model=ScheduleResponse, status_code=201)
@limit_writes
async def create_schedule(
    request: Request,
    body: ScheduleCreateRequest,
    acting_user_id: Annotated[str, Depends(get_acting_user_id)],
    service: Annotated[ScheduleService, Depends(get_schedule_service_for_write)],
):
    """Create a draft schedule at version 1. created_by is the acting user."""
    schedule = await service.create_schedule(
        name=body.name,
        start_date=body.start_date,
        end_date=body.end_date,
        acting_user_id=acting_user_id,
        client_uid=body.client_uid,
        plan_document=body.plan_document,
    )
    return ScheduleResponse.model_validate(schedule)


@router.get("/{schedule_uid}", response_model=ScheduleResponse)
async def get_schedule(
    schedule_uid: str,
    service: Annotated[ScheduleService, Depends(get_schedule_service)],
):
    schedule = await service.get_schedule(schedule_uid)
    return ScheduleResponse.model_validate(schedule)


@router.put("/{schedule_uid}/plan-document", response_model=ScheduleResponse)
@limit_writes
async def update_plan_document(
    request: Request,
    schedule_uid: str,
    body: PlanDocumentUpdateRequest,
    acting_user_id: Annotated[str, Depends(get_acting_user_id)],
    use_case: Annotated[UpdatePlanDocumentUseCase, Depends(get_update_plan_document_use_case)],
):
    """Replace the plan document. 409 when body.version is stale."""
    schedule = await use_case.execute(
        schedule_uid, body.plan_document, body.version, acting_user_id
    )
    return ScheduleResponse.model_validate(schedule)


@router.post("/{schedule_uid}/validate", response_model=ValidationResultResponse)
async def validate_schedule(
    schedule_uid: str,
    use_case: Annotated[ValidateScheduleUseCase, Depends(get_validate_schedule_use_case)],
):
    """Check the current plan document. Plan problems are returned, not raised."""
    result = await use_case.execute(schedule_uid)
    return ValidationResultResponse.model_validate(result)


@router.post("/{schedule_uid}/publish", response_model=PublishResponse)
@limit_publish
async def publish_schedule(
    request: Request,
    schedule_uid: str,
    body: PublishRequest,
    acting_user_id: Annotated[str, Depends(get_acting_user_id)],
    use_case: Annotated[PublishScheduleUseCase, Depends(get_publish_schedule_use_case)],
):
    """Materialize the plan into shows and assignments, then mark the schedule published."""
    result = await use_case.execute(schedule_uid, body.version, acting_user_id)
    return PublishResponse(
        schedule=ScheduleResponse.model_validate(result.schedule),
        shows_created=result.shows_created,
        shows_updated=result.shows_updated,
        shows_deleted=result.shows_deleted,
    )


@router.post("/{schedule_uid}/duplicate", response_model=ScheduleResponse, status_code=201)
@limit_writes
async def duplicate_schedule(
    request: Request,
    schedule_uid: str,
    body: DuplicateScheduleRequest,
    acting_user_id: Annotated[str, Depends(get_acting_user_id)],
    service: Annotated[ScheduleService, Depends(get_schedule_service_for_write)],
):
    copy = await service.duplicate_schedule(schedule_uid, body.name, acting_user_id)
    return ScheduleResponse.model_validate(copy)


@router.delete("/{schedule_uid}", status_code=204, response_class=Response)
@limit_writes
async def delete_schedule(
    request: Request,
    schedule_uid: str,
    acting_user_id: Annotated[str, Depends(get_acting_user_id)],
    service: Annotated[ScheduleService, Depends(get_schedule_service_for_write)],
):
    """Soft-delete a draft schedule. 409 when it is published."""
    await service.delete_schedule(schedule_uid, acting_user_id)
    return Response(status_code=204)


@router.get("/{schedule_uid}/snapshots", response_model=list[SnapshotListItem])
async def list_snapshots(
    schedule_uid: str,
    service: Annotated[SnapshotService, Depends(get_snapshot_service)],
    limit: int | None = Query(None, ge=1),
    offset: int = Query(0, ge=0),
    order: SortOrder = Query(SortOrder.DESC),
):
    """List snapshots newest first; limit defaults to and is capped by settings."""
    snapshots = await service.list_snapshots(
        schedule_uid, limit=limit, offset=offset, order=order
    )
    return [SnapshotListItem.model_validate(s) for s in snapshots]


@router.post("/{schedule_uid}/snapshots", response_model=SnapshotResponse, status_code=201)
@limit_writes
async def create_snapshot(
    request: Request,
    schedule_uid: str,
    acting_user_id: Annotated[str, Depends(get_acting_user_id)],
    service: Annotated[SnapshotService, Depends(get_snapshot_service_for_write)],
    body: ManualSnapshotRequest | None = None,
):
    """Capture the current plan document. Does not change the schedule version."""
    reason = body.reason if body is not None else ManualSnapshotRequest().reason
    snapshot = await service.create_manual_snapshot(schedule_uid, acting_user_id, reason)
    return SnapshotResponse.model_validate(snapshot)
