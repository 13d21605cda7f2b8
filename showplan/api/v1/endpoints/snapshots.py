"""Snapshot API: fetch one snapshot and restore it onto its schedule."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from showplan.api.v1.dependencies import (
    get_acting_user_id,
    get_restore_from_snapshot_use_case,
    get_snapshot_service,
)
from showplan.application.use_cases.planning import RestoreFromSnapshotUseCase, SnapshotService
from showplan.core.limiter import limit_writes
from showplan.schemas.schedule import ScheduleResponse
from showplan.schemas.snapshot import RestoreSnapshotRequest, SnapshotResponse

router = APIRouter()


@router.get("/{snapshot_uid}", response_model=SnapshotResponse)
async def get_snapshot(
    snapshot_uid: str,
    service: Annotated[SnapshotService, Depends(get_snapshot_service)],
):
    snapshot = await service.get_snapshot(snapshot_uid)
    return SnapshotResponse.model_validate(snapshot)


@router.post("/{snapshot_uid}/restore", response_model=ScheduleResponse)
@limit_writes
async def restore_snapshot(
    request: Request,
    snapshot_uid: str,
    body: RestoreSnapshotRequest,
    acting_user_id: Annotated[str, Depends(get_acting_user_id)],
    use_case: Annotated[
        RestoreFromSnapshotUseCase, Depends(get_restore_from_snapshot_use_case)
    ],
):
    """Write the snapshot's document back onto its draft schedule (version-guarded)."""
    schedule = await use_case.execute(snapshot_uid, body.version, acting_user_id)
    return ScheduleResponse.model_validate(schedule)
