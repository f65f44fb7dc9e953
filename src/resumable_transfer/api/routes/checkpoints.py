"""Checkpoint inspection routes."""

from __future__ import annotations

from typing import NoReturn

from fastapi import APIRouter, Depends, HTTPException, Request

from resumable_transfer.api.dependencies import get_inspection_service
from resumable_transfer.application.services import CheckpointInspectionService
from resumable_transfer.domain.errors import CorruptCheckpointError, InvalidArgumentError
from resumable_transfer.domain.inspection_models import (
    JobSummaryResponse,
    LocationSummaryResponse,
)

router = APIRouter(prefix="/checkpoints", tags=["checkpoints"])


def _raise_http_exception(exc: Exception) -> NoReturn:
    if isinstance(exc, CorruptCheckpointError):
        raise HTTPException(status_code=422, detail=str(exc))
    if isinstance(exc, InvalidArgumentError):
        raise HTTPException(status_code=400, detail=str(exc))
    raise HTTPException(status_code=500, detail="Unexpected checkpoint error")


@router.post(
    "/locations/inspect",
    response_model=LocationSummaryResponse,
    response_model_by_alias=True,
    status_code=200,
)
async def inspect_location_checkpoint(
    request: Request,
    service: CheckpointInspectionService = Depends(get_inspection_service),
) -> LocationSummaryResponse:
    """Summarize one location checkpoint."""

    payload = await request.body()
    try:
        return service.describe_location(payload)
    except Exception as exc:  # noqa: BLE001
        _raise_http_exception(exc)


@router.post(
    "/jobs/inspect",
    response_model=JobSummaryResponse,
    response_model_by_alias=True,
    status_code=200,
)
async def inspect_job_checkpoint(
    request: Request,
    service: CheckpointInspectionService = Depends(get_inspection_service),
) -> JobSummaryResponse:
    """Summarize one job checkpoint."""

    payload = await request.body()
    try:
        return service.describe_job(payload)
    except Exception as exc:  # noqa: BLE001
        _raise_http_exception(exc)


__all__ = ["router"]
