"""Checkpoint inspection use-case service."""

from __future__ import annotations

from resumable_transfer.domain.access_conditions import AccessConditionKind
from resumable_transfer.domain.inspection_models import (
    JobSummaryResponse,
    LocationSummaryResponse,
)
from resumable_transfer.domain.locations import BaseTransferLocation
from resumable_transfer.infrastructure.checkpoints import CheckpointCodec


class CheckpointInspectionService:
    """Decode checkpoints into summaries without touching any backend."""

    def __init__(self, codec: CheckpointCodec) -> None:
        self._codec = codec

    def describe_location(self, payload: bytes) -> LocationSummaryResponse:
        return self._summary(self._codec.decode(payload))

    def describe_job(self, payload: bytes) -> JobSummaryResponse:
        job = self._codec.decode_job(payload)
        return JobSummaryResponse(
            job_id=job.job_id,
            source=self._summary(job.source),
            destination=self._summary(job.destination),
            progress=job.progress,
        )

    def _summary(self, location: BaseTransferLocation) -> LocationSummaryResponse:
        snapshot = location.snapshot()
        condition = snapshot.access_condition
        return LocationSummaryResponse(
            kind=snapshot.location_type,
            canonical_identifier=location.canonical_identifier(),
            phase=snapshot.phase,
            access_condition=(
                AccessConditionKind.NONE.value if condition is None else condition.describe()
            ),
            condition_checked=snapshot.condition_checked,
            fingerprint=snapshot.fingerprint,
        )


__all__ = ["CheckpointInspectionService"]
