"""Credential-free checkpoint summaries for operator tooling."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from resumable_transfer.domain.location_types import LocationPhase, TransferLocationType


class InspectionModel(BaseModel):
    """Base model for inspection routes."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)


class LocationSummaryResponse(InspectionModel):
    """What a decoded location checkpoint describes."""

    kind: TransferLocationType
    canonical_identifier: str = Field(alias="canonicalIdentifier")
    phase: LocationPhase
    access_condition: str = Field(alias="accessCondition")
    condition_checked: bool = Field(alias="conditionChecked")
    fingerprint: str | None = None


class JobSummaryResponse(InspectionModel):
    """What a decoded job checkpoint describes."""

    job_id: str = Field(alias="jobId")
    source: LocationSummaryResponse
    destination: LocationSummaryResponse
    progress: dict[str, Any] = Field(default_factory=dict)


__all__ = ["JobSummaryResponse", "LocationSummaryResponse"]
