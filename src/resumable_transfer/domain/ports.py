"""Ports for locations, backend probes, credentials, and checkpoint storage."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from resumable_transfer.domain.access_conditions import AccessCondition, ResourceState
from resumable_transfer.domain.credentials import CredentialHandle
from resumable_transfer.domain.location_types import LocationPhase, TransferLocationType
from resumable_transfer.domain.request_options import RequestOptions


@dataclass(slots=True, frozen=True)
class LocationSnapshot:
    """Consistent read of the persisted fields of one location."""

    location_type: TransferLocationType
    resource_ref: Any
    access_condition: AccessCondition | None
    condition_checked: bool
    fingerprint: str | None
    request_options: RequestOptions | None
    phase: LocationPhase


class ResourceProbe(Protocol):
    """Backend adapter contract: fetch existence and fingerprint in one call."""

    def fetch_state(
        self,
        resource_ref: Any,
        credentials: CredentialHandle,
        options: RequestOptions,
    ) -> ResourceState:
        """Return live metadata or raise UnreachableOrChangedError."""


@runtime_checkable
class TransferLocation(Protocol):
    """Capability set shared by every location variant."""

    @property
    def location_type(self) -> TransferLocationType:
        """Immutable backend tag."""

    @property
    def phase(self) -> LocationPhase:
        """Credential lifecycle phase."""

    @property
    def condition_checked(self) -> bool:
        """Whether the access condition was already enforced."""

    @property
    def fingerprint(self) -> str | None:
        """Captured content/version identity."""

    def validate(self, *, require_exists: bool = False) -> None:
        """Confirm reachability and fingerprint consistency."""

    def canonical_identifier(self) -> str:
        """Stable resource address for logs and dedup."""

    def update_credentials(self, credentials: CredentialHandle) -> None:
        """Swap authorization material in place."""

    def invalidate_credentials(self) -> None:
        """Mark current credentials as stale."""

    def require_credentials(self) -> CredentialHandle:
        """Return current credentials or raise LocationNotReadyError."""

    def check_access_condition(self) -> None:
        """Enforce the access condition once per job lifetime."""

    def record_fingerprint(self, fingerprint: str) -> None:
        """Capture a fingerprint produced by the copy engine."""

    def snapshot(self) -> LocationSnapshot:
        """Return persisted fields for checkpoint encoding."""


class CredentialProvider(Protocol):
    """Supplies fresh credentials at resume time."""

    async def credentials_for(
        self,
        location_type: TransferLocationType,
        canonical_identifier: str,
    ) -> CredentialHandle:
        """Return credentials for one resource."""


@runtime_checkable
class CheckpointStore(Protocol):
    """Durable storage medium for encoded job checkpoints."""

    async def save(self, job_id: str, payload: bytes) -> None:
        """Create or replace the checkpoint of one job."""

    async def load(self, job_id: str) -> bytes | None:
        """Return the latest checkpoint of one job."""

    async def delete(self, job_id: str) -> None:
        """Drop the checkpoint of a finished or abandoned job."""


__all__ = [
    "CheckpointStore",
    "CredentialProvider",
    "LocationSnapshot",
    "ResourceProbe",
    "TransferLocation",
]
