"""Shared state machine for transfer location variants."""

from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from typing import Any, ClassVar, Generic, TypeVar

from resumable_transfer.domain.access_conditions import AccessCondition
from resumable_transfer.domain.credentials import CredentialHandle, CredentialScheme
from resumable_transfer.domain.errors import (
    FingerprintConflictError,
    InvalidArgumentError,
    LocationNotReadyError,
    PreconditionFailedError,
    UnreachableOrChangedError,
)
from resumable_transfer.domain.location_types import LocationPhase, TransferLocationType
from resumable_transfer.domain.ports import LocationSnapshot, ResourceProbe
from resumable_transfer.domain.request_options import RequestOptions, default_request_options

logger = logging.getLogger(__name__)

RefT = TypeVar("RefT")


class BaseTransferLocation(ABC, Generic[RefT]):
    """Endpoint of one transfer job.

    A location is READY when built from a live resource handle and
    AWAITING_CREDENTIALS when rebuilt from a checkpoint. Every mutation runs
    under one lock that is never held across a backend probe.
    """

    LOCATION_TYPE: ClassVar[TransferLocationType]
    ACCEPTED_SCHEMES: ClassVar[frozenset[CredentialScheme]]
    REF_TYPE: ClassVar[type]

    def __init__(
        self,
        resource_ref: RefT,
        credentials: CredentialHandle,
        *,
        probe: ResourceProbe,
        access_condition: AccessCondition | None = None,
        request_options: RequestOptions | None = None,
    ) -> None:
        if resource_ref is None:
            raise InvalidArgumentError(
                f"{type(self).__name__} requires a resource handle, got None."
            )
        if not isinstance(resource_ref, self.REF_TYPE):
            raise InvalidArgumentError(
                f"{type(self).__name__} expects {self.REF_TYPE.__name__}, "
                f"got {type(resource_ref).__name__}."
            )
        self._init_state(
            resource_ref=resource_ref,
            probe=probe,
            access_condition=access_condition,
            condition_checked=False,
            fingerprint=None,
            request_options=request_options,
        )
        self._credentials = self._accept_credentials(credentials)
        self._phase = LocationPhase.READY

    @classmethod
    def from_checkpoint(
        cls,
        resource_ref: RefT,
        *,
        probe: ResourceProbe,
        access_condition: AccessCondition | None,
        condition_checked: bool,
        fingerprint: str | None,
        request_options: RequestOptions | None,
    ):
        """Rebuild a credential-less location without touching the backend."""

        location = cls.__new__(cls)
        location._init_state(
            resource_ref=resource_ref,
            probe=probe,
            access_condition=access_condition,
            condition_checked=condition_checked,
            fingerprint=fingerprint,
            request_options=request_options,
        )
        return location

    def _init_state(
        self,
        *,
        resource_ref: RefT,
        probe: ResourceProbe,
        access_condition: AccessCondition | None,
        condition_checked: bool,
        fingerprint: str | None,
        request_options: RequestOptions | None,
    ) -> None:
        if probe is None:
            raise InvalidArgumentError(f"{type(self).__name__} requires a resource probe.")
        if access_condition is not None and access_condition.is_none:
            access_condition = None
        self._check_access_condition_supported(access_condition)
        self._lock = threading.Lock()
        self._resource_ref = resource_ref
        self._probe = probe
        self._access_condition = access_condition
        self._condition_checked = condition_checked
        self._fingerprint = fingerprint
        self._request_options = request_options
        self._credentials: CredentialHandle | None = None
        self._phase = LocationPhase.AWAITING_CREDENTIALS

    @property
    def location_type(self) -> TransferLocationType:
        return self.LOCATION_TYPE

    @property
    def resource_ref(self) -> RefT:
        return self._resource_ref

    @property
    def phase(self) -> LocationPhase:
        with self._lock:
            return self._phase

    @property
    def access_condition(self) -> AccessCondition | None:
        return self._access_condition

    @property
    def condition_checked(self) -> bool:
        with self._lock:
            return self._condition_checked

    @property
    def fingerprint(self) -> str | None:
        with self._lock:
            return self._fingerprint

    @property
    def request_options(self) -> RequestOptions:
        """Explicit options, or the per-kind defaults when none were set."""

        return self._request_options or default_request_options(self.LOCATION_TYPE)

    @abstractmethod
    def canonical_identifier(self) -> str:
        """Stable human-readable resource address."""

    def update_credentials(self, credentials: CredentialHandle) -> None:
        """Swap credentials in place; condition and fingerprint state is kept."""

        accepted = self._accept_credentials(credentials)
        with self._lock:
            self._credentials = accepted
            self._phase = LocationPhase.READY
        logger.debug(
            "Updated %s credentials for '%s'.",
            accepted.scheme.value,
            self.canonical_identifier(),
        )

    def invalidate_credentials(self) -> None:
        """Drop current credentials until the next update_credentials call."""

        with self._lock:
            self._credentials = None
            self._phase = LocationPhase.AWAITING_CREDENTIALS

    def require_credentials(self) -> CredentialHandle:
        """Return the current credentials for a chunk operation."""

        with self._lock:
            return self._ready_credentials()

    def validate(self, *, require_exists: bool = False) -> None:
        """Probe the backend once and confirm the resource is usable.

        Raises UnreachableOrChangedError when the parent scope cannot be
        reached, or when a captured fingerprint no longer matches. A missing
        resource is accepted only while no fingerprint was captured and
        `require_exists` is false (a destination before its first write).
        """

        with self._lock:
            credentials = self._ready_credentials()
            fingerprint = self._fingerprint
        state = self._probe.fetch_state(self._resource_ref, credentials, self.request_options)

        identifier = self.canonical_identifier()
        if not state.parent_exists:
            raise UnreachableOrChangedError(
                f"Parent of '{identifier}' does not exist or is not accessible."
            )
        if not state.exists:
            if fingerprint is not None:
                raise UnreachableOrChangedError(f"Resource '{identifier}' no longer exists.")
            if require_exists:
                raise UnreachableOrChangedError(f"Resource '{identifier}' does not exist.")
            return
        if fingerprint is None:
            return
        if state.fingerprint != fingerprint:
            raise FingerprintConflictError(identifier, fingerprint, state.fingerprint)

    def check_access_condition(self) -> None:
        """Enforce the access condition once per job lifetime."""

        with self._lock:
            credentials = self._ready_credentials()
            if self._condition_checked:
                return
            condition = self._access_condition
            if condition is None or condition.is_none:
                self._condition_checked = True
                return

        state = self._probe.fetch_state(self._resource_ref, credentials, self.request_options)
        if not condition.is_satisfied_by(state):
            raise PreconditionFailedError(
                f"Access condition {condition.describe()} failed for "
                f"'{self.canonical_identifier()}' (exists={state.exists}, "
                f"fingerprint={state.fingerprint!r})."
            )

        with self._lock:
            if self._condition_checked:
                return
            self._fingerprint = state.fingerprint
            self._condition_checked = True
        logger.debug(
            "Access condition %s satisfied for '%s'.",
            condition.describe(),
            self.canonical_identifier(),
        )

    def record_fingerprint(self, fingerprint: str) -> None:
        """Capture the fingerprint of content written by the copy engine."""

        if fingerprint is None or not fingerprint.strip():
            raise InvalidArgumentError("Fingerprint cannot be empty.")
        with self._lock:
            self._ready_credentials()
            self._fingerprint = fingerprint

    def snapshot(self) -> LocationSnapshot:
        """Read persisted fields without waiting on in-flight probes."""

        with self._lock:
            return LocationSnapshot(
                location_type=self.LOCATION_TYPE,
                resource_ref=self._resource_ref,
                access_condition=self._access_condition,
                condition_checked=self._condition_checked,
                fingerprint=self._fingerprint,
                request_options=self._request_options,
                phase=self._phase,
            )

    def _ready_credentials(self) -> CredentialHandle:
        if self._phase is not LocationPhase.READY or self._credentials is None:
            raise LocationNotReadyError(
                f"Location '{self.canonical_identifier()}' has no credentials; "
                "call update_credentials() first."
            )
        return self._credentials

    def _accept_credentials(self, credentials: CredentialHandle) -> CredentialHandle:
        if credentials is None:
            raise InvalidArgumentError(f"{type(self).__name__} requires credentials.")
        if credentials.scheme not in self.ACCEPTED_SCHEMES:
            accepted = ", ".join(sorted(scheme.value for scheme in self.ACCEPTED_SCHEMES))
            raise InvalidArgumentError(
                f"{type(self).__name__} does not accept '{credentials.scheme.value}' "
                f"credentials (accepted: {accepted})."
            )
        return credentials

    def _check_access_condition_supported(self, access_condition: AccessCondition | None) -> None:
        """Hook for variants that restrict access conditions."""

        _ = access_condition

    def __str__(self) -> str:
        return self.canonical_identifier()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.canonical_identifier()!r}, phase={self.phase.value})"

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, BaseTransferLocation):
            return NotImplemented
        mine = self.snapshot()
        theirs = other.snapshot()
        return (
            mine.location_type is theirs.location_type
            and mine.resource_ref == theirs.resource_ref
            and mine.access_condition == theirs.access_condition
            and mine.condition_checked == theirs.condition_checked
            and mine.fingerprint == theirs.fingerprint
            and mine.request_options == theirs.request_options
        )

    __hash__ = None  # type: ignore[assignment]


__all__ = ["BaseTransferLocation"]
