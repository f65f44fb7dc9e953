"""Credential provider backed by pre-acquired handles."""

from __future__ import annotations

import asyncio
from collections.abc import Mapping

from resumable_transfer.domain.credentials import CredentialHandle
from resumable_transfer.domain.errors import LocationNotReadyError
from resumable_transfer.domain.location_types import TransferLocationType
from resumable_transfer.domain.ports import CredentialProvider


class StaticCredentialProvider(CredentialProvider):
    """Serve handles registered per resource, falling back to per-kind defaults.

    Acquiring or refreshing tokens is left to whoever registers them.
    """

    def __init__(
        self,
        by_identifier: Mapping[str, CredentialHandle] | None = None,
        by_location_type: Mapping[TransferLocationType, CredentialHandle] | None = None,
    ) -> None:
        self._by_identifier = dict(by_identifier or {})
        self._by_location_type = dict(by_location_type or {})
        self._lock = asyncio.Lock()

    async def register(self, canonical_identifier: str, credentials: CredentialHandle) -> None:
        """Add or replace the handle for one resource."""

        async with self._lock:
            self._by_identifier[canonical_identifier] = credentials

    async def credentials_for(
        self,
        location_type: TransferLocationType,
        canonical_identifier: str,
    ) -> CredentialHandle:
        async with self._lock:
            handle = self._by_identifier.get(canonical_identifier)
            if handle is None:
                handle = self._by_location_type.get(location_type)
        if handle is None:
            raise LocationNotReadyError(
                f"No credentials available for '{canonical_identifier}' "
                f"({location_type.value})."
            )
        return handle


__all__ = ["StaticCredentialProvider"]
