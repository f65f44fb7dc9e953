"""Probe for caller-supplied streams."""

from __future__ import annotations

from resumable_transfer.domain.access_conditions import ResourceState
from resumable_transfer.domain.credentials import CredentialHandle
from resumable_transfer.domain.errors import UnreachableOrChangedError
from resumable_transfer.domain.locations import StreamRef
from resumable_transfer.domain.ports import ResourceProbe
from resumable_transfer.domain.request_options import RequestOptions


class AttachedStreamProbe(ResourceProbe):
    """Report an attached stream as present while it is open."""

    def fetch_state(
        self,
        resource_ref: StreamRef,
        credentials: CredentialHandle,
        options: RequestOptions,
    ) -> ResourceState:
        _ = options
        stream = credentials.stream
        if stream is None or stream.closed:
            raise UnreachableOrChangedError(
                f"Stream '{resource_ref.name}' is not attached or already closed."
            )
        return ResourceState(exists=True)


__all__ = ["AttachedStreamProbe"]
