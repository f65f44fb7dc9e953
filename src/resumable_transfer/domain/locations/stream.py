"""Caller-supplied stream locations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import BinaryIO

from resumable_transfer.domain.access_conditions import AccessCondition
from resumable_transfer.domain.credentials import CredentialHandle, CredentialScheme
from resumable_transfer.domain.errors import InvalidArgumentError
from resumable_transfer.domain.locations.base import BaseTransferLocation
from resumable_transfer.domain.location_types import TransferLocationType
from resumable_transfer.domain.ports import ResourceProbe
from resumable_transfer.domain.request_options import RequestOptions


@dataclass(slots=True, frozen=True)
class StreamRef:
    """Stable name under which the caller re-attaches its stream on resume."""

    name: str

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise InvalidArgumentError("Stream name cannot be empty.")


class StreamLocation(BaseTransferLocation[StreamRef]):
    """Open binary stream owned by the caller.

    Only the stream name is checkpointed; the stream object itself travels in
    an `attached-stream` credential handle and is re-attached after decode.
    Streams have no remote version, so only the `none` access condition
    applies.
    """

    LOCATION_TYPE = TransferLocationType.STREAM
    ACCEPTED_SCHEMES = frozenset({CredentialScheme.ATTACHED_STREAM})
    REF_TYPE = StreamRef

    @classmethod
    def attach(
        cls,
        stream: BinaryIO,
        name: str,
        *,
        probe: ResourceProbe,
        request_options: RequestOptions | None = None,
    ) -> StreamLocation:
        """Build a location around an open stream."""

        if stream is None:
            raise InvalidArgumentError("StreamLocation requires a stream, got None.")
        return cls(
            StreamRef(name),
            CredentialHandle.attached_stream(stream),
            probe=probe,
            request_options=request_options,
        )

    def canonical_identifier(self) -> str:
        return f"stream://{self._resource_ref.name}"

    def _check_access_condition_supported(self, access_condition: AccessCondition | None) -> None:
        if access_condition is not None and not access_condition.is_none:
            raise InvalidArgumentError(
                f"Stream locations do not support access condition "
                f"'{access_condition.describe()}'."
            )


__all__ = ["StreamLocation", "StreamRef"]
