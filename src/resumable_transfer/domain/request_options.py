"""Per-backend request policy carried by each location."""

from __future__ import annotations

from dataclasses import dataclass

from resumable_transfer.domain.errors import InvalidArgumentError
from resumable_transfer.domain.location_types import TransferLocationType


@dataclass(slots=True, frozen=True)
class RequestOptions:
    """Timeouts and retry budget handed to backend clients.

    Backend adapters translate these into client configuration; retries are
    executed by the client libraries, never by the location itself.
    """

    server_timeout_seconds: float | None = None
    maximum_execution_time_seconds: float | None = None
    max_attempts: int = 3
    backoff_seconds: float = 1.0

    def __post_init__(self) -> None:
        if self.server_timeout_seconds is not None and self.server_timeout_seconds <= 0:
            raise InvalidArgumentError("server_timeout_seconds must be > 0.")
        if (
            self.maximum_execution_time_seconds is not None
            and self.maximum_execution_time_seconds <= 0
        ):
            raise InvalidArgumentError("maximum_execution_time_seconds must be > 0.")
        if self.max_attempts < 1:
            raise InvalidArgumentError("max_attempts must be >= 1.")
        if self.backoff_seconds < 0:
            raise InvalidArgumentError("backoff_seconds must be >= 0.")

    @property
    def effective_timeout_seconds(self) -> float | None:
        """Per-request timeout bounded by the overall execution budget."""

        candidates = [
            value
            for value in (self.server_timeout_seconds, self.maximum_execution_time_seconds)
            if value is not None
        ]
        return min(candidates) if candidates else None


_DEFAULT_REQUEST_OPTIONS: dict[TransferLocationType, RequestOptions] = {
    TransferLocationType.CLOUD_BLOB: RequestOptions(
        server_timeout_seconds=300.0,
        maximum_execution_time_seconds=900.0,
        max_attempts=3,
        backoff_seconds=1.0,
    ),
    TransferLocationType.CLOUD_FILE: RequestOptions(
        server_timeout_seconds=300.0,
        maximum_execution_time_seconds=900.0,
        max_attempts=3,
        backoff_seconds=1.0,
    ),
    TransferLocationType.SAS_URI: RequestOptions(
        server_timeout_seconds=60.0,
        max_attempts=3,
        backoff_seconds=1.0,
    ),
    TransferLocationType.LOCAL_PATH: RequestOptions(max_attempts=1, backoff_seconds=0.0),
    TransferLocationType.STREAM: RequestOptions(max_attempts=1, backoff_seconds=0.0),
}


def default_request_options(location_type: TransferLocationType) -> RequestOptions:
    """Return the built-in policy for a location kind."""

    return _DEFAULT_REQUEST_OPTIONS[location_type]


__all__ = [
    "RequestOptions",
    "default_request_options",
]
