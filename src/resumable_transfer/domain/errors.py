"""Domain exceptions for transfer locations and checkpoints."""


class TransferLocationError(Exception):
    """Base class for transfer location errors."""


class InvalidArgumentError(TransferLocationError, ValueError):
    """Raised when a location is built from a null or empty resource handle."""


class CorruptCheckpointError(TransferLocationError):
    """Raised when a checkpoint record cannot be decoded."""


class PreconditionFailedError(TransferLocationError):
    """Raised when an access condition does not hold for the live resource."""


class LocationNotReadyError(TransferLocationError):
    """Raised when a location is used before credentials were supplied."""


UnauthorizedError = LocationNotReadyError


class UnreachableOrChangedError(TransferLocationError):
    """Raised when a resource is missing, inaccessible, or changed."""


class FingerprintConflictError(UnreachableOrChangedError):
    """Raised when the live fingerprint differs from the captured one."""

    def __init__(self, identifier: str, expected: str, actual: str | None) -> None:
        super().__init__(
            f"Resource '{identifier}' changed since the transfer started: "
            f"expected fingerprint {expected!r}, found {actual!r}."
        )
        self.identifier = identifier
        self.expected = expected
        self.actual = actual


class DuplicateTransferError(TransferLocationError):
    """Raised when another active job already targets the same resource."""


__all__ = [
    "CorruptCheckpointError",
    "DuplicateTransferError",
    "FingerprintConflictError",
    "InvalidArgumentError",
    "LocationNotReadyError",
    "PreconditionFailedError",
    "TransferLocationError",
    "UnauthorizedError",
    "UnreachableOrChangedError",
]
