"""Location kind and lifecycle phase helpers."""

from enum import StrEnum

from resumable_transfer.domain.errors import CorruptCheckpointError


class TransferLocationType(StrEnum):
    """Supported backend variants."""

    CLOUD_BLOB = "cloud-blob"
    CLOUD_FILE = "cloud-file"
    LOCAL_PATH = "local-path"
    STREAM = "stream"
    SAS_URI = "sas-uri"


class LocationPhase(StrEnum):
    """Credential lifecycle of one location instance."""

    AWAITING_CREDENTIALS = "AWAITING_CREDENTIALS"
    READY = "READY"


def parse_location_type(kind: str) -> TransferLocationType:
    """Map a persisted kind tag to the location type."""

    try:
        return TransferLocationType(kind.strip().lower())
    except ValueError as exc:
        raise CorruptCheckpointError(f"Unknown location kind '{kind}'.") from exc


__all__ = ["LocationPhase", "TransferLocationType", "parse_location_type"]
