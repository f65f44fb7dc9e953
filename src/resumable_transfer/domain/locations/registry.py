"""Tag-based dispatch over the closed set of location variants."""

from __future__ import annotations

from resumable_transfer.domain.errors import CorruptCheckpointError
from resumable_transfer.domain.locations.base import BaseTransferLocation
from resumable_transfer.domain.locations.blob import BlobLocation
from resumable_transfer.domain.locations.file_share import FileShareLocation
from resumable_transfer.domain.locations.local_path import LocalPathLocation
from resumable_transfer.domain.locations.sas_uri import SasUriLocation
from resumable_transfer.domain.locations.stream import StreamLocation
from resumable_transfer.domain.location_types import TransferLocationType

LOCATION_VARIANTS: dict[TransferLocationType, type[BaseTransferLocation]] = {
    TransferLocationType.CLOUD_BLOB: BlobLocation,
    TransferLocationType.CLOUD_FILE: FileShareLocation,
    TransferLocationType.LOCAL_PATH: LocalPathLocation,
    TransferLocationType.STREAM: StreamLocation,
    TransferLocationType.SAS_URI: SasUriLocation,
}


def location_class_for(location_type: TransferLocationType) -> type[BaseTransferLocation]:
    """Return the variant registered for a tag."""

    try:
        return LOCATION_VARIANTS[location_type]
    except KeyError as exc:
        raise CorruptCheckpointError(
            f"No location variant registered for kind '{location_type}'."
        ) from exc


__all__ = ["LOCATION_VARIANTS", "location_class_for"]
