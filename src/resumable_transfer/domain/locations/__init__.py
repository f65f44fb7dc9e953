"""Transfer location variants."""

from resumable_transfer.domain.locations.base import BaseTransferLocation
from resumable_transfer.domain.locations.blob import BlobLocation, BlobRef
from resumable_transfer.domain.locations.file_share import FileShareLocation, FileShareRef
from resumable_transfer.domain.locations.local_path import LocalPathLocation, LocalPathRef
from resumable_transfer.domain.locations.registry import LOCATION_VARIANTS, location_class_for
from resumable_transfer.domain.locations.sas_uri import (
    SasUriLocation,
    SasUriRef,
    split_signed_url,
)
from resumable_transfer.domain.locations.stream import StreamLocation, StreamRef

__all__ = [
    "BaseTransferLocation",
    "BlobLocation",
    "BlobRef",
    "FileShareLocation",
    "FileShareRef",
    "LOCATION_VARIANTS",
    "LocalPathLocation",
    "LocalPathRef",
    "SasUriLocation",
    "SasUriRef",
    "StreamLocation",
    "StreamRef",
    "location_class_for",
    "split_signed_url",
]
