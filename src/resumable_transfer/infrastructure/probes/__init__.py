"""Backend probe implementations."""

from resumable_transfer.infrastructure.probes.attached_stream_probe import AttachedStreamProbe
from resumable_transfer.infrastructure.probes.azure_file_probe import AzureFileProbe
from resumable_transfer.infrastructure.probes.http_resource_probe import HttpResourceProbe
from resumable_transfer.infrastructure.probes.local_path_probe import (
    LocalPathProbe,
    local_fingerprint,
)
from resumable_transfer.infrastructure.probes.s3_object_probe import S3ObjectProbe

__all__ = [
    "AttachedStreamProbe",
    "AzureFileProbe",
    "HttpResourceProbe",
    "LocalPathProbe",
    "S3ObjectProbe",
    "local_fingerprint",
]
