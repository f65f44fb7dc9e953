"""Infrastructure layer public API."""

from resumable_transfer.infrastructure.checkpoints import CheckpointCodec, InMemoryCheckpointStore
from resumable_transfer.infrastructure.credentials import StaticCredentialProvider
from resumable_transfer.infrastructure.probes import (
    AttachedStreamProbe,
    AzureFileProbe,
    HttpResourceProbe,
    LocalPathProbe,
    S3ObjectProbe,
)

__all__ = [
    "AttachedStreamProbe",
    "AzureFileProbe",
    "CheckpointCodec",
    "HttpResourceProbe",
    "InMemoryCheckpointStore",
    "LocalPathProbe",
    "S3ObjectProbe",
    "StaticCredentialProvider",
]
