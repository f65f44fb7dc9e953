"""Domain public API."""

from resumable_transfer.domain.access_conditions import (
    ANY_FINGERPRINT,
    AccessCondition,
    AccessConditionKind,
    ResourceState,
)
from resumable_transfer.domain.checkpoint_models import (
    CHECKPOINT_SCHEMA_VERSION,
    LocationCheckpointRecord,
    TransferJobCheckpointRecord,
)
from resumable_transfer.domain.credentials import CredentialHandle, CredentialScheme
from resumable_transfer.domain.errors import (
    CorruptCheckpointError,
    DuplicateTransferError,
    FingerprintConflictError,
    InvalidArgumentError,
    LocationNotReadyError,
    PreconditionFailedError,
    TransferLocationError,
    UnauthorizedError,
    UnreachableOrChangedError,
)
from resumable_transfer.domain.location_types import LocationPhase, TransferLocationType
from resumable_transfer.domain.locations import (
    BlobLocation,
    BlobRef,
    FileShareLocation,
    FileShareRef,
    LocalPathLocation,
    LocalPathRef,
    SasUriLocation,
    SasUriRef,
    StreamLocation,
    StreamRef,
)
from resumable_transfer.domain.ports import (
    CheckpointStore,
    CredentialProvider,
    LocationSnapshot,
    ResourceProbe,
    TransferLocation,
)
from resumable_transfer.domain.request_options import RequestOptions, default_request_options
from resumable_transfer.domain.transfer_jobs import TransferJobCheckpoint

__all__ = [
    "ANY_FINGERPRINT",
    "AccessCondition",
    "AccessConditionKind",
    "BlobLocation",
    "BlobRef",
    "CHECKPOINT_SCHEMA_VERSION",
    "CheckpointStore",
    "CorruptCheckpointError",
    "CredentialHandle",
    "CredentialProvider",
    "CredentialScheme",
    "DuplicateTransferError",
    "FileShareLocation",
    "FileShareRef",
    "FingerprintConflictError",
    "InvalidArgumentError",
    "LocalPathLocation",
    "LocalPathRef",
    "LocationCheckpointRecord",
    "LocationNotReadyError",
    "LocationPhase",
    "LocationSnapshot",
    "PreconditionFailedError",
    "RequestOptions",
    "ResourceProbe",
    "ResourceState",
    "SasUriLocation",
    "SasUriRef",
    "StreamLocation",
    "StreamRef",
    "TransferJobCheckpoint",
    "TransferJobCheckpointRecord",
    "TransferLocation",
    "TransferLocationError",
    "TransferLocationType",
    "UnauthorizedError",
    "UnreachableOrChangedError",
    "default_request_options",
]
