"""Pydantic records forming the durable checkpoint schema."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from resumable_transfer.domain.location_types import TransferLocationType

CHECKPOINT_SCHEMA_VERSION = 1


class CheckpointModel(BaseModel):
    """Base model for checkpoint records.

    Unknown fields are ignored so an older reader can decode records written
    by a newer version.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class BlobRefRecord(CheckpointModel):
    bucket: str = Field(min_length=1)
    key: str = Field(min_length=1)
    region: str | None = None
    endpoint_url: str | None = Field(default=None, alias="endpointUrl")


class FileShareRefRecord(CheckpointModel):
    account_url: str = Field(min_length=1, alias="accountUrl")
    share: str = Field(min_length=1)
    path: str = Field(min_length=1)


class LocalPathRefRecord(CheckpointModel):
    path: str = Field(min_length=1)


class StreamRefRecord(CheckpointModel):
    name: str = Field(min_length=1)


class SasUriRefRecord(CheckpointModel):
    uri: str = Field(min_length=1)


class AccessConditionRecord(CheckpointModel):
    """Persisted access condition; `none` is written explicitly."""

    kind: str = Field(min_length=1)
    fingerprint: str | None = None


class RequestOptionsRecord(CheckpointModel):
    server_timeout_seconds: float | None = Field(default=None, alias="serverTimeoutSeconds")
    maximum_execution_time_seconds: float | None = Field(
        default=None, alias="maximumExecutionTimeSeconds"
    )
    max_attempts: int = Field(default=3, alias="maxAttempts")
    backoff_seconds: float = Field(default=1.0, alias="backoffSeconds")


class LocationCheckpointRecord(CheckpointModel):
    """Checkpoint record of one location. Credentials are never part of it."""

    schema_version: int = Field(default=CHECKPOINT_SCHEMA_VERSION, ge=1, alias="schemaVersion")
    kind: str = Field(min_length=1)
    resource_ref: dict[str, Any] = Field(alias="resourceRef")
    access_condition: AccessConditionRecord = Field(alias="accessCondition")
    condition_checked: bool = Field(alias="conditionChecked", strict=True)
    fingerprint: str | None
    request_options: RequestOptionsRecord | None = Field(default=None, alias="requestOptions")


class TransferJobCheckpointRecord(CheckpointModel):
    """Checkpoint record of one job with its two locations."""

    schema_version: int = Field(default=CHECKPOINT_SCHEMA_VERSION, ge=1, alias="schemaVersion")
    job_id: str = Field(min_length=1, alias="jobId")
    source: LocationCheckpointRecord
    destination: LocationCheckpointRecord
    progress: dict[str, Any] = Field(default_factory=dict)


RESOURCE_REF_RECORDS: dict[TransferLocationType, type[CheckpointModel]] = {
    TransferLocationType.CLOUD_BLOB: BlobRefRecord,
    TransferLocationType.CLOUD_FILE: FileShareRefRecord,
    TransferLocationType.LOCAL_PATH: LocalPathRefRecord,
    TransferLocationType.STREAM: StreamRefRecord,
    TransferLocationType.SAS_URI: SasUriRefRecord,
}


__all__ = [
    "AccessConditionRecord",
    "BlobRefRecord",
    "CHECKPOINT_SCHEMA_VERSION",
    "CheckpointModel",
    "FileShareRefRecord",
    "LocalPathRefRecord",
    "LocationCheckpointRecord",
    "RESOURCE_REF_RECORDS",
    "RequestOptionsRecord",
    "SasUriRefRecord",
    "StreamRefRecord",
    "TransferJobCheckpointRecord",
]
