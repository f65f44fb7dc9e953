"""Explicit, versioned checkpoint codec for transfer locations and jobs."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import asdict
from typing import Any

from pydantic import ValidationError
from pydantic_core import PydanticSerializationError

from resumable_transfer.domain.access_conditions import AccessCondition, AccessConditionKind
from resumable_transfer.domain.checkpoint_models import (
    CHECKPOINT_SCHEMA_VERSION,
    RESOURCE_REF_RECORDS,
    AccessConditionRecord,
    LocationCheckpointRecord,
    RequestOptionsRecord,
    TransferJobCheckpointRecord,
)
from resumable_transfer.domain.errors import CorruptCheckpointError, InvalidArgumentError
from resumable_transfer.domain.location_types import TransferLocationType, parse_location_type
from resumable_transfer.domain.locations import BaseTransferLocation, location_class_for
from resumable_transfer.domain.ports import ResourceProbe, TransferLocation
from resumable_transfer.domain.request_options import RequestOptions
from resumable_transfer.domain.transfer_jobs import TransferJobCheckpoint


class CheckpointCodec:
    """Encode locations to JSON checkpoint bytes and back.

    - `encode`/`decode` round-trip every persisted field; credentials are
      never written and decoded locations await fresh credentials.
    - Unknown fields are ignored; missing required fields raise
      CorruptCheckpointError.
    - Decoded locations get the probe registered for their kind. Nothing here
      touches the network.
    """

    def __init__(self, probes: Mapping[TransferLocationType, ResourceProbe]) -> None:
        self._probes = dict(probes)

    def encode(self, location: TransferLocation) -> bytes:
        """Serialize one location."""

        return self.to_record(location).model_dump_json(by_alias=True).encode("utf-8")

    def decode(self, payload: bytes | str) -> BaseTransferLocation:
        """Rebuild a credential-less location from checkpoint bytes."""

        try:
            record = LocationCheckpointRecord.model_validate_json(payload)
        except ValidationError as exc:
            raise CorruptCheckpointError(f"Invalid location checkpoint: {exc}") from exc
        return self.from_record(record)

    def encode_job(self, job: TransferJobCheckpoint) -> bytes:
        """Serialize a job with both of its locations and its progress."""

        source = self.to_record(job.source)
        destination = self.to_record(job.destination)
        try:
            record = TransferJobCheckpointRecord(
                schema_version=CHECKPOINT_SCHEMA_VERSION,
                job_id=job.job_id,
                source=source,
                destination=destination,
                progress=job.progress,
            )
            return record.model_dump_json(by_alias=True).encode("utf-8")
        except (ValidationError, PydanticSerializationError) as exc:
            raise InvalidArgumentError(
                f"Progress of job '{job.job_id}' is not JSON-serializable: {exc}"
            ) from exc

    def decode_job(self, payload: bytes | str) -> TransferJobCheckpoint:
        """Rebuild a job whose locations await fresh credentials."""

        try:
            record = TransferJobCheckpointRecord.model_validate_json(payload)
        except ValidationError as exc:
            raise CorruptCheckpointError(f"Invalid job checkpoint: {exc}") from exc
        return TransferJobCheckpoint(
            job_id=record.job_id,
            source=self.from_record(record.source),
            destination=self.from_record(record.destination),
            progress=dict(record.progress),
        )

    def to_record(self, location: TransferLocation) -> LocationCheckpointRecord:
        """Build the checkpoint record from a consistent location snapshot."""

        snapshot = location.snapshot()
        ref_model = RESOURCE_REF_RECORDS[snapshot.location_type]
        resource_ref = ref_model.model_validate(asdict(snapshot.resource_ref))

        condition = snapshot.access_condition
        if condition is None:
            condition_record = AccessConditionRecord(kind=AccessConditionKind.NONE.value)
        else:
            condition_record = AccessConditionRecord(
                kind=condition.kind.value,
                fingerprint=condition.fingerprint,
            )

        options = snapshot.request_options
        return LocationCheckpointRecord(
            schema_version=CHECKPOINT_SCHEMA_VERSION,
            kind=snapshot.location_type.value,
            resource_ref=resource_ref.model_dump(by_alias=True),
            access_condition=condition_record,
            condition_checked=snapshot.condition_checked,
            fingerprint=snapshot.fingerprint,
            request_options=None if options is None else RequestOptionsRecord(**asdict(options)),
        )

    def from_record(
        self,
        record: LocationCheckpointRecord | Mapping[str, Any],
    ) -> BaseTransferLocation:
        """Build a location from a parsed (or raw mapping) checkpoint record."""

        if not isinstance(record, LocationCheckpointRecord):
            try:
                record = LocationCheckpointRecord.model_validate(record)
            except ValidationError as exc:
                raise CorruptCheckpointError(f"Invalid location checkpoint: {exc}") from exc

        location_type = parse_location_type(record.kind)
        location_class = location_class_for(location_type)
        probe = self._probes.get(location_type)
        if probe is None:
            raise InvalidArgumentError(
                f"No resource probe configured for location kind '{location_type.value}'."
            )

        try:
            ref_record = RESOURCE_REF_RECORDS[location_type].model_validate(record.resource_ref)
        except ValidationError as exc:
            raise CorruptCheckpointError(
                f"Invalid resourceRef for kind '{location_type.value}': {exc}"
            ) from exc

        try:
            resource_ref = location_class.REF_TYPE(**ref_record.model_dump())
            access_condition = self._access_condition_from_record(record.access_condition)
            request_options = (
                None
                if record.request_options is None
                else RequestOptions(**record.request_options.model_dump())
            )
            return location_class.from_checkpoint(
                resource_ref,
                probe=probe,
                access_condition=access_condition,
                condition_checked=record.condition_checked,
                fingerprint=record.fingerprint,
                request_options=request_options,
            )
        except InvalidArgumentError as exc:
            raise CorruptCheckpointError(
                f"Inconsistent checkpoint for kind '{location_type.value}': {exc}"
            ) from exc

    def _access_condition_from_record(
        self,
        record: AccessConditionRecord,
    ) -> AccessCondition | None:
        try:
            kind = AccessConditionKind(record.kind.strip().lower())
        except ValueError as exc:
            raise CorruptCheckpointError(
                f"Unknown access condition kind '{record.kind}'."
            ) from exc
        if kind is AccessConditionKind.NONE:
            return None
        return AccessCondition(kind, record.fingerprint)


__all__ = ["CheckpointCodec"]
