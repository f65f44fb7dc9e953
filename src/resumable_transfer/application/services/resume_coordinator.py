"""Job planning and resume use-case service."""

from __future__ import annotations

import asyncio
import logging

from resumable_transfer.domain.errors import (
    CorruptCheckpointError,
    DuplicateTransferError,
    InvalidArgumentError,
)
from resumable_transfer.domain.ports import (
    CheckpointStore,
    CredentialProvider,
    TransferLocation,
)
from resumable_transfer.domain.transfer_jobs import TransferJobCheckpoint
from resumable_transfer.infrastructure.checkpoints import CheckpointCodec

logger = logging.getLogger(__name__)


class ResumeCoordinator:
    """Gatekeeper between checkpoints and the copy engine.

    - `plan` validates a new job and enforces its access conditions.
    - `resume` decodes a checkpoint, injects fresh credentials, validates,
      and re-runs condition enforcement (a no-op once already checked).
    - Only one active job may write to a given destination at a time.

    Backend probes are blocking and run through `asyncio.to_thread`. Any
    failure, cancellation included, releases the destination claim before it
    is logged and re-raised to the caller.
    """

    def __init__(
        self,
        codec: CheckpointCodec,
        credential_provider: CredentialProvider,
        checkpoint_store: CheckpointStore | None = None,
    ) -> None:
        self._codec = codec
        self._credential_provider = credential_provider
        self._checkpoint_store = checkpoint_store
        self._active_destinations: dict[str, str] = {}
        self._active_lock = asyncio.Lock()

    @property
    def active_job_ids(self) -> list[str]:
        """Jobs currently holding a destination."""

        return list(self._active_destinations.values())

    async def plan(self, job: TransferJobCheckpoint) -> TransferJobCheckpoint:
        """Confirm reachability of a freshly built job before copying starts."""

        await self._claim(job)
        try:
            await self._validate_and_enforce(job)
            await self.checkpoint(job)
        except BaseException as exc:
            logger.warning("Planning job '%s' failed: %s", job.job_id, exc)
            await self._release(job)
            raise
        logger.info(
            "Planned job '%s': %s -> %s.",
            job.job_id,
            job.source.canonical_identifier(),
            job.destination.canonical_identifier(),
        )
        return job

    async def resume(self, payload: bytes) -> TransferJobCheckpoint:
        """Rehydrate a job from checkpoint bytes and make it ready to copy."""

        job = self._codec.decode_job(payload)
        await self._claim(job)
        try:
            await self.refresh_credentials(job)
            await self._validate_and_enforce(job)
        except BaseException as exc:
            logger.warning("Resuming job '%s' failed: %s", job.job_id, exc)
            await self._release(job)
            raise
        logger.info(
            "Resumed job '%s': %s -> %s.",
            job.job_id,
            job.source.canonical_identifier(),
            job.destination.canonical_identifier(),
        )
        return job

    async def resume_from_store(self, job_id: str) -> TransferJobCheckpoint:
        """Load the latest checkpoint of a job and resume it."""

        store = self._require_store()
        payload = await store.load(job_id)
        if payload is None:
            raise CorruptCheckpointError(f"No checkpoint stored for job '{job_id}'.")
        return await self.resume(payload)

    async def refresh_credentials(self, job: TransferJobCheckpoint) -> None:
        """Swap fresh credentials into both locations of a job."""

        for location in job.locations:
            await self._refresh_location(location)

    async def checkpoint(self, job: TransferJobCheckpoint) -> bytes:
        """Encode the job and persist it when a store is configured."""

        payload = self._codec.encode_job(job)
        if self._checkpoint_store is not None:
            await self._checkpoint_store.save(job.job_id, payload)
        return payload

    async def finish(self, job: TransferJobCheckpoint, *, discard_checkpoint: bool = True) -> None:
        """Release a completed or abandoned job."""

        await self._release(job)
        if discard_checkpoint and self._checkpoint_store is not None:
            await self._checkpoint_store.delete(job.job_id)

    async def _refresh_location(self, location: TransferLocation) -> None:
        credentials = await self._credential_provider.credentials_for(
            location.location_type,
            location.canonical_identifier(),
        )
        location.update_credentials(credentials)

    async def _validate_and_enforce(self, job: TransferJobCheckpoint) -> None:
        # The source must already exist; the destination may be created by the copy.
        await asyncio.to_thread(job.source.validate, require_exists=True)
        await asyncio.to_thread(job.source.check_access_condition)
        await asyncio.to_thread(job.destination.validate)
        await asyncio.to_thread(job.destination.check_access_condition)

    async def _claim(self, job: TransferJobCheckpoint) -> None:
        identifier = job.destination.canonical_identifier()
        async with self._active_lock:
            owner = self._active_destinations.get(identifier)
            if owner is not None and owner != job.job_id:
                raise DuplicateTransferError(
                    f"Destination '{identifier}' is already used by active job '{owner}'."
                )
            self._active_destinations[identifier] = job.job_id

    async def _release(self, job: TransferJobCheckpoint) -> None:
        identifier = job.destination.canonical_identifier()
        async with self._active_lock:
            if self._active_destinations.get(identifier) == job.job_id:
                del self._active_destinations[identifier]

    def _require_store(self) -> CheckpointStore:
        if self._checkpoint_store is None:
            raise InvalidArgumentError("ResumeCoordinator has no checkpoint store configured.")
        return self._checkpoint_store


__all__ = ["ResumeCoordinator"]
