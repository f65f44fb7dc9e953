"""In-memory checkpoint store for local development and tests."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from datetime import UTC, datetime

from resumable_transfer.domain.errors import InvalidArgumentError
from resumable_transfer.domain.ports import CheckpointStore


@dataclass(slots=True)
class _InMemoryCheckpoint:
    job_id: str
    payload: bytes
    revision: int
    created_at: datetime
    updated_at: datetime


class InMemoryCheckpointStore(CheckpointStore):
    """Keeps the latest encoded checkpoint per job."""

    def __init__(self) -> None:
        self._checkpoints: dict[str, _InMemoryCheckpoint] = {}
        self._lock = asyncio.Lock()

    async def save(self, job_id: str, payload: bytes) -> None:
        """Create or replace one checkpoint."""

        if not job_id:
            raise InvalidArgumentError("Checkpoint job id cannot be empty.")
        now = datetime.now(tz=UTC)
        async with self._lock:
            existing = self._checkpoints.get(job_id)
            if existing is None:
                self._checkpoints[job_id] = _InMemoryCheckpoint(
                    job_id=job_id,
                    payload=bytes(payload),
                    revision=1,
                    created_at=now,
                    updated_at=now,
                )
                return
            existing.payload = bytes(payload)
            existing.revision += 1
            existing.updated_at = now

    async def load(self, job_id: str) -> bytes | None:
        """Return the latest payload."""

        async with self._lock:
            checkpoint = self._checkpoints.get(job_id)
            return None if checkpoint is None else checkpoint.payload

    async def delete(self, job_id: str) -> None:
        """Drop one checkpoint when present."""

        async with self._lock:
            self._checkpoints.pop(job_id, None)

    async def revision(self, job_id: str) -> int:
        """Return how many times a checkpoint was written, 0 when unknown."""

        async with self._lock:
            checkpoint = self._checkpoints.get(job_id)
            return 0 if checkpoint is None else checkpoint.revision

    async def list_job_ids(self) -> list[str]:
        """Return known job ids in insertion order."""

        async with self._lock:
            return list(self._checkpoints)


__all__ = ["InMemoryCheckpointStore"]
