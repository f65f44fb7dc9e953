"""Checkpoint codec and store implementations."""

from resumable_transfer.infrastructure.checkpoints.codec import CheckpointCodec
from resumable_transfer.infrastructure.checkpoints.in_memory_checkpoint_store import (
    InMemoryCheckpointStore,
)

__all__ = ["CheckpointCodec", "InMemoryCheckpointStore"]
