"""Transfer job checkpoint models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from resumable_transfer.domain.errors import InvalidArgumentError
from resumable_transfer.domain.ports import TransferLocation


@dataclass(slots=True)
class TransferJobCheckpoint:
    """One source/destination pair plus copy-engine progress."""

    job_id: str
    source: TransferLocation
    destination: TransferLocation
    progress: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.job_id or not self.job_id.strip():
            raise InvalidArgumentError("Transfer job id cannot be empty.")
        if self.source is None or self.destination is None:
            raise InvalidArgumentError("Transfer jobs require both source and destination.")

    @property
    def locations(self) -> tuple[TransferLocation, TransferLocation]:
        return self.source, self.destination


__all__ = ["TransferJobCheckpoint"]
