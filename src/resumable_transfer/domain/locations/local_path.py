"""Local filesystem locations."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from resumable_transfer.domain.credentials import CredentialScheme
from resumable_transfer.domain.errors import InvalidArgumentError
from resumable_transfer.domain.locations.base import BaseTransferLocation
from resumable_transfer.domain.location_types import TransferLocationType


@dataclass(slots=True, frozen=True)
class LocalPathRef:
    """Absolute, normalized path of a local file."""

    path: str

    def __post_init__(self) -> None:
        if self.path is None or not str(self.path).strip():
            raise InvalidArgumentError("Local path cannot be empty.")
        object.__setattr__(self, "path", os.path.abspath(os.fspath(self.path)))

    @property
    def as_path(self) -> Path:
        return Path(self.path)


class LocalPathLocation(BaseTransferLocation[LocalPathRef]):
    """File on a locally mounted filesystem."""

    LOCATION_TYPE = TransferLocationType.LOCAL_PATH
    ACCEPTED_SCHEMES = frozenset({CredentialScheme.LOCAL_IDENTITY})
    REF_TYPE = LocalPathRef

    def canonical_identifier(self) -> str:
        return self._resource_ref.as_path.as_uri()


__all__ = ["LocalPathLocation", "LocalPathRef"]
