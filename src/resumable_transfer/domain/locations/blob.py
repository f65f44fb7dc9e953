"""Cloud object-store (S3-compatible) blob locations."""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import quote, urlparse

from resumable_transfer.domain.credentials import CredentialScheme
from resumable_transfer.domain.errors import InvalidArgumentError
from resumable_transfer.domain.locations.base import BaseTransferLocation
from resumable_transfer.domain.location_types import TransferLocationType


@dataclass(slots=True, frozen=True)
class BlobRef:
    """Canonical object-store location."""

    bucket: str
    key: str
    region: str | None = None
    endpoint_url: str | None = None

    def __post_init__(self) -> None:
        if not self.bucket or not self.bucket.strip():
            raise InvalidArgumentError("Blob bucket cannot be empty.")
        if not self.key or not self.key.strip():
            raise InvalidArgumentError("Blob key cannot be empty.")

    @classmethod
    def from_uri(cls, uri: str, region: str | None = None) -> BlobRef:
        """Parse `s3://bucket/key`."""

        if not uri:
            raise InvalidArgumentError("Blob URI cannot be empty.")
        parsed = urlparse(uri)
        if parsed.scheme.lower() != "s3":
            raise InvalidArgumentError(f"Unsupported blob URI '{uri}', expected s3://bucket/key.")
        return cls(bucket=parsed.netloc, key=parsed.path.lstrip("/"), region=region)


class BlobLocation(BaseTransferLocation[BlobRef]):
    """Object in an S3-compatible bucket."""

    LOCATION_TYPE = TransferLocationType.CLOUD_BLOB
    ACCEPTED_SCHEMES = frozenset({CredentialScheme.ACCESS_KEY, CredentialScheme.ANONYMOUS})
    REF_TYPE = BlobRef

    def canonical_identifier(self) -> str:
        ref = self._resource_ref
        key = quote(ref.key, safe="/")
        if ref.endpoint_url:
            return f"{ref.endpoint_url.rstrip('/')}/{ref.bucket}/{key}"
        return f"s3://{ref.bucket}/{key}"


__all__ = ["BlobLocation", "BlobRef"]
