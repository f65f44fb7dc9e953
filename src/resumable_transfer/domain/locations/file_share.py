"""Cloud file-share locations."""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import quote, unquote, urlparse

from resumable_transfer.domain.credentials import CredentialScheme
from resumable_transfer.domain.errors import InvalidArgumentError
from resumable_transfer.domain.locations.base import BaseTransferLocation
from resumable_transfer.domain.location_types import TransferLocationType


@dataclass(slots=True, frozen=True)
class FileShareRef:
    """File inside a cloud file share, e.g. `https://acct.file.core.windows.net/share/a/b.txt`."""

    account_url: str
    share: str
    path: str

    def __post_init__(self) -> None:
        if not self.account_url or not self.account_url.strip():
            raise InvalidArgumentError("File share account URL cannot be empty.")
        if not self.share or not self.share.strip():
            raise InvalidArgumentError("File share name cannot be empty.")
        if not self.path or not self.path.strip("/"):
            raise InvalidArgumentError("File path cannot be empty.")
        object.__setattr__(self, "account_url", self.account_url.strip().rstrip("/"))
        object.__setattr__(self, "path", self.path.strip("/"))

    @classmethod
    def from_url(cls, url: str) -> FileShareRef:
        """Split a file URL into account, share, and path."""

        if not url:
            raise InvalidArgumentError("File URL cannot be empty.")
        parsed = urlparse(url)
        if parsed.scheme.lower() not in {"http", "https"} or not parsed.netloc:
            raise InvalidArgumentError(f"Unsupported file URL '{url}'.")
        share, _, path = unquote(parsed.path).lstrip("/").partition("/")
        return cls(account_url=f"{parsed.scheme}://{parsed.netloc}", share=share, path=path)

    @property
    def parent_path(self) -> str:
        """Directory holding the file; empty for the share root."""

        parent, _, _ = self.path.rpartition("/")
        return parent

    @property
    def url(self) -> str:
        return f"{self.account_url}/{quote(self.share)}/{quote(self.path, safe='/')}"

    @property
    def parent_url(self) -> str:
        base = f"{self.account_url}/{quote(self.share)}"
        if not self.parent_path:
            return base
        return f"{base}/{quote(self.parent_path, safe='/')}"


class FileShareLocation(BaseTransferLocation[FileShareRef]):
    """File in a cloud file share."""

    LOCATION_TYPE = TransferLocationType.CLOUD_FILE
    ACCEPTED_SCHEMES = frozenset(
        {CredentialScheme.SHARED_ACCESS_SIGNATURE, CredentialScheme.BEARER_TOKEN}
    )
    REF_TYPE = FileShareRef

    def canonical_identifier(self) -> str:
        return self._resource_ref.url


__all__ = ["FileShareLocation", "FileShareRef"]
