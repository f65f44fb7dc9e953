"""HTTP(S) resources addressed by a URI plus shared access signature."""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import urlparse, urlunparse

from resumable_transfer.domain.access_conditions import AccessCondition
from resumable_transfer.domain.credentials import CredentialHandle, CredentialScheme
from resumable_transfer.domain.errors import InvalidArgumentError
from resumable_transfer.domain.locations.base import BaseTransferLocation
from resumable_transfer.domain.location_types import TransferLocationType
from resumable_transfer.domain.ports import ResourceProbe
from resumable_transfer.domain.request_options import RequestOptions


@dataclass(slots=True, frozen=True)
class SasUriRef:
    """Resource URI without its signature query string."""

    uri: str

    def __post_init__(self) -> None:
        if not self.uri or not self.uri.strip():
            raise InvalidArgumentError("Resource URI cannot be empty.")
        parsed = urlparse(self.uri.strip())
        if parsed.scheme.lower() not in {"http", "https"} or not parsed.netloc:
            raise InvalidArgumentError(f"Unsupported resource URI '{self.uri}'.")
        if parsed.query:
            raise InvalidArgumentError(
                "Resource URI must not carry a query string; pass the signature "
                "as credentials instead."
            )
        object.__setattr__(self, "uri", urlunparse(parsed._replace(fragment="")))


def split_signed_url(signed_url: str) -> tuple[SasUriRef, CredentialHandle]:
    """Separate a signed URL into its resource part and its signature."""

    if not signed_url or not signed_url.strip():
        raise InvalidArgumentError("Signed URL cannot be empty.")
    parsed = urlparse(signed_url.strip())
    if not parsed.query:
        raise InvalidArgumentError("Signed URL carries no shared access signature.")
    ref = SasUriRef(urlunparse(parsed._replace(query="", fragment="")))
    return ref, CredentialHandle.shared_access_signature(parsed.query)


class SasUriLocation(BaseTransferLocation[SasUriRef]):
    """Resource reachable over HTTP(S) with a shared access signature."""

    LOCATION_TYPE = TransferLocationType.SAS_URI
    ACCEPTED_SCHEMES = frozenset(
        {CredentialScheme.SHARED_ACCESS_SIGNATURE, CredentialScheme.ANONYMOUS}
    )
    REF_TYPE = SasUriRef

    @classmethod
    def from_signed_url(
        cls,
        signed_url: str,
        *,
        probe: ResourceProbe,
        access_condition: AccessCondition | None = None,
        request_options: RequestOptions | None = None,
    ) -> SasUriLocation:
        ref, credentials = split_signed_url(signed_url)
        return cls(
            ref,
            credentials,
            probe=probe,
            access_condition=access_condition,
            request_options=request_options,
        )

    def canonical_identifier(self) -> str:
        return self._resource_ref.uri


__all__ = ["SasUriLocation", "SasUriRef", "split_signed_url"]
