"""HTTP HEAD probe backing SAS-URI locations."""

from __future__ import annotations

from typing import cast

import httpx

from resumable_transfer.domain.access_conditions import ResourceState
from resumable_transfer.domain.credentials import CredentialHandle, CredentialScheme
from resumable_transfer.domain.errors import InvalidArgumentError, UnreachableOrChangedError
from resumable_transfer.domain.locations import SasUriRef
from resumable_transfer.domain.ports import ResourceProbe
from resumable_transfer.domain.request_options import RequestOptions

_DEFAULT_TIMEOUT_SECONDS = 30.0


class HttpResourceProbe(ResourceProbe):
    """Issue one signed HEAD request and read the ETag header."""

    def __init__(
        self,
        timeout_seconds: float = _DEFAULT_TIMEOUT_SECONDS,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._timeout_seconds = timeout_seconds
        self._transport = transport

    def fetch_state(
        self,
        resource_ref: SasUriRef,
        credentials: CredentialHandle,
        options: RequestOptions,
    ) -> ResourceState:
        """Return resource state or raise UnreachableOrChangedError."""

        response = self._head(
            resource_ref.uri,
            query=self._signature_query(credentials),
            headers={},
            options=options,
        )
        if response.status_code == 404:
            return ResourceState(exists=False)
        self._ensure_success(response, resource_ref.uri)
        return ResourceState(exists=True, fingerprint=response.headers.get("ETag"))

    def _head(
        self,
        url: str,
        *,
        query: list[str],
        headers: dict[str, str],
        options: RequestOptions,
    ) -> httpx.Response:
        target = url if not query else f"{url}?{'&'.join(query)}"
        timeout = options.effective_timeout_seconds or self._timeout_seconds
        sync_transport = cast(httpx.BaseTransport | None, self._transport)
        try:
            with httpx.Client(timeout=timeout, transport=sync_transport) as http_client:
                return http_client.head(target, headers=headers)
        except httpx.HTTPError as exc:
            # Error messages carry the unsigned URL only.
            raise UnreachableOrChangedError(f"HEAD {url} failed: {exc}") from exc

    def _signature_query(self, credentials: CredentialHandle) -> list[str]:
        if credentials.scheme is CredentialScheme.ANONYMOUS:
            return []
        if credentials.scheme is CredentialScheme.SHARED_ACCESS_SIGNATURE:
            signature = credentials.secret_value()
            return [signature] if signature else []
        raise InvalidArgumentError(
            f"{type(self).__name__} cannot use '{credentials.scheme.value}' credentials."
        )

    def _ensure_success(self, response: httpx.Response, url: str) -> None:
        if response.is_success:
            return
        if response.status_code in {401, 403}:
            raise UnreachableOrChangedError(
                f"Access denied to '{url}' ({response.status_code})."
            )
        raise UnreachableOrChangedError(f"HEAD {url} failed: {response.status_code}")


__all__ = ["HttpResourceProbe"]
