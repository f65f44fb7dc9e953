"""File-share metadata probe backing cloud-file locations."""

from __future__ import annotations

import httpx

from resumable_transfer.domain.access_conditions import ResourceState
from resumable_transfer.domain.credentials import CredentialHandle, CredentialScheme
from resumable_transfer.domain.locations import FileShareRef
from resumable_transfer.domain.request_options import RequestOptions
from resumable_transfer.infrastructure.probes.http_resource_probe import HttpResourceProbe

_DEFAULT_API_VERSION = "2023-11-03"


class AzureFileProbe(HttpResourceProbe):
    """Probe a file and, when it is missing, its parent directory.

    Uses the file-service REST API: `HEAD <file>` for properties and
    `HEAD <dir>?restype=directory` (or `?restype=share` at the share root).
    """

    def __init__(
        self,
        api_version: str = _DEFAULT_API_VERSION,
        timeout_seconds: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        super().__init__(timeout_seconds=timeout_seconds, transport=transport)
        self._api_version = api_version

    def fetch_state(
        self,
        resource_ref: FileShareRef,
        credentials: CredentialHandle,
        options: RequestOptions,
    ) -> ResourceState:
        """Return file state or raise UnreachableOrChangedError."""

        headers = self._auth_headers(credentials)
        signature = self._file_signature_query(credentials)
        response = self._head(resource_ref.url, query=signature, headers=headers, options=options)
        if response.status_code != 404:
            self._ensure_success(response, resource_ref.url)
            return ResourceState(exists=True, fingerprint=response.headers.get("ETag"))

        restype = "directory" if resource_ref.parent_path else "share"
        parent = self._head(
            resource_ref.parent_url,
            query=[f"restype={restype}", *signature],
            headers=headers,
            options=options,
        )
        if parent.status_code == 404:
            return ResourceState(exists=False, parent_exists=False)
        self._ensure_success(parent, resource_ref.parent_url)
        return ResourceState(exists=False)

    def _auth_headers(self, credentials: CredentialHandle) -> dict[str, str]:
        headers = {"x-ms-version": self._api_version}
        if credentials.scheme is CredentialScheme.BEARER_TOKEN:
            headers["Authorization"] = f"Bearer {credentials.secret_value()}"
            headers["x-ms-file-request-intent"] = "backup"
        return headers

    def _file_signature_query(self, credentials: CredentialHandle) -> list[str]:
        if credentials.scheme is CredentialScheme.BEARER_TOKEN:
            return []
        return self._signature_query(credentials)


__all__ = ["AzureFileProbe"]
