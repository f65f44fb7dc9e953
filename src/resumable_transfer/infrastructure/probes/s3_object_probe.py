"""S3 metadata probe backing cloud-blob locations."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Protocol, cast

import boto3
from botocore import UNSIGNED
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from resumable_transfer.domain.access_conditions import ResourceState
from resumable_transfer.domain.credentials import CredentialHandle, CredentialScheme
from resumable_transfer.domain.errors import InvalidArgumentError, UnreachableOrChangedError
from resumable_transfer.domain.locations import BlobRef
from resumable_transfer.domain.ports import ResourceProbe
from resumable_transfer.domain.request_options import RequestOptions

_NOT_FOUND_CODES = frozenset({"404", "NoSuchKey", "NotFound", "NoSuchBucket"})
_DENIED_CODES = frozenset({"401", "403", "AccessDenied", "Forbidden", "InvalidAccessKeyId"})


class S3Client(Protocol):
    """Subset of S3 client operations used by the probe."""

    def head_object(self, *, Bucket: str, Key: str) -> dict[str, Any]:
        """Return object metadata."""

    def head_bucket(self, *, Bucket: str) -> dict[str, Any]:
        """Return bucket metadata."""


S3ClientFactory = Callable[[BlobRef, CredentialHandle, RequestOptions], S3Client]


class S3ObjectProbe(ResourceProbe):
    """Fetch existence and ETag of one S3 object.

    A missing object triggers a second `head_bucket` call, since a 404 from
    `head_object` does not tell a missing key from a missing bucket.
    """

    def __init__(
        self,
        default_region: str = "us-east-1",
        endpoint_url: str | None = None,
        max_pool_connections: int = 16,
        s3_client_factory: S3ClientFactory | None = None,
    ) -> None:
        self._default_region = default_region
        self._endpoint_url = endpoint_url
        self._max_pool_connections = max(1, max_pool_connections)
        self._s3_client_factory = s3_client_factory or self._build_default_s3_client

    def fetch_state(
        self,
        resource_ref: BlobRef,
        credentials: CredentialHandle,
        options: RequestOptions,
    ) -> ResourceState:
        """Return object state or raise UnreachableOrChangedError."""

        client = self._s3_client_factory(resource_ref, credentials, options)
        identifier = f"s3://{resource_ref.bucket}/{resource_ref.key}"
        try:
            response = client.head_object(Bucket=resource_ref.bucket, Key=resource_ref.key)
        except ClientError as exc:
            code = self._error_code(exc)
            if code in _NOT_FOUND_CODES:
                return ResourceState(
                    exists=False,
                    parent_exists=self._bucket_exists(client, resource_ref),
                )
            if code in _DENIED_CODES:
                raise UnreachableOrChangedError(
                    f"Access denied to '{identifier}' ({code})."
                ) from exc
            raise UnreachableOrChangedError(f"HEAD '{identifier}' failed: {exc}") from exc
        except BotoCoreError as exc:
            raise UnreachableOrChangedError(f"HEAD '{identifier}' failed: {exc}") from exc

        etag = response.get("ETag")
        if not isinstance(etag, str) or not etag:
            raise UnreachableOrChangedError(
                f"head_object did not return an ETag for '{identifier}'."
            )
        return ResourceState(exists=True, fingerprint=etag)

    def _bucket_exists(self, client: S3Client, resource_ref: BlobRef) -> bool:
        try:
            client.head_bucket(Bucket=resource_ref.bucket)
        except ClientError as exc:
            code = self._error_code(exc)
            if code in _NOT_FOUND_CODES:
                return False
            if code in _DENIED_CODES:
                raise UnreachableOrChangedError(
                    f"Access denied to bucket '{resource_ref.bucket}' ({code})."
                ) from exc
            raise UnreachableOrChangedError(
                f"HEAD bucket '{resource_ref.bucket}' failed: {exc}"
            ) from exc
        except BotoCoreError as exc:
            raise UnreachableOrChangedError(
                f"HEAD bucket '{resource_ref.bucket}' failed: {exc}"
            ) from exc
        return True

    def _error_code(self, exc: ClientError) -> str:
        error = exc.response.get("Error", {})
        code = error.get("Code")
        if code:
            return str(code)
        status = exc.response.get("ResponseMetadata", {}).get("HTTPStatusCode")
        return str(status) if status is not None else ""

    def _build_default_s3_client(
        self,
        resource_ref: BlobRef,
        credentials: CredentialHandle,
        options: RequestOptions,
    ) -> S3Client:
        """Create a boto3 S3 client configured from the location request options."""

        config_kwargs: dict[str, Any] = {
            "max_pool_connections": self._max_pool_connections,
            "retries": {"max_attempts": options.max_attempts, "mode": "standard"},
        }
        timeout = options.effective_timeout_seconds
        if timeout is not None:
            config_kwargs["connect_timeout"] = timeout
            config_kwargs["read_timeout"] = timeout

        client_kwargs: dict[str, Any] = {
            "region_name": resource_ref.region or self._default_region,
            "endpoint_url": resource_ref.endpoint_url or self._endpoint_url,
        }
        if credentials.scheme is CredentialScheme.ANONYMOUS:
            config_kwargs["signature_version"] = UNSIGNED
        elif credentials.scheme is CredentialScheme.ACCESS_KEY:
            client_kwargs["aws_access_key_id"] = credentials.key_id
            client_kwargs["aws_secret_access_key"] = credentials.secret_value()
            client_kwargs["aws_session_token"] = credentials.session_token_value()
        else:
            raise InvalidArgumentError(
                f"S3 probe cannot use '{credentials.scheme.value}' credentials."
            )

        client = boto3.client("s3", config=Config(**config_kwargs), **client_kwargs)
        return cast(S3Client, client)


__all__ = ["S3Client", "S3ClientFactory", "S3ObjectProbe"]
