from __future__ import annotations

import httpx
import pytest

from resumable_transfer.domain.access_conditions import AccessCondition
from resumable_transfer.domain.credentials import CredentialHandle
from resumable_transfer.domain.errors import (
    FingerprintConflictError,
    PreconditionFailedError,
    UnreachableOrChangedError,
)
from resumable_transfer.domain.locations import (
    FileShareLocation,
    FileShareRef,
    SasUriLocation,
    SasUriRef,
)
from resumable_transfer.domain.request_options import RequestOptions
from resumable_transfer.infrastructure.probes import AzureFileProbe, HttpResourceProbe

_OPTIONS = RequestOptions(server_timeout_seconds=5.0)
_BLOB_URL = "https://acct.blob.core.windows.net/container/data.bin"


def test_sas_probe_sends_signature_and_reads_etag() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, headers={"ETag": '"0x8D1"'})

    probe = HttpResourceProbe(transport=httpx.MockTransport(handler))

    state = probe.fetch_state(
        SasUriRef(_BLOB_URL),
        CredentialHandle.shared_access_signature("?sv=2024-01-01&sig=abc"),
        _OPTIONS,
    )

    assert state.exists is True
    assert state.fingerprint == '"0x8D1"'
    assert seen[0].method == "HEAD"
    assert seen[0].url.params["sv"] == "2024-01-01"
    assert seen[0].url.params["sig"] == "abc"


def test_sas_probe_reports_missing_resource() -> None:
    probe = HttpResourceProbe(transport=httpx.MockTransport(lambda request: httpx.Response(404)))

    state = probe.fetch_state(SasUriRef(_BLOB_URL), CredentialHandle.anonymous(), _OPTIONS)

    assert state.exists is False
    assert state.parent_exists is True


@pytest.mark.parametrize("status_code", [401, 403, 500, 503])
def test_sas_probe_failures_raise_unreachable(status_code: int) -> None:
    probe = HttpResourceProbe(
        transport=httpx.MockTransport(lambda request: httpx.Response(status_code))
    )

    with pytest.raises(UnreachableOrChangedError):
        probe.fetch_state(SasUriRef(_BLOB_URL), CredentialHandle.anonymous(), _OPTIONS)


def test_sas_probe_transport_errors_do_not_leak_signature() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    probe = HttpResourceProbe(transport=httpx.MockTransport(handler))

    with pytest.raises(UnreachableOrChangedError) as exc_info:
        probe.fetch_state(
            SasUriRef(_BLOB_URL),
            CredentialHandle.shared_access_signature("sig=very-secret"),
            _OPTIONS,
        )

    assert "very-secret" not in str(exc_info.value)
    assert _BLOB_URL in str(exc_info.value)


def test_sas_location_detects_changed_resource() -> None:
    etags = iter(['"v1"', '"v2"'])
    probe = HttpResourceProbe(
        transport=httpx.MockTransport(
            lambda request: httpx.Response(200, headers={"ETag": next(etags)})
        )
    )
    location = SasUriLocation.from_signed_url(
        f"{_BLOB_URL}?sv=2024&sig=abc",
        probe=probe,
        access_condition=AccessCondition.if_exists(),
    )

    location.check_access_condition()
    assert location.fingerprint == '"v1"'
    with pytest.raises(FingerprintConflictError):
        location.validate()


def test_file_probe_uses_bearer_token_headers() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, headers={"ETag": '"file-v1"'})

    probe = AzureFileProbe(api_version="2024-05-04", transport=httpx.MockTransport(handler))
    ref = FileShareRef.from_url("https://acct.file.core.windows.net/share/dir/report.csv")

    state = probe.fetch_state(ref, CredentialHandle.bearer_token("token-1"), _OPTIONS)

    assert state.fingerprint == '"file-v1"'
    request = seen[0]
    assert str(request.url) == "https://acct.file.core.windows.net/share/dir/report.csv"
    assert request.headers["Authorization"] == "Bearer token-1"
    assert request.headers["x-ms-version"] == "2024-05-04"
    assert request.headers["x-ms-file-request-intent"] == "backup"


def test_file_probe_checks_parent_directory_when_file_is_missing() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        if request.url.params.get("restype") == "directory":
            return httpx.Response(200)
        return httpx.Response(404)

    probe = AzureFileProbe(transport=httpx.MockTransport(handler))
    ref = FileShareRef.from_url("https://acct.file.core.windows.net/share/dir/report.csv")

    state = probe.fetch_state(ref, CredentialHandle.shared_access_signature("sig=abc"), _OPTIONS)

    assert state.exists is False
    assert state.parent_exists is True
    assert seen[1].url.path == "/share/dir"
    assert seen[1].url.params["sig"] == "abc"
    assert "Authorization" not in seen[1].headers


def test_file_probe_checks_share_for_root_level_files() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(404)

    probe = AzureFileProbe(transport=httpx.MockTransport(handler))
    ref = FileShareRef.from_url("https://acct.file.core.windows.net/share/report.csv")

    state = probe.fetch_state(ref, CredentialHandle.bearer_token("token-1"), _OPTIONS)

    assert state.exists is False
    assert state.parent_exists is False
    assert seen[1].url.path == "/share"
    assert seen[1].url.params["restype"] == "share"


def test_file_destination_if_not_exists_fails_when_file_exists() -> None:
    probe = AzureFileProbe(
        transport=httpx.MockTransport(
            lambda request: httpx.Response(200, headers={"ETag": '"present"'})
        )
    )
    location = FileShareLocation(
        FileShareRef.from_url("https://acct.file.core.windows.net/share/dir/report.csv"),
        CredentialHandle.bearer_token("token-1"),
        probe=probe,
        access_condition=AccessCondition.if_not_exists(),
    )

    with pytest.raises(PreconditionFailedError):
        location.check_access_condition()


def test_file_destination_with_missing_parent_fails_validation() -> None:
    probe = AzureFileProbe(transport=httpx.MockTransport(lambda request: httpx.Response(404)))
    location = FileShareLocation(
        FileShareRef.from_url("https://acct.file.core.windows.net/share/missing/report.csv"),
        CredentialHandle.bearer_token("token-1"),
        probe=probe,
    )

    with pytest.raises(UnreachableOrChangedError):
        location.validate()
