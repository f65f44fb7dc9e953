from __future__ import annotations

import io
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Any

import pytest

from resumable_transfer.domain.access_conditions import AccessCondition, ResourceState
from resumable_transfer.domain.credentials import CredentialHandle
from resumable_transfer.domain.errors import (
    FingerprintConflictError,
    InvalidArgumentError,
    LocationNotReadyError,
    PreconditionFailedError,
    UnreachableOrChangedError,
)
from resumable_transfer.domain.location_types import LocationPhase, TransferLocationType
from resumable_transfer.domain.locations import (
    BlobLocation,
    BlobRef,
    FileShareLocation,
    FileShareRef,
    LocalPathLocation,
    LocalPathRef,
    SasUriLocation,
    SasUriRef,
    StreamLocation,
    StreamRef,
)
from resumable_transfer.domain.ports import TransferLocation
from resumable_transfer.domain.request_options import RequestOptions, default_request_options


class FakeProbe:
    """Thread-safe probe double returning a configurable resource state."""

    def __init__(self, state: ResourceState | None = None) -> None:
        self.state = state or ResourceState(exists=True, fingerprint="v1")
        self.calls = 0
        self.seen_credentials: list[CredentialHandle] = []
        self._lock = threading.Lock()

    def fetch_state(
        self,
        resource_ref: Any,
        credentials: CredentialHandle,
        options: RequestOptions,
    ) -> ResourceState:
        with self._lock:
            self.calls += 1
            self.seen_credentials.append(credentials)
        return self.state


def _blob(
    probe: FakeProbe,
    access_condition: AccessCondition | None = None,
) -> BlobLocation:
    return BlobLocation(
        BlobRef(bucket="src-bucket", key="data/source.bin"),
        CredentialHandle.access_key("AKIAEXAMPLE", "secret-1"),
        probe=probe,
        access_condition=access_condition,
    )


def _decoded_blob(probe: FakeProbe, **overrides: Any) -> BlobLocation:
    fields: dict[str, Any] = {
        "access_condition": AccessCondition.if_match("v1"),
        "condition_checked": True,
        "fingerprint": "v1",
        "request_options": None,
    }
    fields.update(overrides)
    return BlobLocation.from_checkpoint(
        BlobRef(bucket="src-bucket", key="data/source.bin"),
        probe=probe,
        **fields,
    )


def test_construction_rejects_null_resource_handle() -> None:
    with pytest.raises(InvalidArgumentError):
        BlobLocation(None, CredentialHandle.anonymous(), probe=FakeProbe())  # type: ignore[arg-type]


@pytest.mark.parametrize(
    "build",
    [
        lambda: BlobRef(bucket="", key="k"),
        lambda: BlobRef(bucket="b", key=" "),
        lambda: BlobRef.from_uri(""),
        lambda: BlobRef.from_uri("https://bucket/key"),
        lambda: FileShareRef(account_url="https://acct", share="", path="a.txt"),
        lambda: FileShareRef.from_url("https://acct.file.core.windows.net/share"),
        lambda: LocalPathRef(""),
        lambda: SasUriRef(""),
        lambda: SasUriRef("ftp://host/file"),
        lambda: SasUriRef("https://host/file?sig=abc"),
    ],
)
def test_construction_rejects_empty_or_malformed_handles(build: Any) -> None:
    with pytest.raises(InvalidArgumentError):
        build()


def test_blob_ref_parses_s3_uri_with_nested_key() -> None:
    ref = BlobRef.from_uri("s3://bucket/a/b.bin", region="eu-west-1")

    assert ref == BlobRef(bucket="bucket", key="a/b.bin", region="eu-west-1")


def test_construction_rejects_wrong_handle_type() -> None:
    with pytest.raises(InvalidArgumentError):
        BlobLocation(
            LocalPathRef("/tmp/file.bin"),  # type: ignore[arg-type]
            CredentialHandle.anonymous(),
            probe=FakeProbe(),
        )


def test_stream_attach_rejects_null_stream() -> None:
    with pytest.raises(InvalidArgumentError):
        StreamLocation.attach(None, "upload", probe=FakeProbe())  # type: ignore[arg-type]


def test_construction_rejects_missing_or_unsupported_credentials() -> None:
    ref = BlobRef(bucket="b", key="k")
    with pytest.raises(InvalidArgumentError):
        BlobLocation(ref, None, probe=FakeProbe())  # type: ignore[arg-type]
    with pytest.raises(InvalidArgumentError):
        BlobLocation(ref, CredentialHandle.local_identity(), probe=FakeProbe())


def test_live_location_is_ready_and_implements_capability_protocol() -> None:
    location = _blob(FakeProbe())

    assert isinstance(location, TransferLocation)
    assert location.location_type is TransferLocationType.CLOUD_BLOB
    assert location.phase is LocationPhase.READY
    assert location.condition_checked is False
    assert location.fingerprint is None
    assert location.request_options == default_request_options(TransferLocationType.CLOUD_BLOB)


def test_canonical_identifiers_are_stable_and_credential_free(tmp_path: Any) -> None:
    probe = FakeProbe()
    blob = BlobLocation(
        BlobRef(bucket="bucket", key="dir/a b.bin"),
        CredentialHandle.anonymous(),
        probe=probe,
    )
    share = FileShareLocation(
        FileShareRef.from_url("https://acct.file.core.windows.net/share/dir/a.txt"),
        CredentialHandle.shared_access_signature("sv=2024&sig=abc"),
        probe=probe,
    )
    local = LocalPathLocation(
        LocalPathRef(str(tmp_path / "out.bin")),
        CredentialHandle.local_identity(),
        probe=probe,
    )
    stream = StreamLocation.attach(io.BytesIO(b"payload"), "upload-1", probe=probe)
    sas = SasUriLocation.from_signed_url(
        "https://acct.blob.core.windows.net/container/blob.bin?sv=2024&sig=topsecret",
        probe=probe,
    )

    assert blob.canonical_identifier() == "s3://bucket/dir/a%20b.bin"
    assert share.canonical_identifier() == "https://acct.file.core.windows.net/share/dir/a.txt"
    assert local.canonical_identifier() == (tmp_path / "out.bin").as_uri()
    assert stream.canonical_identifier() == "stream://upload-1"
    assert sas.canonical_identifier() == "https://acct.blob.core.windows.net/container/blob.bin"
    assert "topsecret" not in str(sas)
    assert "topsecret" not in repr(sas)
    assert sas.require_credentials().secret_value() == "sv=2024&sig=topsecret"


def test_credential_repr_masks_secrets() -> None:
    handle = CredentialHandle.access_key("AKIAEXAMPLE", "super-secret", session_token="session-xyz")

    assert "super-secret" not in repr(handle)
    assert "session-xyz" not in repr(handle)
    assert handle.secret_value() == "super-secret"


def test_validate_succeeds_when_fingerprint_still_matches() -> None:
    probe = FakeProbe(ResourceState(exists=True, fingerprint="v1"))
    location = _blob(probe)
    location.record_fingerprint("v1")

    location.validate()

    assert probe.calls == 1


def test_validate_fails_when_live_fingerprint_changed() -> None:
    probe = FakeProbe(ResourceState(exists=True, fingerprint="v2"))
    location = _blob(probe)
    location.record_fingerprint("v1")

    with pytest.raises(FingerprintConflictError) as exc_info:
        location.validate()

    assert isinstance(exc_info.value, UnreachableOrChangedError)
    assert exc_info.value.expected == "v1"
    assert exc_info.value.actual == "v2"


def test_validate_fails_when_captured_resource_disappeared() -> None:
    location = _blob(FakeProbe(ResourceState(exists=False)))
    location.record_fingerprint("v1")

    with pytest.raises(UnreachableOrChangedError):
        location.validate()


def test_validate_fails_when_parent_scope_is_missing() -> None:
    location = _blob(FakeProbe(ResourceState(exists=False, parent_exists=False)))

    with pytest.raises(UnreachableOrChangedError):
        location.validate()


def test_validate_without_captured_fingerprint_skips_conflict_check() -> None:
    probe = FakeProbe(ResourceState(exists=False))
    location = _blob(probe)

    location.validate()

    probe.state = ResourceState(exists=True, fingerprint="anything")
    location.validate()
    assert probe.calls == 2


def test_validate_requiring_existence_rejects_missing_resource() -> None:
    probe = FakeProbe(ResourceState(exists=False))
    location = _blob(probe)

    with pytest.raises(UnreachableOrChangedError, match="does not exist"):
        location.validate(require_exists=True)

    probe.state = ResourceState(exists=True, fingerprint="v1")
    location.validate(require_exists=True)


def test_if_not_exists_fails_when_resource_already_exists() -> None:
    probe = FakeProbe(ResourceState(exists=True, fingerprint="v1"))
    location = _blob(probe, AccessCondition.if_not_exists())

    with pytest.raises(PreconditionFailedError):
        location.check_access_condition()

    assert location.condition_checked is False
    assert location.fingerprint is None


def test_if_not_exists_succeeds_and_engine_records_post_creation_fingerprint() -> None:
    probe = FakeProbe(ResourceState(exists=False))
    location = _blob(probe, AccessCondition.if_not_exists())

    location.check_access_condition()

    assert location.condition_checked is True
    assert location.fingerprint is None

    location.record_fingerprint('"etag-after-write"')
    probe.state = ResourceState(exists=True, fingerprint='"etag-after-write"')
    location.validate()
    assert location.fingerprint == '"etag-after-write"'


def test_condition_check_captures_fingerprint_and_runs_once() -> None:
    probe = FakeProbe(ResourceState(exists=True, fingerprint="v1"))
    location = _blob(probe, AccessCondition.if_match("v1"))

    location.check_access_condition()
    probe.state = ResourceState(exists=True, fingerprint="v2")
    location.check_access_condition()
    location.check_access_condition()

    assert probe.calls == 1
    assert location.condition_checked is True
    assert location.fingerprint == "v1"


def test_none_condition_is_marked_checked_without_network_call() -> None:
    probe = FakeProbe()
    location = _blob(probe)

    location.check_access_condition()

    assert probe.calls == 0
    assert location.condition_checked is True
    assert location.fingerprint is None


def test_concurrent_condition_checks_set_state_once() -> None:
    probe = FakeProbe(ResourceState(exists=True, fingerprint="v1"))
    location = _blob(probe, AccessCondition.if_exists())

    with ThreadPoolExecutor(max_workers=8) as pool:
        for future in [pool.submit(location.check_access_condition) for _ in range(16)]:
            future.result()

    assert location.condition_checked is True
    assert location.fingerprint == "v1"
    assert 1 <= probe.calls <= 16

    location.check_access_condition()
    assert probe.calls <= 16


def test_decoded_location_rejects_operations_until_credentials_arrive() -> None:
    probe = FakeProbe()
    location = _decoded_blob(probe)

    assert location.phase is LocationPhase.AWAITING_CREDENTIALS
    for operation in (
        location.validate,
        location.check_access_condition,
        location.require_credentials,
        lambda: location.record_fingerprint("v9"),
    ):
        with pytest.raises(LocationNotReadyError):
            operation()
    assert probe.calls == 0

    location.update_credentials(CredentialHandle.access_key("AKIAEXAMPLE", "fresh"))

    location.validate()
    assert location.phase is LocationPhase.READY
    assert probe.calls == 1


def test_update_credentials_keeps_resource_state() -> None:
    probe = FakeProbe()
    location = _decoded_blob(probe)

    location.update_credentials(CredentialHandle.access_key("AKIAEXAMPLE", "fresh"))

    assert location.condition_checked is True
    assert location.fingerprint == "v1"
    location.check_access_condition()
    assert probe.calls == 0


def test_update_credentials_rejects_unsupported_scheme() -> None:
    location = _decoded_blob(FakeProbe())

    with pytest.raises(InvalidArgumentError):
        location.update_credentials(CredentialHandle.bearer_token("token"))
    assert location.phase is LocationPhase.AWAITING_CREDENTIALS


def test_invalidated_credentials_block_until_refreshed() -> None:
    probe = FakeProbe()
    location = _blob(probe)

    location.invalidate_credentials()
    with pytest.raises(LocationNotReadyError):
        location.validate()

    location.update_credentials(CredentialHandle.access_key("AKIAEXAMPLE", "rotated"))
    location.validate()
    assert probe.seen_credentials[-1].secret_value() == "rotated"


def test_updated_credentials_are_visible_to_all_workers() -> None:
    location = _blob(FakeProbe())
    rotated = CredentialHandle.access_key("AKIAEXAMPLE", "rotated")
    barrier = threading.Barrier(4)

    location.update_credentials(rotated)

    def read_credentials() -> CredentialHandle:
        barrier.wait()
        return location.require_credentials()

    with ThreadPoolExecutor(max_workers=4) as pool:
        seen = [future.result() for future in [pool.submit(read_credentials) for _ in range(4)]]

    assert all(handle is rotated for handle in seen)


class BlockingBackend:
    """Backend double that parks inside fetch_state until released."""

    def __init__(self) -> None:
        self.entered = threading.Event()
        self.release = threading.Event()

    def fetch_state(
        self,
        resource_ref: Any,
        credentials: CredentialHandle,
        options: RequestOptions,
    ) -> ResourceState:
        self.entered.set()
        self.release.wait(timeout=5)
        return ResourceState(exists=True, fingerprint="v1")


def test_backend_call_does_not_hold_location_lock() -> None:
    backend = BlockingBackend()
    location = _blob(backend, AccessCondition.if_exists())
    rotated = CredentialHandle.access_key("AKIAEXAMPLE", "rotated")

    with ThreadPoolExecutor(max_workers=2) as pool:
        in_flight = pool.submit(location.check_access_condition)
        try:
            assert backend.entered.wait(timeout=5)
            pool.submit(location.update_credentials, rotated).result(timeout=1)
            snapshot = pool.submit(location.snapshot).result(timeout=1)
        finally:
            backend.release.set()
        in_flight.result(timeout=5)

    assert snapshot.condition_checked is False
    assert location.condition_checked is True
    assert location.fingerprint == "v1"
    assert location.require_credentials() is rotated


def test_stream_location_only_accepts_none_condition() -> None:
    with pytest.raises(InvalidArgumentError):
        StreamLocation(
            StreamRef("upload"),
            CredentialHandle.attached_stream(io.BytesIO()),
            probe=FakeProbe(),
            access_condition=AccessCondition.if_exists(),
        )

    location = StreamLocation.attach(io.BytesIO(b"abc"), "upload", probe=FakeProbe())
    location.check_access_condition()
    assert location.condition_checked is True


def test_explicit_none_condition_is_normalized() -> None:
    location = _blob(FakeProbe(), AccessCondition.none())

    assert location.access_condition is None

