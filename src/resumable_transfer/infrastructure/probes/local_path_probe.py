"""Filesystem probe backing local-path locations."""

from __future__ import annotations

import os
import stat

from resumable_transfer.domain.access_conditions import ResourceState
from resumable_transfer.domain.credentials import CredentialHandle
from resumable_transfer.domain.errors import UnreachableOrChangedError
from resumable_transfer.domain.locations import LocalPathRef
from resumable_transfer.domain.ports import ResourceProbe
from resumable_transfer.domain.request_options import RequestOptions


def local_fingerprint(st: os.stat_result) -> str:
    """ETag-style fingerprint from modification time and size."""

    return f'"{st.st_mtime_ns:x}-{st.st_size:x}"'


class LocalPathProbe(ResourceProbe):
    """Stat a local file and its parent directory."""

    def fetch_state(
        self,
        resource_ref: LocalPathRef,
        credentials: CredentialHandle,
        options: RequestOptions,
    ) -> ResourceState:
        _ = credentials, options
        path = resource_ref.as_path
        try:
            st = path.stat()
        except FileNotFoundError:
            return ResourceState(exists=False, parent_exists=path.parent.is_dir())
        except PermissionError as exc:
            raise UnreachableOrChangedError(f"Access denied to '{path}'.") from exc
        except OSError as exc:
            raise UnreachableOrChangedError(f"Cannot stat '{path}': {exc}") from exc

        if stat.S_ISDIR(st.st_mode):
            raise UnreachableOrChangedError(f"'{path}' is a directory, expected a file.")
        return ResourceState(exists=True, fingerprint=local_fingerprint(st))


__all__ = ["LocalPathProbe", "local_fingerprint"]
