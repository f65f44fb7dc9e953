"""Opaque credential handles swapped into locations at runtime."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import BinaryIO

from pydantic import SecretStr

from resumable_transfer.domain.errors import InvalidArgumentError


class CredentialScheme(StrEnum):
    """Kinds of authorization material a handle can carry."""

    ANONYMOUS = "anonymous"
    ACCESS_KEY = "access-key"
    SHARED_ACCESS_SIGNATURE = "shared-access-signature"
    BEARER_TOKEN = "bearer-token"
    LOCAL_IDENTITY = "local-identity"
    ATTACHED_STREAM = "attached-stream"


@dataclass(slots=True, frozen=True)
class CredentialHandle:
    """Authorization reference for one backend resource.

    Handles are never serialized into checkpoints. Secret members are kept as
    `SecretStr` so they do not leak through `repr` or logs.
    """

    scheme: CredentialScheme
    key_id: str | None = None
    secret: SecretStr | None = None
    session_token: SecretStr | None = None
    stream: BinaryIO | None = field(default=None, compare=False, repr=False)

    @classmethod
    def anonymous(cls) -> CredentialHandle:
        return cls(CredentialScheme.ANONYMOUS)

    @classmethod
    def access_key(
        cls,
        key_id: str,
        secret: str,
        session_token: str | None = None,
    ) -> CredentialHandle:
        if not key_id or not secret:
            raise InvalidArgumentError("Access-key credentials require key id and secret.")
        return cls(
            CredentialScheme.ACCESS_KEY,
            key_id=key_id,
            secret=SecretStr(secret),
            session_token=None if session_token is None else SecretStr(session_token),
        )

    @classmethod
    def shared_access_signature(cls, token: str) -> CredentialHandle:
        normalized = token.strip().lstrip("?")
        if not normalized:
            raise InvalidArgumentError("Shared access signature cannot be empty.")
        return cls(CredentialScheme.SHARED_ACCESS_SIGNATURE, secret=SecretStr(normalized))

    @classmethod
    def bearer_token(cls, token: str) -> CredentialHandle:
        if not token.strip():
            raise InvalidArgumentError("Bearer token cannot be empty.")
        return cls(CredentialScheme.BEARER_TOKEN, secret=SecretStr(token.strip()))

    @classmethod
    def local_identity(cls) -> CredentialHandle:
        return cls(CredentialScheme.LOCAL_IDENTITY)

    @classmethod
    def attached_stream(cls, stream: BinaryIO) -> CredentialHandle:
        if stream is None:
            raise InvalidArgumentError("Attached stream cannot be None.")
        return cls(CredentialScheme.ATTACHED_STREAM, stream=stream)

    def secret_value(self) -> str | None:
        """Reveal the primary secret for a backend client."""

        return None if self.secret is None else self.secret.get_secret_value()

    def session_token_value(self) -> str | None:
        return None if self.session_token is None else self.session_token.get_secret_value()


__all__ = ["CredentialHandle", "CredentialScheme"]
