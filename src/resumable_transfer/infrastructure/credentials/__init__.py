"""Credential provider implementations."""

from resumable_transfer.infrastructure.credentials.static_credential_provider import (
    StaticCredentialProvider,
)

__all__ = ["StaticCredentialProvider"]
