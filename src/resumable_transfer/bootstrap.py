"""Application bootstrap/wiring."""

import logging

from resumable_transfer.application.services import ResumeCoordinator
from resumable_transfer.config import Settings
from resumable_transfer.domain.location_types import TransferLocationType
from resumable_transfer.domain.ports import CheckpointStore, CredentialProvider, ResourceProbe
from resumable_transfer.infrastructure.checkpoints import CheckpointCodec, InMemoryCheckpointStore
from resumable_transfer.infrastructure.credentials import StaticCredentialProvider
from resumable_transfer.infrastructure.probes import (
    AttachedStreamProbe,
    AzureFileProbe,
    HttpResourceProbe,
    LocalPathProbe,
    S3ObjectProbe,
)

logger = logging.getLogger(__name__)


def build_probe_registry(settings: Settings) -> dict[TransferLocationType, ResourceProbe]:
    """Map every location kind to its backend probe."""

    return {
        TransferLocationType.CLOUD_BLOB: S3ObjectProbe(
            default_region=settings.aws_region,
            endpoint_url=settings.s3_endpoint_url,
            max_pool_connections=settings.s3_max_pool_connections,
        ),
        TransferLocationType.CLOUD_FILE: AzureFileProbe(
            api_version=settings.azure_file_api_version,
            timeout_seconds=settings.http_probe_timeout_seconds,
        ),
        TransferLocationType.LOCAL_PATH: LocalPathProbe(),
        TransferLocationType.STREAM: AttachedStreamProbe(),
        TransferLocationType.SAS_URI: HttpResourceProbe(
            timeout_seconds=settings.http_probe_timeout_seconds,
        ),
    }


def build_checkpoint_codec(settings: Settings) -> CheckpointCodec:
    """Compose the codec with default probes."""

    return CheckpointCodec(build_probe_registry(settings))


def build_resume_coordinator(
    settings: Settings,
    credential_provider: CredentialProvider | None = None,
    checkpoint_store: CheckpointStore | None = None,
) -> ResumeCoordinator:
    """Compose the resume service graph."""

    if credential_provider is None:
        logger.warning(
            "No credential provider configured; resumed locations can only use "
            "credentials registered at runtime."
        )
        credential_provider = StaticCredentialProvider()
    if checkpoint_store is None:
        logger.info("Using in-memory checkpoint store; checkpoints do not survive restarts.")
        checkpoint_store = InMemoryCheckpointStore()

    return ResumeCoordinator(
        codec=build_checkpoint_codec(settings),
        credential_provider=credential_provider,
        checkpoint_store=checkpoint_store,
    )


def configure_logging(settings: Settings) -> None:
    """Install a basic root handler at the configured level."""

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


__all__ = [
    "build_checkpoint_codec",
    "build_probe_registry",
    "build_resume_coordinator",
    "configure_logging",
]
