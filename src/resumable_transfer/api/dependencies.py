"""Dependency providers for FastAPI routes."""

from functools import lru_cache

from resumable_transfer.application.services import CheckpointInspectionService
from resumable_transfer.bootstrap import build_checkpoint_codec
from resumable_transfer.config import Settings


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return singleton settings."""

    return Settings()


@lru_cache(maxsize=1)
def get_inspection_service() -> CheckpointInspectionService:
    """Return singleton inspection service."""

    return CheckpointInspectionService(build_checkpoint_codec(get_settings()))


__all__ = ["get_inspection_service", "get_settings"]
