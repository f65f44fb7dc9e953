"""Inspection service entrypoint."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from resumable_transfer import __version__
from resumable_transfer.api import api_router
from resumable_transfer.api.dependencies import get_inspection_service, get_settings
from resumable_transfer.bootstrap import configure_logging
from resumable_transfer.config import Settings
from resumable_transfer.domain.checkpoint_models import CHECKPOINT_SCHEMA_VERSION

logger = logging.getLogger(__name__)


@asynccontextmanager
async def _lifespan(_: FastAPI) -> AsyncIterator[None]:
    # Probe registry and codec are built once, before the first request.
    get_inspection_service()
    logger.info(
        "Checkpoint inspection ready (schema version %s).",
        CHECKPOINT_SCHEMA_VERSION,
    )
    yield


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the checkpoint inspection app."""

    resolved = settings or get_settings()
    app = FastAPI(
        title=resolved.app_name,
        version=__version__,
        lifespan=_lifespan,
    )
    app.include_router(api_router, prefix=resolved.api_prefix)
    return app


app = create_app()


def run() -> None:
    """Serve the inspection API with uvicorn."""

    settings = get_settings()
    configure_logging(settings)
    uvicorn.run(
        "resumable_transfer.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        reload=False,
    )


__all__ = ["app", "create_app", "run"]
