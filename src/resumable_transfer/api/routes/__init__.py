"""Route modules public API."""

from resumable_transfer.api.routes.checkpoints import router as checkpoints_router
from resumable_transfer.api.routes.health import router as health_router

__all__ = ["checkpoints_router", "health_router"]
