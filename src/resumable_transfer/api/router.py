"""Top-level API router composition."""

from fastapi import APIRouter

from resumable_transfer.api.routes import checkpoints_router, health_router

api_router = APIRouter()
api_router.include_router(health_router)
api_router.include_router(checkpoints_router)

__all__ = ["api_router"]
