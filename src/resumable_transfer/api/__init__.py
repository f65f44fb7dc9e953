"""HTTP API."""

from resumable_transfer.api.router import api_router

__all__ = ["api_router"]
