"""Health check routes."""

from fastapi import APIRouter

from resumable_transfer.domain.checkpoint_models import CHECKPOINT_SCHEMA_VERSION

router = APIRouter(tags=["health"])


@router.get("/healthz")
async def healthz() -> dict[str, str | int]:
    """Liveness probe, including the checkpoint schema version written here."""

    return {"status": "ok", "checkpointSchemaVersion": CHECKPOINT_SCHEMA_VERSION}


__all__ = ["router"]
