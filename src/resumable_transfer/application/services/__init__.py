"""Application services public API."""

from resumable_transfer.application.services.checkpoint_inspection import (
    CheckpointInspectionService,
)
from resumable_transfer.application.services.resume_coordinator import ResumeCoordinator

__all__ = ["CheckpointInspectionService", "ResumeCoordinator"]
