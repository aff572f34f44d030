# aisthetic_studio/models/__init__.py
"""
Data models for aisthetic-studio.

Provides the job model, the per-batch state store and planner item schemas.
"""

from aisthetic_studio.models.ideas import (
    PLATFORM_LABELS,
    CampaignBrief,
    Idea,
    ImageData,
    PlanRequest,
    SuggestedTheme,
)
from aisthetic_studio.models.jobs import Job, JobError, JobResult, JobStatus
from aisthetic_studio.models.store import BatchStore

__all__ = [
    # Job tracking
    "Job",
    "JobStatus",
    "JobResult",
    "JobError",
    "BatchStore",
    # Planner items
    "Idea",
    "CampaignBrief",
    "SuggestedTheme",
    "ImageData",
    "PlanRequest",
    "PLATFORM_LABELS",
]
