# aisthetic_studio/planning/__init__.py
"""Planning: one structured ideation call per batch."""

from .parsing import extract_json, split_passages
from .planner import Planner, briefs_to_jobs, ideas_to_jobs, validate_request

__all__ = [
    "Planner",
    "ideas_to_jobs",
    "briefs_to_jobs",
    "validate_request",
    "extract_json",
    "split_passages",
]
