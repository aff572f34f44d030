# aisthetic_studio/validation/__init__.py
"""Input validation and sanitization utilities."""

from .sanitize import load_image, parse_job_id, sanitize_description

__all__ = [
    "sanitize_description",
    "load_image",
    "parse_job_id",
]
