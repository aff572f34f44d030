# aisthetic_studio/content/__init__.py
"""Content service integration: abstract contract, Gemini client and retry policy."""

from .base import ContentService, VideoOperation
from .factory import create_content_client
from .gemini import GeminiContentClient
from .retry import content_retry, is_retryable

__all__ = [
    "ContentService",
    "VideoOperation",
    "GeminiContentClient",
    "create_content_client",
    "content_retry",
    "is_retryable",
]
