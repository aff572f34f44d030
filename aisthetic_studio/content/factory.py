# aisthetic_studio/content/factory.py
"""Factory for creating the configured content service client."""

from aisthetic_studio.config.loader import resolve_api_key
from aisthetic_studio.config.schema import StudioConfig

from .gemini import GeminiContentClient


def create_content_client(config: StudioConfig, api_key: str | None = None) -> GeminiContentClient:
    """
    Create the content service client from config.

    Args:
        config: Root StudioConfig
        api_key: Explicit credential (e.g. freshly re-entered); defaults to config/env

    Returns:
        GeminiContentClient

    Raises:
        CredentialError: If no credential is available
    """
    return GeminiContentClient(
        api_key=api_key or resolve_api_key(config),
        text_model=config.gemini.text_model,
        image_model=config.gemini.image_model,
        speech_model=config.gemini.speech_model,
        video_model=config.gemini.video_model,
        timeout=config.gemini.timeout,
        max_retries=config.generation.max_retries,
    )
