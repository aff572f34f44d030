# aisthetic_studio/config/__init__.py
"""Configuration system for aisthetic-studio."""

from .loader import get_config_path, load_config, resolve_api_key, save_config
from .schema import (
    BrandIdentity,
    GeminiConfig,
    GenerationConfig,
    OutputConfig,
    SpeechConfig,
    StudioConfig,
    VideoConfig,
)

__all__ = [
    "StudioConfig",
    "GeminiConfig",
    "GenerationConfig",
    "VideoConfig",
    "SpeechConfig",
    "OutputConfig",
    "BrandIdentity",
    "load_config",
    "save_config",
    "get_config_path",
    "resolve_api_key",
]
