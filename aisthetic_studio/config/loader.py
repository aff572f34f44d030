# aisthetic_studio/config/loader.py
"""
Configuration loading with auto-creation of defaults.

Uses platformdirs for cross-platform config directory management.
"""

import logging
import os
from pathlib import Path

import yaml
from platformdirs import user_config_path

from aisthetic_studio.errors import CredentialError

from .schema import StudioConfig

logger = logging.getLogger(__name__)

API_KEY_ENV_VARS = ("GEMINI_API_KEY", "API_KEY")


def get_config_path() -> Path:
    """Get path to config file, ensuring config directory exists."""
    config_dir = user_config_path("aisthetic-studio", ensure_exists=True)
    return config_dir / "config.yaml"


def load_config(path: Path | None = None) -> StudioConfig:
    """
    Load configuration from YAML file.

    If config file doesn't exist, creates it with defaults.
    Returns validated Pydantic model.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        default_config = StudioConfig()
        save_config(default_config, config_path)
        logger.info(f"Created default config at {config_path}")
        return default_config

    with config_path.open("r", encoding="utf-8") as f:
        config_data = yaml.safe_load(f) or {}

    config = StudioConfig(**config_data)
    logger.info(f"Loaded config from {config_path}")
    return config


def save_config(config: StudioConfig, path: Path | None = None) -> Path:
    """Write configuration back to YAML (brand settings, re-entered credentials)."""
    config_path = path or get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)
    with config_path.open("w", encoding="utf-8") as f:
        yaml.safe_dump(
            config.model_dump(mode="json"), f, default_flow_style=False, sort_keys=False
        )
    logger.debug(f"Saved config to {config_path}")
    return config_path


def resolve_api_key(config: StudioConfig) -> str:
    """
    Return the content service credential.

    Config value wins, then GEMINI_API_KEY, then API_KEY.

    Raises:
        CredentialError: If no credential is available
    """
    if config.gemini.api_key:
        return config.gemini.api_key
    for name in API_KEY_ENV_VARS:
        value = os.environ.get(name)
        if value:
            return value
    raise CredentialError(
        "No API key configured. Set gemini.api_key in the config file "
        "or the GEMINI_API_KEY environment variable."
    )
