# aisthetic_studio/config/schema.py
"""
Pydantic configuration models for aisthetic-studio.

All models use extra="ignore" to allow unknown YAML keys without crashing.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class GeminiConfig(BaseModel):
    """Content service (Google GenAI) configuration."""

    model_config = ConfigDict(extra="ignore")

    api_key: str | None = Field(
        default=None,
        description="API key (None = read GEMINI_API_KEY or API_KEY from the environment)",
    )
    text_model: str = Field(
        default="gemini-2.5-flash", description="Model for descriptions, plans and copy"
    )
    image_model: str = Field(
        default="gemini-2.5-flash-image", description="Model for image synthesis"
    )
    speech_model: str = Field(
        default="gemini-2.5-flash-preview-tts", description="Model for speech synthesis"
    )
    video_model: str = Field(
        default="veo-2.0-generate-001", description="Model for video synthesis"
    )
    timeout: int = Field(
        default=120, ge=1, description="Per-request timeout in seconds"
    )


class GenerationConfig(BaseModel):
    """Batch generation settings."""

    model_config = ConfigDict(extra="ignore")

    batch_size: int = Field(
        default=6, ge=1, le=12, description="Number of ideas planned per batch"
    )
    max_retries: int = Field(
        default=3, ge=1, le=10, description="Attempts per service call on transient errors"
    )
    copy_language: str = Field(
        default="Indonesian",
        description="Language for titles, captions, headlines and scripts (prompts stay English)",
    )


class VideoConfig(BaseModel):
    """Long-running video job polling."""

    model_config = ConfigDict(extra="ignore")

    poll_interval: float = Field(
        default=10.0, gt=0.0, description="Seconds between status polls"
    )
    max_polls: int | None = Field(
        default=60,
        ge=1,
        description="Poll attempts before giving up (None = poll until terminal)",
    )


class SpeechConfig(BaseModel):
    """Speech synthesis defaults."""

    model_config = ConfigDict(extra="ignore")

    default_voice: str = Field(default="Aoede", description="Prebuilt voice name")
    sample_rate: int = Field(
        default=24000, description="Sample rate of PCM audio returned by the service"
    )


class OutputConfig(BaseModel):
    """Output and file path configuration."""

    model_config = ConfigDict(extra="ignore")

    output_dir: str = Field(
        default="aisthetic-output",
        description="Directory for generated assets (relative to the working directory)",
    )
    verbosity: Literal["quiet", "normal", "verbose"] = Field(
        default="normal", description="Logging verbosity level"
    )


class BrandIdentity(BaseModel):
    """Persisted brand settings merged into campaign and script prompts."""

    model_config = ConfigDict(extra="ignore")

    primary_color: str = Field(default="#00B8C6")
    secondary_color: str = Field(default="#1e293b")
    voice: str = Field(default="", description="Brand tone of voice")
    primary_font: str = Field(default="")
    secondary_font: str = Field(default="")

    def is_configured(self) -> bool:
        """True when any free-text brand field has been filled in."""
        return bool(self.voice or self.primary_font or self.secondary_font)


class StudioConfig(BaseModel):
    """Root configuration for aisthetic-studio."""

    model_config = ConfigDict(extra="ignore")

    gemini: GeminiConfig = Field(default_factory=GeminiConfig)
    generation: GenerationConfig = Field(default_factory=GenerationConfig)
    video: VideoConfig = Field(default_factory=VideoConfig)
    speech: SpeechConfig = Field(default_factory=SpeechConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    brand: BrandIdentity = Field(default_factory=BrandIdentity)
