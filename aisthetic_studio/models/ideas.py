# aisthetic_studio/models/ideas.py
"""
Pydantic models for planner output and request inputs.

Plan items are validated strictly: the content service is asked for a typed
array, and anything that does not match these models aborts the batch.
"""

from dataclasses import dataclass, field
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

Platform = Literal["instagram_post", "instagram_story", "facebook_ad"]

PLATFORM_LABELS: dict[str, str] = {
    "instagram_post": "Instagram Post",
    "instagram_story": "Instagram Story",
    "facebook_ad": "Facebook Ad",
}

PLATFORM_ASPECTS: dict[str, str] = {
    "instagram_post": "1:1 square",
    "instagram_story": "9:16 vertical",
    "facebook_ad": "1.91:1 landscape",
}


class Idea(BaseModel):
    """One planned job: a short title and a detailed synthesis prompt."""

    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    title: str = Field(min_length=1, description="Short human-readable label")
    prompt: str = Field(min_length=1, description="Detailed English prompt for image synthesis")


class CampaignBrief(BaseModel):
    """One planned campaign asset for a single platform."""

    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    platform: Platform = Field(description="Target platform id")
    caption: str = Field(min_length=1, description="Social caption for the asset")
    image_prompt: str = Field(min_length=1, description="Prompt for the asset image")


class SuggestedTheme(BaseModel):
    """A trending photography theme for a product category."""

    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    title: str = Field(min_length=1)
    description: str = Field(min_length=1)


@dataclass(frozen=True)
class ImageData:
    """Pre-normalized image bytes supplied by the upload collaborator."""

    data: bytes
    mime_type: str
    name: str = "image"

    def __repr__(self) -> str:
        return f"ImageData(name={self.name!r}, mime_type={self.mime_type!r}, size={len(self.data)})"


@dataclass(frozen=True)
class PlanRequest:
    """
    User inputs for one planning call.

    Attributes:
        base_image: Required product/ad image
        description: Required free-text description
        secondary_image: Optional model/reference image
        theme: Optional theme or brief
        headline: Optional headline (ad variations)
        platforms: Selected platforms (campaign flow)
    """

    base_image: ImageData
    description: str
    secondary_image: ImageData | None = None
    theme: str | None = None
    headline: str | None = None
    platforms: tuple[str, ...] = field(default_factory=tuple)
