# aisthetic_studio/flows/__init__.py
"""Feature flows: each wires the Planner and an executor for one studio feature."""

from .batch import Batch, image_synthesizer, upscale_synthesizer
from .campaign import campaign
from .copywriting import (
    ad_headline,
    ad_scripts,
    describe_product,
    job_image,
    social_caption,
    suggest_themes,
    video_prompt,
)
from .edits import change_background, fashion_pose, virtual_try_on
from .photography import ad_creatives, product_shots
from .video import generate_video
from .voice import SPEECH_STYLES, VOICES, VoiceClip, export_clips, synthesize_passages

__all__ = [
    "Batch",
    "image_synthesizer",
    "upscale_synthesizer",
    "product_shots",
    "ad_creatives",
    "campaign",
    "virtual_try_on",
    "fashion_pose",
    "change_background",
    "describe_product",
    "ad_headline",
    "social_caption",
    "video_prompt",
    "ad_scripts",
    "suggest_themes",
    "job_image",
    "synthesize_passages",
    "export_clips",
    "VoiceClip",
    "VOICES",
    "SPEECH_STYLES",
    "generate_video",
]
