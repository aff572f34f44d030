# aisthetic_studio/flows/copywriting.py
"""Copywriting helpers: descriptions, headlines, captions, video prompts, scripts, themes."""

import logging

from aisthetic_studio.config.schema import BrandIdentity, StudioConfig
from aisthetic_studio.content.base import ContentService
from aisthetic_studio.errors import InputError, SynthesisError
from aisthetic_studio.models.ideas import ImageData, SuggestedTheme
from aisthetic_studio.models.jobs import Job
from aisthetic_studio.planning import Planner, split_passages
from aisthetic_studio.planning.prompts import brand_context, load_prompt
from aisthetic_studio.validation import sanitize_description

logger = logging.getLogger(__name__)


def _language(config: StudioConfig | None) -> str:
    return (config or StudioConfig()).generation.copy_language


def job_image(job: Job) -> ImageData:
    """
    Use a finished job's result as an input image.

    Raises:
        InputError: If the job has no result yet
    """
    if job.result is None:
        raise InputError(f"Job {job.id} has no result to work from")
    return ImageData(data=job.result.data, mime_type=job.result.mime_type, name=f"job-{job.id}")


async def describe_product(
    client: ContentService, image: ImageData, config: StudioConfig | None = None
) -> str:
    """Short SEO-friendly product copy written from the image alone."""
    return await client.describe_image(
        image,
        "Describe this product.",
        load_prompt("describe_product", language=_language(config)),
    )


async def ad_headline(
    client: ContentService,
    image: ImageData,
    description: str,
    config: StudioConfig | None = None,
) -> str:
    """One hook of at most five words."""
    description = sanitize_description(description)
    headline = await client.generate_text(
        f'Description: "{description}"',
        load_prompt("ad_headline", language=_language(config)),
        images=[image],
    )
    return headline.strip().strip('"').strip()


async def social_caption(
    client: ContentService,
    image: ImageData,
    description: str,
    theme: str = "",
    config: StudioConfig | None = None,
) -> str:
    return await client.generate_text(
        f'Product Description: "{description}"\nPhoto Theme: "{theme}"',
        load_prompt("social_caption", language=_language(config)),
        images=[image],
    )


async def video_prompt(
    client: ContentService, image: ImageData, description: str, theme: str = ""
) -> str:
    """Image-to-video prompt: subject + action + background + camera movement."""
    return await client.generate_text(
        f'Product Description: "{description}"\nPhoto Theme: "{theme}"',
        load_prompt("video_prompt"),
        images=[image],
    )


async def ad_scripts(
    client: ContentService,
    description: str,
    selling_point: str,
    count: int = 1,
    brand: BrandIdentity | None = None,
    config: StudioConfig | None = None,
) -> list[str]:
    """
    Write voice-over script variations.

    Returns:
        One passage per variation (split on blank lines)

    Raises:
        InputError: If the description or selling point is blank
        SynthesisError: If the service returned no usable script
    """
    config = config or StudioConfig()
    description = sanitize_description(description)
    selling_point = sanitize_description(selling_point, max_length=1000, field="Selling point")
    if not 1 <= count <= 5:
        raise InputError("Script count must be between 1 and 5")

    lines = [f'Product Description: "{description}"', f'Unique Selling Point: "{selling_point}"']
    brand_text = brand_context(brand or config.brand)
    if brand_text:
        lines.append(brand_text)

    text = await client.generate_text(
        "\n".join(lines),
        load_prompt("ad_script", count=count, language=config.generation.copy_language),
    )
    passages = split_passages(text)
    if not passages:
        raise SynthesisError("Script generation returned no passages")
    if len(passages) != count:
        logger.warning(f"Asked for {count} script(s), got {len(passages)} passage(s)")
    return passages


async def suggest_themes(
    client: ContentService, category: str, config: StudioConfig | None = None
) -> list[SuggestedTheme]:
    """Trending photo themes for a product category (search-grounded)."""
    return await Planner(client, config).suggest_themes(category)
