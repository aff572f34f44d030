# aisthetic_studio/planning/planner.py
"""
Planner: turn one user request into an ordered list of job specs.

One structured call to the content service per batch. The reply must be a
typed array with an exact count; anything else raises PlanningError and no
job is created.
"""

import logging
from typing import TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError

from aisthetic_studio.config.schema import BrandIdentity, StudioConfig
from aisthetic_studio.content.base import ContentService
from aisthetic_studio.errors import InputError, PlanningError
from aisthetic_studio.models.ideas import (
    PLATFORM_ASPECTS,
    PLATFORM_LABELS,
    CampaignBrief,
    Idea,
    ImageData,
    PlanRequest,
    SuggestedTheme,
)
from aisthetic_studio.models.jobs import Job

from .parsing import extract_json
from .prompts import brand_context, load_prompt

logger = logging.getLogger(__name__)

ItemT = TypeVar("ItemT", bound=BaseModel)

IDEA_SCHEMA = {
    "type": "ARRAY",
    "items": {
        "type": "OBJECT",
        "properties": {"title": {"type": "STRING"}, "prompt": {"type": "STRING"}},
        "required": ["title", "prompt"],
    },
}

CAMPAIGN_SCHEMA = {
    "type": "ARRAY",
    "items": {
        "type": "OBJECT",
        "properties": {
            "platform": {"type": "STRING", "enum": list(PLATFORM_LABELS)},
            "caption": {"type": "STRING"},
            "image_prompt": {"type": "STRING"},
        },
        "required": ["platform", "caption", "image_prompt"],
    },
}


def validate_request(request: PlanRequest) -> None:
    """
    Check the inputs every plan needs.

    Raises:
        InputError: If the base image is missing/empty or the description is blank
    """
    if request.base_image is None or not request.base_image.data:
        raise InputError("A base image is required")
    if not request.description or not request.description.strip():
        raise InputError("A description is required")


def ideas_to_jobs(ideas: list[Idea]) -> list[Job]:
    """Pending jobs in plan order, ids are ordinals."""
    return [Job(id=index, title=idea.title, prompt=idea.prompt) for index, idea in enumerate(ideas)]


def briefs_to_jobs(briefs: list[CampaignBrief]) -> list[Job]:
    """Pending campaign jobs; the caption rides along on the job."""
    return [
        Job(
            id=index,
            title=PLATFORM_LABELS[brief.platform],
            prompt=brief.image_prompt,
            caption=brief.caption,
        )
        for index, brief in enumerate(briefs)
    ]


class Planner:
    """
    Plans batches of ideas for the studio features.

    Example:
        planner = Planner(client, config)
        ideas = await planner.plan_product_shots(request)
        store = BatchStore(ideas_to_jobs(ideas))
    """

    def __init__(self, client: ContentService, config: StudioConfig | None = None) -> None:
        """
        Initialize the planner.

        Args:
            client: Content service used for the single ideation call
            config: StudioConfig for batch size and copy language
        """
        self._client = client
        self._config = config or StudioConfig()

    @property
    def batch_size(self) -> int:
        return self._config.generation.batch_size

    @property
    def language(self) -> str:
        return self._config.generation.copy_language

    async def _request_plan(
        self,
        model: type[ItemT],
        expected: int,
        text: str,
        system_instruction: str,
        images: list[ImageData],
        response_schema: dict,
    ) -> list[ItemT]:
        """Make the structured call and validate the reply strictly."""
        try:
            raw = await self._client.plan_ideas(
                text=text,
                system_instruction=system_instruction,
                images=images,
                response_schema=response_schema,
            )
        except Exception as e:
            logger.error(f"Planning call failed: {e}")
            raise PlanningError(f"Planning call failed: {e}") from e

        return self._parse_items(raw, model, expected)

    @staticmethod
    def _parse_items(raw: str, model: type[ItemT], expected: int | None) -> list[ItemT]:
        try:
            data = extract_json(raw)
        except ValueError as e:
            raise PlanningError(f"Planner returned malformed data: {e}") from e

        if not isinstance(data, list):
            raise PlanningError(f"Planner returned {type(data).__name__}, expected a JSON array")

        try:
            items = TypeAdapter(list[model]).validate_python(data)
        except ValidationError as e:
            raise PlanningError(
                f"Planner returned incomplete items: {e.error_count()} validation error(s)"
            ) from e

        if expected is not None and len(items) != expected:
            raise PlanningError(f"Planner returned {len(items)} items, expected {expected}")

        logger.info(f"Planned {len(items)} {model.__name__} item(s)")
        return items

    async def plan_product_shots(self, request: PlanRequest) -> list[Idea]:
        """Plan product photo shots (optional model image and theme)."""
        validate_request(request)
        query = f'Analyze this product. Product Description: "{request.description.strip()}"'
        if request.theme:
            query += f'\nPhoto Theme: "{request.theme.strip()}"'
        images = [request.base_image]
        if request.secondary_image is not None:
            images.append(request.secondary_image)

        return await self._request_plan(
            Idea,
            self.batch_size,
            query,
            load_prompt("product_shots", count=self.batch_size, language=self.language),
            images,
            IDEA_SCHEMA,
        )

    async def plan_ad_variations(self, request: PlanRequest) -> list[Idea]:
        """Plan ad creatives that place the headline onto the base image."""
        validate_request(request)
        if not request.headline or not request.headline.strip():
            raise InputError("A headline is required for ad variations")
        query = f'Headline: "{request.headline.strip()}"\nDescription: "{request.description.strip()}"'
        if request.theme:
            query += f'\nAd Theme: "{request.theme.strip()}"'

        return await self._request_plan(
            Idea,
            self.batch_size,
            query,
            load_prompt("ad_variations", count=self.batch_size, language=self.language),
            [request.base_image],
            IDEA_SCHEMA,
        )

    async def plan_campaign(
        self, request: PlanRequest, brand: BrandIdentity | None = None
    ) -> list[CampaignBrief]:
        """
        Plan one campaign asset per selected platform.

        Returned briefs follow the order of request.platforms.

        Raises:
            InputError: If no platform or an unknown platform was selected
            PlanningError: If the reply does not cover exactly the selected platforms
        """
        validate_request(request)
        platforms = list(dict.fromkeys(request.platforms))
        if not platforms:
            raise InputError("Select at least one platform")
        unknown = [p for p in platforms if p not in PLATFORM_LABELS]
        if unknown:
            raise InputError(f"Unknown platform(s): {', '.join(unknown)}")

        lines = [f'Product Description: "{request.description.strip()}"', "Platforms:"]
        lines += [f"- {p} ({PLATFORM_LABELS[p]}, {PLATFORM_ASPECTS[p]})" for p in platforms]
        if request.theme:
            lines.append(f'Campaign Theme: "{request.theme.strip()}"')
        brand_text = brand_context(brand or self._config.brand)
        if brand_text:
            lines.append(brand_text)

        briefs = await self._request_plan(
            CampaignBrief,
            len(platforms),
            "\n".join(lines),
            load_prompt("campaign_brief", language=self.language),
            [request.base_image],
            CAMPAIGN_SCHEMA,
        )

        by_platform = {brief.platform: brief for brief in briefs}
        if set(by_platform) != set(platforms):
            raise PlanningError(
                f"Planner covered platforms {sorted(by_platform)}, expected {sorted(platforms)}"
            )
        return [by_platform[p] for p in platforms]

    async def suggest_themes(self, category: str, count: int = 5) -> list[SuggestedTheme]:
        """
        Suggest trending photo themes for a product category (search-grounded).

        Raises:
            InputError: If the category is blank
            PlanningError: If the reply has no usable themes
        """
        if not category.strip():
            raise InputError("A product category is required")
        try:
            raw = await self._client.generate_text(
                text=(
                    "Based on current visual trends for e-commerce, suggest "
                    f'{count} creative and distinct photography themes for the product category: "{category.strip()}".'
                ),
                system_instruction=load_prompt("suggest_themes", count=count),
                use_search=True,
            )
        except Exception as e:
            raise PlanningError(f"Theme suggestion failed: {e}") from e

        themes = self._parse_items(raw, SuggestedTheme, None)
        if not themes:
            raise PlanningError("Theme suggestion returned no themes")
        return themes
