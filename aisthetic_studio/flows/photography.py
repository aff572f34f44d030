# aisthetic_studio/flows/photography.py
"""Product photography and ad creatives: plan a batch of ideas, then fan out."""

import logging

from aisthetic_studio.config.schema import StudioConfig
from aisthetic_studio.content.base import ContentService
from aisthetic_studio.engine import FanOutExecutor, ProgressCallback
from aisthetic_studio.models.ideas import PlanRequest
from aisthetic_studio.models.store import BatchStore
from aisthetic_studio.planning import Planner, ideas_to_jobs
from aisthetic_studio.planning.prompts import ad_creative_prompt, product_shot_prompt

from .batch import Batch, PlannedCallback, image_synthesizer

logger = logging.getLogger(__name__)


async def product_shots(
    client: ContentService,
    request: PlanRequest,
    config: StudioConfig | None = None,
    on_planned: PlannedCallback | None = None,
    on_progress: ProgressCallback | None = None,
) -> Batch:
    """
    Plan product shots and synthesize every shot concurrently.

    The base image (and the model image, when given) is sent with each shot.

    Args:
        client: Content service
        request: Base image, description, optional model image and theme
        config: StudioConfig (batch size, language)
        on_planned: Optional callback(store) once the plan exists, before dispatch
        on_progress: Optional callback(job, completed, total) per settled job

    Raises:
        InputError: If the request is incomplete
        PlanningError: If planning failed (no job is created)
    """
    ideas = await Planner(client, config).plan_product_shots(request)
    references = [request.base_image]
    if request.secondary_image is not None:
        references.append(request.secondary_image)

    batch = Batch(
        name="shots",
        store=BatchStore(ideas_to_jobs(ideas)),
        synthesize=image_synthesizer(client, references, product_shot_prompt),
        description=request.description.strip(),
        theme=(request.theme or "").strip(),
    )
    return await _fan_out(batch, on_planned, on_progress)


async def ad_creatives(
    client: ContentService,
    request: PlanRequest,
    config: StudioConfig | None = None,
    on_planned: PlannedCallback | None = None,
    on_progress: ProgressCallback | None = None,
) -> Batch:
    """Plan ad variations and render headline + key phrase onto the base image."""
    ideas = await Planner(client, config).plan_ad_variations(request)
    headline = request.headline.strip()
    description = request.description.strip()

    batch = Batch(
        name="ads",
        store=BatchStore(ideas_to_jobs(ideas)),
        synthesize=image_synthesizer(
            client,
            [request.base_image],
            lambda prompt: ad_creative_prompt(prompt, headline, description),
        ),
        description=description,
        theme=(request.theme or "").strip(),
    )
    return await _fan_out(batch, on_planned, on_progress)


async def _fan_out(
    batch: Batch, on_planned: PlannedCallback | None, on_progress: ProgressCallback | None
) -> Batch:
    if on_planned is not None:
        on_planned(batch.store)
    logger.info(f"{batch.name}: planned {len(batch.store)} job(s)")
    await FanOutExecutor(on_progress=on_progress).run(batch.store, batch.synthesize)
    return batch
