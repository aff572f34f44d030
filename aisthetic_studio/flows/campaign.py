# aisthetic_studio/flows/campaign.py
"""Campaign studio: one asset per platform, images synthesized one at a time."""

import logging
from collections.abc import Callable
from typing import Any

from aisthetic_studio.config.schema import BrandIdentity, StudioConfig
from aisthetic_studio.content.base import ContentService
from aisthetic_studio.engine import ProgressCallback, SequentialExecutor
from aisthetic_studio.models.ideas import PlanRequest
from aisthetic_studio.models.store import BatchStore
from aisthetic_studio.notifications import Notifier
from aisthetic_studio.planning import Planner, briefs_to_jobs
from aisthetic_studio.planning.prompts import product_shot_prompt

from .batch import Batch, PlannedCallback, image_synthesizer

logger = logging.getLogger(__name__)


async def campaign(
    client: ContentService,
    request: PlanRequest,
    config: StudioConfig | None = None,
    brand: BrandIdentity | None = None,
    notifier: Notifier | None = None,
    on_planned: PlannedCallback | None = None,
    on_status: Callable[[str], Any] | None = None,
    on_progress: ProgressCallback | None = None,
) -> Batch:
    """
    Plan captions and image prompts for the selected platforms, then render
    each platform's image in order.

    Captions are available as soon as the plan returns (job.caption), before
    any image exists.

    Raises:
        InputError: If the request or platform selection is invalid
        PlanningError: If the brief does not cover the selected platforms
    """
    config = config or StudioConfig()
    briefs = await Planner(client, config).plan_campaign(request, brand or config.brand)

    batch = Batch(
        name="campaign",
        store=BatchStore(briefs_to_jobs(briefs)),
        synthesize=image_synthesizer(client, [request.base_image], product_shot_prompt),
        description=request.description.strip(),
        theme=(request.theme or "").strip(),
    )
    if on_planned is not None:
        on_planned(batch.store)
    logger.info(f"campaign: planned {len(batch.store)} platform asset(s)")

    executor = SequentialExecutor(notifier=notifier, on_status=on_status)
    await executor.run_batch(batch.store, batch.synthesize, on_progress=on_progress)
    return batch
