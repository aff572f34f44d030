# aisthetic_studio/flows/edits.py
"""
Single-shot image edits: virtual try-on, fashion pose, background change.

Each edit is a one-job batch run through the fan-out executor, so the result
can be regenerated or upscaled like any planned job.
"""

from aisthetic_studio.content.base import ContentService
from aisthetic_studio.engine import FanOutExecutor, ProgressCallback
from aisthetic_studio.models.ideas import ImageData
from aisthetic_studio.models.jobs import Job
from aisthetic_studio.models.store import BatchStore
from aisthetic_studio.planning.prompts import (
    background_change_prompt,
    fashion_pose_prompt,
    virtual_try_on_prompt,
)
from aisthetic_studio.validation import sanitize_description

from .batch import Batch, PlannedCallback, image_synthesizer


async def _single(
    client: ContentService,
    name: str,
    title: str,
    prompt: str,
    references: list[ImageData],
    on_planned: PlannedCallback | None,
    on_progress: ProgressCallback | None,
) -> Batch:
    batch = Batch(
        name=name,
        store=BatchStore([Job(id=0, title=title, prompt=prompt)]),
        synthesize=image_synthesizer(client, references),
    )
    if on_planned is not None:
        on_planned(batch.store)
    await FanOutExecutor(on_progress=on_progress).run(batch.store, batch.synthesize)
    return batch


async def virtual_try_on(
    client: ContentService,
    product_image: ImageData,
    model_image: ImageData,
    on_planned: PlannedCallback | None = None,
    on_progress: ProgressCallback | None = None,
) -> Batch:
    """Put the product on (or in the hands of) the model."""
    return await _single(
        client,
        "tryon",
        "Virtual Try-On",
        virtual_try_on_prompt(),
        [product_image, model_image],
        on_planned,
        on_progress,
    )


async def fashion_pose(
    client: ContentService,
    model_image: ImageData,
    pose: str,
    on_planned: PlannedCallback | None = None,
    on_progress: ProgressCallback | None = None,
) -> Batch:
    """Re-pose the model without touching clothing or background."""
    pose = sanitize_description(pose, max_length=500, field="Pose")
    return await _single(
        client, "pose", pose, fashion_pose_prompt(pose), [model_image], on_planned, on_progress
    )


async def change_background(
    client: ContentService,
    image: ImageData,
    background: str,
    on_planned: PlannedCallback | None = None,
    on_progress: ProgressCallback | None = None,
) -> Batch:
    """Keep the subject, replace the background."""
    background = sanitize_description(background, max_length=500, field="Background")
    return await _single(
        client,
        "background",
        background,
        background_change_prompt(background),
        [image],
        on_planned,
        on_progress,
    )
