# aisthetic_studio/flows/video.py
"""Video: one long-running job per request, polled until the bytes are retrieved."""

from collections.abc import Callable
from typing import Any

from aisthetic_studio.config.schema import StudioConfig
from aisthetic_studio.content.base import ContentService
from aisthetic_studio.engine import FanOutExecutor, PollPhase, ProgressCallback, VideoPoller
from aisthetic_studio.models.ideas import ImageData
from aisthetic_studio.models.jobs import Job
from aisthetic_studio.models.store import BatchStore
from aisthetic_studio.validation import sanitize_description

from .batch import Batch, PlannedCallback


async def generate_video(
    client: ContentService,
    prompt: str,
    image: ImageData | None = None,
    config: StudioConfig | None = None,
    on_phase: Callable[[Job, PollPhase, int], Any] | None = None,
    on_planned: PlannedCallback | None = None,
    on_progress: ProgressCallback | None = None,
) -> Batch:
    """
    Submit a video job and drive it to a terminal state.

    The returned batch can be regenerated (a fresh submission) but not upscaled.
    """
    config = config or StudioConfig()
    prompt = sanitize_description(prompt, max_length=2000, field="Video prompt")
    poller = VideoPoller(
        client,
        poll_interval=config.video.poll_interval,
        max_polls=config.video.max_polls,
        on_phase=on_phase,
    )
    batch = Batch(
        name="video",
        store=BatchStore([Job(id=0, title="Video", prompt=prompt)]),
        synthesize=poller.synthesizer(image),
        upscalable=False,
    )
    if on_planned is not None:
        on_planned(batch.store)
    await FanOutExecutor(on_progress=on_progress).run(batch.store, batch.synthesize)
    return batch
