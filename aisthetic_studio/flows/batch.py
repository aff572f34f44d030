# aisthetic_studio/flows/batch.py
"""
A planned batch together with the synthesis step that produced it.

Keeping the step next to the store is what lets a later regenerate or
upscale of one job reuse exactly the same references and prompt builder.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from aisthetic_studio.content.base import ContentService
from aisthetic_studio.engine import JobRerunner, Synthesize
from aisthetic_studio.errors import InvalidJobStateError
from aisthetic_studio.models.ideas import ImageData
from aisthetic_studio.models.jobs import Job, JobResult
from aisthetic_studio.models.store import BatchStore
from aisthetic_studio.notifications import Notifier
from aisthetic_studio.planning.prompts import upscale_prompt

# callback(store) once the plan exists, before any synthesis call
PlannedCallback = Callable[[BatchStore], Any]


def image_synthesizer(
    client: ContentService,
    references: list[ImageData],
    build_prompt: Callable[[str], str] | None = None,
) -> Synthesize:
    """
    Per-job image synthesis with fixed reference images.

    Args:
        client: Content service
        references: 1-2 reference images sent with every job
        build_prompt: Turns the planned prompt into the final synthesis prompt
    """

    async def synthesize(job: Job) -> JobResult:
        prompt = build_prompt(job.prompt) if build_prompt else job.prompt
        return await client.synthesize_image(prompt, references)

    return synthesize


def upscale_synthesizer(client: ContentService) -> Synthesize:
    """Re-submit a job's current result with a fidelity instruction and its original prompt."""

    async def upscale(job: Job) -> JobResult:
        source = ImageData(data=job.result.data, mime_type=job.result.mime_type, name=f"job-{job.id}")
        return await client.synthesize_image(upscale_prompt(job.prompt), [source])

    return upscale


@dataclass
class Batch:
    """
    Attributes:
        name: Feature name, used as the output file prefix
        store: Job states
        synthesize: The per-job step used for the initial run and regenerate
        upscalable: Whether results are images that can be upscaled
        description: Product description the batch was planned from
        theme: Theme the batch was planned with
    """

    name: str
    store: BatchStore
    synthesize: Synthesize
    upscalable: bool = True
    description: str = ""
    theme: str = ""

    async def regenerate(self, job_id: int, notifier: Notifier | None = None) -> Job:
        job = await JobRerunner(self.store, notifier).regenerate(job_id, self.synthesize)
        if notifier is not None:
            if job.error:
                notifier.error(f"'{job.title}' failed again: {job.error.message}")
            else:
                notifier.success(f"'{job.title}' regenerated")
        return job

    async def upscale(
        self, job_id: int, client: ContentService, notifier: Notifier | None = None
    ) -> Job:
        """
        Raises:
            InvalidJobStateError: If this batch's results can't be upscaled
        """
        if not self.upscalable:
            raise InvalidJobStateError(f"{self.name} results cannot be upscaled")
        return await JobRerunner(self.store, notifier).upscale(job_id, upscale_synthesizer(client))
