# aisthetic_studio/engine/poller.py
"""
Long-running job poller for video synthesis.

Submitted -> Polling -> Succeeded | Failed. A finished operation only yields
a reference; the bytes are fetched in a separate retrieval step before the
job counts as succeeded.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from enum import Enum
from typing import Any

from aisthetic_studio.content.base import ContentService, VideoOperation
from aisthetic_studio.errors import (
    CredentialError,
    ErrorKind,
    PollingTimeout,
    SynthesisError,
    is_credential_failure,
)
from aisthetic_studio.models.ideas import ImageData
from aisthetic_studio.models.jobs import Job, JobResult

from .callbacks import Synthesize, emit

logger = logging.getLogger(__name__)


class PollPhase(Enum):
    SUBMITTED = "submitted"
    POLLING = "polling"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class VideoPoller:
    """
    Drives one video operation from submission to downloaded bytes.

    Pollers share no state, so several video jobs can run concurrently (e.g.
    through the fan-out executor via synthesizer()).
    """

    def __init__(
        self,
        client: ContentService,
        poll_interval: float = 10.0,
        max_polls: int | None = 60,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
        on_phase: Callable[[Job, PollPhase, int], Any] | None = None,
    ) -> None:
        """
        Initialize the poller.

        Args:
            client: Content service used for submit, poll and retrieve
            poll_interval: Seconds to wait before each status query
            max_polls: Status queries before PollingTimeout (None = unbounded)
            sleep: Awaitable sleep, replaceable in tests
            on_phase: Optional callback(job, phase, polls) on each phase change
        """
        self._client = client
        self._poll_interval = poll_interval
        self._max_polls = max_polls
        self._sleep = sleep
        self._on_phase = on_phase

    async def synthesize(self, job: Job, image: ImageData | None = None) -> JobResult:
        """
        Submit, poll until terminal, then retrieve the finished video.

        Raises:
            CredentialError: If the operation failed because the credential was rejected
            PollingTimeout: If max_polls queries passed without a terminal state
            SynthesisError: For any other operation failure
            RetrievalError: If the finished video could not be downloaded
        """
        polls = 0
        try:
            operation = await self._client.submit_video(job.prompt, image)
            logger.info(f"Video job {job.id} submitted")
            await emit(self._on_phase, job, PollPhase.SUBMITTED, polls)

            while not operation.done:
                if self._max_polls is not None and polls >= self._max_polls:
                    raise PollingTimeout(
                        f"Video not ready after {polls} polls "
                        f"({polls * self._poll_interval:.0f}s)"
                    )
                await self._sleep(self._poll_interval)
                operation = await self._client.poll_video(operation)
                polls += 1
                logger.info(f"Video job {job.id} poll {polls}: done={operation.done}")
                await emit(self._on_phase, job, PollPhase.POLLING, polls)

            uri = self._finished_uri(operation)
            result = await self._client.retrieve_video(uri)
        except asyncio.CancelledError:
            raise
        except Exception:
            await emit(self._on_phase, job, PollPhase.FAILED, polls)
            raise

        logger.info(f"Video job {job.id} retrieved after {polls} polls")
        await emit(self._on_phase, job, PollPhase.SUCCEEDED, polls)
        return result

    @staticmethod
    def _finished_uri(operation: VideoOperation) -> str:
        if operation.failure_kind:
            if is_credential_failure(None, operation.failure_kind):
                raise CredentialError(f"Video generation rejected the API key: {operation.failure_kind}")
            raise SynthesisError(f"Video generation failed: {operation.failure_kind}")
        if not operation.result_uri:
            raise SynthesisError("Video generation finished without a result", ErrorKind.NO_CONTENT)
        return operation.result_uri

    def synthesizer(self, image: ImageData | None = None) -> Synthesize:
        """Per-job synthesis function for the executors."""

        async def synthesize(job: Job) -> JobResult:
            return await self.synthesize(job, image)

        return synthesize
