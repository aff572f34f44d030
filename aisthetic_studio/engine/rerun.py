# aisthetic_studio/engine/rerun.py
"""
Targeted re-run of one job after its batch has settled.

Regenerate sends the job back through running to a new terminal state.
Upscale keeps the job succeeded and flips the orthogonal is_upscaling flag
while the upgrade call is in flight. Either way only the named job changes.
"""

import asyncio
import logging

from aisthetic_studio.errors import CredentialError, InvalidJobStateError
from aisthetic_studio.models.jobs import Job, JobStatus
from aisthetic_studio.models.store import BatchStore
from aisthetic_studio.notifications import Notifier

from .callbacks import Synthesize
from .fanout import settle_job

logger = logging.getLogger(__name__)


class JobRerunner:
    """
    Re-runs single jobs in a settled batch.

    Example:
        rerunner = JobRerunner(store, notifier)
        await rerunner.upscale(2, upscale_fn)
    """

    def __init__(self, store: BatchStore, notifier: Notifier | None = None) -> None:
        self._store = store
        self._notifier = notifier or Notifier()

    def _require(self, job_id: int) -> Job:
        try:
            return self._store.get(job_id)
        except KeyError as e:
            raise InvalidJobStateError(str(e.args[0])) from None

    async def regenerate(self, job_id: int, synthesize: Synthesize) -> Job:
        """
        Run the job's synthesis step again with its original prompt.

        Allowed from either terminal state.

        Returns:
            The job's new terminal value

        Raises:
            InvalidJobStateError: If the job is unknown, not terminal, or upscaling
        """
        job = self._require(job_id)
        if not job.status.is_terminal:
            raise InvalidJobStateError(f"Job {job_id} is {job.status.value}; wait for it to finish")
        if job.is_upscaling:
            raise InvalidJobStateError(f"Job {job_id} is being upscaled")

        logger.info(f"Regenerating job {job_id}: {job.title}")
        return await settle_job(self._store, job_id, synthesize)

    async def upscale(self, job_id: int, upscale_fn: Synthesize) -> Job:
        """
        Upgrade a succeeded job's result in place.

        upscale_fn receives the current job (result included) and makes exactly
        one synthesis call. On failure the previous result is kept and the
        error goes to the notifier.

        Returns:
            The job after the attempt (always succeeded)

        Raises:
            InvalidJobStateError: If the job is unknown, not succeeded, or already upscaling
            CredentialError: If the credential was rejected (after restoring the job)
        """
        job = self._require(job_id)
        if job.status != JobStatus.SUCCEEDED:
            raise InvalidJobStateError(
                f"Job {job_id} is {job.status.value}; only finished results can be upscaled"
            )
        if job.is_upscaling:
            raise InvalidJobStateError(f"Job {job_id} is already being upscaled")

        job = self._store.apply(job_id, lambda current: current.upscaling(True))
        logger.info(f"Upscaling job {job_id}: {job.title}")
        try:
            result = await upscale_fn(job)
        except asyncio.CancelledError:
            self._store.apply(job_id, lambda current: current.upscaling(False))
            raise
        except CredentialError as e:
            self._store.apply(job_id, lambda current: current.upscaling(False))
            self._notifier.error(f"Upscale of '{job.title}' failed: {e}")
            raise
        except Exception as e:
            logger.warning(f"Upscale of job {job_id} failed: {e}")
            self._notifier.error(f"Upscale of '{job.title}' failed: {e}")
            return self._store.apply(job_id, lambda current: current.upscaling(False))

        updated = self._store.apply(job_id, lambda current: current.upscaled(result))
        self._notifier.success(f"'{job.title}' upscaled")
        return updated
