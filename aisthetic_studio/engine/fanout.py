# aisthetic_studio/engine/fanout.py
"""
Fan-out executor: dispatch every job of a batch concurrently.

Completions are merged into the BatchStore by job id in whatever order they
arrive. One job's failure never cancels or blocks its siblings; run() returns
only once every job is terminal (settle-all, not fail-fast).
"""

import asyncio
import logging
from collections.abc import Callable
from typing import Any

from aisthetic_studio.models.jobs import Job, JobError, JobStatus
from aisthetic_studio.models.store import BatchStore

from .callbacks import ProgressCallback, Synthesize, emit

logger = logging.getLogger(__name__)


async def settle_job(store: BatchStore, job_id: int, synthesize: Synthesize) -> Job:
    """
    Run one job to a terminal state and merge the outcome into the store.

    Any exception from synthesize becomes a JobError on that job. Cancellation
    propagates.

    Returns:
        The job's terminal value
    """
    job = store.apply(job_id, Job.started)
    logger.info(f"Job {job_id} dispatched: {job.title}", extra={"job_id": job_id})
    try:
        result = await synthesize(job)
    except asyncio.CancelledError:
        raise
    except Exception as e:
        error = JobError.from_exception(e)
        logger.warning(
            f"Job {job_id} failed ({error.kind.value}): {error.message}", extra={"job_id": job_id}
        )
        return store.apply(job_id, lambda current: current.failed(error))

    logger.info(
        f"Job {job_id} succeeded ({result.mime_type}, {len(result.data)} bytes)",
        extra={"job_id": job_id},
    )
    return store.apply(job_id, lambda current: current.succeeded(result))


class FanOutExecutor:
    """
    Concurrent batch dispatcher.

    Features:
        - All synthesis calls in flight at once (no throttling, no queue)
        - Keyed merges: each completion replaces only its own job
        - Progress callback per completion, completion callback exactly once
    """

    def __init__(
        self,
        on_progress: ProgressCallback | None = None,
        on_complete: Callable[[BatchStore], Any] | None = None,
    ) -> None:
        """
        Initialize the executor.

        Args:
            on_progress: Optional callback(job, completed, total) after each terminal transition
            on_complete: Optional callback(store) fired once all jobs are terminal
        """
        self._on_progress = on_progress
        self._on_complete = on_complete

    async def run(self, store: BatchStore, synthesize: Synthesize) -> BatchStore:
        """
        Dispatch every job in the batch and wait for all to settle.

        Args:
            store: Batch of pending jobs (membership fixed at plan time)
            synthesize: Per-job synthesis call

        Returns:
            The same store, every job terminal

        Raises:
            ValueError: If any job is not pending
        """
        not_pending = [job.id for job in store.jobs() if job.status != JobStatus.PENDING]
        if not_pending:
            raise ValueError(f"Fan-out requires pending jobs; not pending: {not_pending}")

        total = len(store)
        completed = 0
        logger.info(f"Fan-out dispatching {total} job(s)")

        async def run_one(job_id: int) -> None:
            nonlocal completed
            job = await settle_job(store, job_id, synthesize)
            completed += 1
            await emit(self._on_progress, job, completed, total)

        outcomes = await asyncio.gather(
            *(run_one(job.id) for job in store.jobs()), return_exceptions=True
        )
        for outcome in outcomes:
            if isinstance(outcome, asyncio.CancelledError):
                raise outcome
            if isinstance(outcome, Exception):
                # Job state is already terminal; only the progress callback can get here
                logger.error(f"Progress callback failed: {outcome}", exc_info=outcome)

        logger.info(
            f"Fan-out settled: {store.count(JobStatus.SUCCEEDED)} succeeded, "
            f"{store.count(JobStatus.FAILED)} failed"
        )
        await emit(self._on_complete, store)
        return store
