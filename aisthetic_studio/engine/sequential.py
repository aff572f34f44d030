# aisthetic_studio/engine/sequential.py
"""
Sequential executor: one item at a time, strict input order.

Used where the external call is rate-sensitive (multi-script speech) or where
incremental progress matters more than throughput (campaign assets).
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from aisthetic_studio.models.jobs import JobStatus
from aisthetic_studio.models.store import BatchStore
from aisthetic_studio.notifications import Notifier

from .callbacks import ProgressCallback, Synthesize, emit
from .fanout import settle_job

logger = logging.getLogger(__name__)

ItemT = TypeVar("ItemT")
ResultT = TypeVar("ResultT")


def progress_label(index: int, total: int) -> str:
    """Human-readable step label, 1-based."""
    return f"Processing {index}/{total}..."


class SequentialExecutor:
    """
    FIFO executor: item i+1 is never dispatched before item i completes.

    A failing item is reported to the notifier and processing moves on.
    """

    def __init__(
        self,
        notifier: Notifier | None = None,
        on_status: Callable[[str], Any] | None = None,
    ) -> None:
        """
        Initialize the executor.

        Args:
            notifier: Side-channel for per-item failure messages
            on_status: Optional callback(label) fired before each step
        """
        self._notifier = notifier or Notifier()
        self._on_status = on_status

    async def run(
        self,
        items: list[ItemT],
        synthesize: Callable[[ItemT], Awaitable[ResultT]],
        on_result: Callable[[int, ResultT], Any] | None = None,
    ) -> list[ResultT]:
        """
        Process payloads one at a time.

        Args:
            items: Ordered payloads (e.g. script passages)
            synthesize: Call producing one result per payload
            on_result: Optional callback(index, result) as each result lands

        Returns:
            Successful results in input order (failed items are skipped)
        """
        total = len(items)
        results: list[ResultT] = []
        for index, item in enumerate(items, start=1):
            label = progress_label(index, total)
            logger.info(label)
            await emit(self._on_status, label)
            try:
                result = await synthesize(item)
            except asyncio.CancelledError:
                raise
            except Exception as e:
                logger.warning(f"Item {index}/{total} failed: {e}")
                self._notifier.error(f"Item {index} of {total} failed: {e}")
                continue
            results.append(result)
            await emit(on_result, index - 1, result)

        logger.info(f"Sequential run finished: {len(results)}/{total} succeeded")
        return results

    async def run_batch(
        self,
        store: BatchStore,
        synthesize: Synthesize,
        on_progress: ProgressCallback | None = None,
    ) -> BatchStore:
        """
        Run a planned batch one job at a time with keyed merges.

        Raises:
            ValueError: If any job is not pending
        """
        not_pending = [job.id for job in store.jobs() if job.status != JobStatus.PENDING]
        if not_pending:
            raise ValueError(f"Sequential batch requires pending jobs; not pending: {not_pending}")

        total = len(store)
        for completed, job_id in enumerate([job.id for job in store.jobs()], start=1):
            label = progress_label(completed, total)
            logger.info(label)
            await emit(self._on_status, label)
            job = await settle_job(store, job_id, synthesize)
            if job.status == JobStatus.FAILED:
                self._notifier.error(f"{job.title}: {job.error.message}")
            await emit(on_progress, job, completed, total)

        return store
