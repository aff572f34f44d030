# aisthetic_studio/models/store.py
"""
Per-batch job state store.

Jobs are held in a dict keyed by id. The only way to change a job is
apply(job_id, transform): look up by id, derive the new value from the current
one, replace only that entry. Membership is fixed at construction.
"""

import logging
from collections.abc import Callable, Iterable, Iterator

from aisthetic_studio.models.jobs import Job, JobStatus

logger = logging.getLogger(__name__)

StoreListener = Callable[[Job], None]


class BatchStore:
    """
    Keyed job-state store for one batch.

    Owned by the caller that planned the batch; the engine holds no registry
    beyond the store passed to it.
    """

    def __init__(self, jobs: Iterable[Job]) -> None:
        """
        Initialize the store with the planned jobs.

        Args:
            jobs: Jobs decided at plan time, in display order

        Raises:
            ValueError: If two jobs share an id
        """
        self._jobs: dict[int, Job] = {}
        for job in jobs:
            if job.id in self._jobs:
                raise ValueError(f"Duplicate job id {job.id} in batch")
            self._jobs[job.id] = job
        self._listeners: list[StoreListener] = []
        logger.debug(f"Created BatchStore with {len(self._jobs)} jobs")

    def __len__(self) -> int:
        return len(self._jobs)

    def __iter__(self) -> Iterator[Job]:
        return iter(self.jobs())

    def __contains__(self, job_id: object) -> bool:
        return job_id in self._jobs

    def get(self, job_id: int) -> Job:
        """
        Get the current value of a job.

        Raises:
            KeyError: If job_id is not a member of this batch
        """
        try:
            return self._jobs[job_id]
        except KeyError:
            raise KeyError(f"Job {job_id} is not part of this batch") from None

    def jobs(self) -> list[Job]:
        """Ordered view for display (plan order)."""
        return list(self._jobs.values())

    def apply(self, job_id: int, transform: Callable[[Job], Job]) -> Job:
        """
        Replace one job with transform(current). All other entries are untouched.

        Args:
            job_id: Job to update
            transform: Pure function from the current job to its next value

        Returns:
            The new job value

        Raises:
            KeyError: If job_id is not a member of this batch
            ValueError: If transform changed the job's id
        """
        current = self.get(job_id)
        updated = transform(current)
        if updated.id != job_id:
            raise ValueError(f"Transform changed job id {job_id} -> {updated.id}")
        self._jobs[job_id] = updated
        logger.debug(
            f"Job {job_id}: {current.status.value} -> {updated.status.value}"
            f"{' (upscaling)' if updated.is_upscaling else ''}"
        )
        for listener in list(self._listeners):
            listener(updated)
        return updated

    def subscribe(self, listener: StoreListener) -> Callable[[], None]:
        """
        Register a callback invoked with each updated job.

        Returns:
            Function that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def count(self, status: JobStatus) -> int:
        return sum(1 for job in self._jobs.values() if job.status == status)

    def all_terminal(self) -> bool:
        return all(job.status.is_terminal for job in self._jobs.values())

    def succeeded(self) -> list[Job]:
        return [job for job in self._jobs.values() if job.status == JobStatus.SUCCEEDED]

    def failed(self) -> list[Job]:
        return [job for job in self._jobs.values() if job.status == JobStatus.FAILED]
