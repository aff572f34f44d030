# aisthetic_studio/engine/callbacks.py
"""Callback plumbing shared by the executors."""

from collections.abc import Awaitable, Callable
from typing import Any

from aisthetic_studio.models.jobs import Job, JobResult

# Per-job synthesis step: raises on failure, returns content on success
Synthesize = Callable[[Job], Awaitable[JobResult]]

# callback(job, completed, total); may be sync or async
ProgressCallback = Callable[[Job, int, int], Any]


async def emit(callback: Callable[..., Any] | None, *args: Any) -> None:
    """Invoke a sync or async callback."""
    if callback is None:
        return
    result_or_coro = callback(*args)
    if hasattr(result_or_coro, "__await__"):
        await result_or_coro
