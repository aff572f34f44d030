# tests/unit/test_sequential.py
"""Tests for SequentialExecutor: FIFO order, progress labels, failure isolation."""

import asyncio

import pytest

from aisthetic_studio.engine import SequentialExecutor
from aisthetic_studio.errors import ErrorKind, SynthesisError
from aisthetic_studio.models.jobs import Job, JobResult, JobStatus
from aisthetic_studio.models.store import BatchStore
from aisthetic_studio.notifications import Level, Notifier


@pytest.mark.asyncio
async def test_items_run_strictly_in_order():
    """Item i+1 starts only after item i has finished."""
    events = []

    async def synthesize(item: str) -> str:
        events.append(("start", item))
        await asyncio.sleep(0.01 if item == "a" else 0)
        events.append(("end", item))
        return item.upper()

    results = await SequentialExecutor().run(["a", "b", "c"], synthesize)

    assert results == ["A", "B", "C"]
    assert events == [
        ("start", "a"), ("end", "a"),
        ("start", "b"), ("end", "b"),
        ("start", "c"), ("end", "c"),
    ]


@pytest.mark.asyncio
async def test_progress_label_precedes_each_step():
    log = []

    async def synthesize(item: str) -> str:
        log.append(f"run {item}")
        return item

    await SequentialExecutor(on_status=log.append).run(["x", "y"], synthesize)
    assert log == ["Processing 1/2...", "run x", "Processing 2/2...", "run y"]


@pytest.mark.asyncio
async def test_async_status_callback():
    labels = []

    async def on_status(label):
        labels.append(label)

    async def synthesize(item):
        return item

    await SequentialExecutor(on_status=on_status).run([1, 2, 3], synthesize)
    assert labels[-1] == "Processing 3/3..."


@pytest.mark.asyncio
async def test_failure_is_reported_and_processing_continues():
    notifier = Notifier()

    async def synthesize(item: str) -> str:
        if item == "bad":
            raise SynthesisError("No audio data in response", ErrorKind.NO_CONTENT)
        return item

    results = await SequentialExecutor(notifier=notifier).run(["one", "bad", "three"], synthesize)

    assert results == ["one", "three"]
    errors = [n for n in notifier.history if n.level == Level.ERROR]
    assert len(errors) == 1
    assert "Item 2 of 3" in errors[0].message


@pytest.mark.asyncio
async def test_results_are_visible_incrementally():
    """on_result fires as each result lands, before the next item starts."""
    timeline = []

    async def synthesize(item: int) -> int:
        timeline.append(f"synth {item}")
        return item * 10

    def on_result(index, result):
        timeline.append(f"result {index}={result}")

    await SequentialExecutor().run([1, 2], synthesize, on_result=on_result)
    assert timeline == ["synth 1", "result 0=10", "synth 2", "result 1=20"]


@pytest.mark.asyncio
async def test_empty_input():
    async def synthesize(item):
        raise AssertionError("never called")

    assert await SequentialExecutor().run([], synthesize) == []


class TestRunBatch:
    @pytest.mark.asyncio
    async def test_keyed_merges_one_job_at_a_time(self):
        store = BatchStore(Job(id=i, title=f"Asset {i}", prompt=f"p{i}") for i in range(3))
        running_seen = []

        async def synthesize(job: Job) -> JobResult:
            running_seen.append([j.status for j in store.jobs()])
            if job.id == 1:
                raise SynthesisError("blocked", ErrorKind.SAFETY_BLOCK)
            return JobResult(job.prompt.encode(), "image/png")

        notifier = Notifier()
        await SequentialExecutor(notifier=notifier).run_batch(store, synthesize)

        assert running_seen[0] == [JobStatus.RUNNING, JobStatus.PENDING, JobStatus.PENDING]
        assert running_seen[2] == [JobStatus.SUCCEEDED, JobStatus.FAILED, JobStatus.RUNNING]
        assert store.get(1).error.kind == ErrorKind.SAFETY_BLOCK
        assert store.get(2).result.data == b"p2"
        assert any("Asset 1" in n.message for n in notifier.history)

    @pytest.mark.asyncio
    async def test_progress_callback(self):
        store = BatchStore([Job(id=0, title="A", prompt="a"), Job(id=1, title="B", prompt="b")])
        progress = []

        async def synthesize(job):
            return JobResult(b"x", "image/png")

        await SequentialExecutor().run_batch(
            store, synthesize, on_progress=lambda job, done, total: progress.append((job.id, done, total))
        )
        assert progress == [(0, 1, 2), (1, 2, 2)]
