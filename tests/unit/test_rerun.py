# tests/unit/test_rerun.py
"""Tests for JobRerunner: regenerate and upscale of a single job."""

import pytest

from aisthetic_studio.engine import JobRerunner
from aisthetic_studio.errors import (
    CredentialError,
    ErrorKind,
    InvalidJobStateError,
    SynthesisError,
)
from aisthetic_studio.models.jobs import Job, JobError, JobResult, JobStatus
from aisthetic_studio.models.store import BatchStore
from aisthetic_studio.notifications import Level, Notifier


@pytest.fixture
def store() -> BatchStore:
    """Settled batch: 0 and 2 succeeded, 1 failed."""
    store = BatchStore(Job(id=i, title=f"Shot {i}", prompt=f"prompt {i}") for i in range(3))
    for job_id in (0, 2):
        store.apply(
            job_id,
            lambda job: job.started().succeeded(JobResult(f"v1-{job.id}".encode(), "image/png")),
        )
    store.apply(1, lambda job: job.started().failed(JobError("blocked", ErrorKind.SAFETY_BLOCK)))
    return store


@pytest.fixture
def notifier() -> Notifier:
    return Notifier()


class TestUpscale:
    @pytest.mark.asyncio
    async def test_upscale_replaces_result_in_place(self, store, notifier):
        """Same id/title/prompt, new result, flag back to false, siblings untouched."""
        siblings = {1: store.get(1), 2: store.get(2)}
        calls = []

        async def upscale_fn(job: Job) -> JobResult:
            calls.append(job)
            return JobResult(b"hd", "image/png")

        job = await JobRerunner(store, notifier).upscale(0, upscale_fn)

        assert (job.id, job.title, job.prompt) == (0, "Shot 0", "prompt 0")
        assert job.status == JobStatus.SUCCEEDED
        assert job.result.data == b"hd"
        assert job.is_upscaling is False
        assert len(calls) == 1
        assert calls[0].result.data == b"v1-0"
        for job_id, sibling in siblings.items():
            assert store.get(job_id) is sibling
        assert notifier.history[-1].level == Level.SUCCESS

    @pytest.mark.asyncio
    async def test_flag_set_while_in_flight(self, store):
        observed = []

        async def upscale_fn(job: Job) -> JobResult:
            current = store.get(job.id)
            observed.append((current.status, current.is_upscaling, current.result.data))
            return JobResult(b"hd", "image/png")

        await JobRerunner(store).upscale(2, upscale_fn)
        assert observed == [(JobStatus.SUCCEEDED, True, b"v1-2")]

    @pytest.mark.asyncio
    async def test_failure_keeps_previous_result(self, store, notifier):
        async def upscale_fn(job: Job) -> JobResult:
            raise SynthesisError("No image data in response", ErrorKind.NO_CONTENT)

        job = await JobRerunner(store, notifier).upscale(0, upscale_fn)

        assert job.status == JobStatus.SUCCEEDED
        assert job.result.data == b"v1-0"
        assert job.is_upscaling is False
        assert notifier.history[-1].level == Level.ERROR
        assert "Shot 0" in notifier.history[-1].message

    @pytest.mark.asyncio
    async def test_credential_failure_is_raised_after_restoring(self, store, notifier):
        async def upscale_fn(job: Job) -> JobResult:
            raise CredentialError("API key rejected")

        with pytest.raises(CredentialError):
            await JobRerunner(store, notifier).upscale(0, upscale_fn)

        job = store.get(0)
        assert job.is_upscaling is False
        assert job.result.data == b"v1-0"

    @pytest.mark.asyncio
    async def test_requires_succeeded_job(self, store):
        async def upscale_fn(job):
            raise AssertionError("must not be called")

        with pytest.raises(InvalidJobStateError, match="only finished"):
            await JobRerunner(store).upscale(1, upscale_fn)

    @pytest.mark.asyncio
    async def test_rejects_concurrent_upscale(self, store):
        store.apply(0, lambda job: job.upscaling(True))

        async def upscale_fn(job):
            raise AssertionError("must not be called")

        with pytest.raises(InvalidJobStateError, match="already"):
            await JobRerunner(store).upscale(0, upscale_fn)

    @pytest.mark.asyncio
    async def test_unknown_job(self, store):
        async def upscale_fn(job):
            raise AssertionError("must not be called")

        with pytest.raises(InvalidJobStateError):
            await JobRerunner(store).upscale(42, upscale_fn)


class TestRegenerate:
    @pytest.mark.asyncio
    async def test_failed_job_can_be_regenerated(self, store):
        seen = []

        async def synthesize(job: Job) -> JobResult:
            seen.append(store.get(job.id).status)
            return JobResult(b"retry", "image/png")

        job = await JobRerunner(store).regenerate(1, synthesize)

        assert seen == [JobStatus.RUNNING]
        assert job.status == JobStatus.SUCCEEDED
        assert job.error is None
        assert (job.title, job.prompt) == ("Shot 1", "prompt 1")

    @pytest.mark.asyncio
    async def test_succeeded_job_can_be_regenerated(self, store):
        async def synthesize(job: Job) -> JobResult:
            return JobResult(job.prompt.encode(), "image/png")

        sibling = store.get(2)
        job = await JobRerunner(store).regenerate(0, synthesize)
        assert job.result.data == b"prompt 0"
        assert store.get(2) is sibling

    @pytest.mark.asyncio
    async def test_regenerate_failure_is_stored_on_job(self, store):
        async def synthesize(job: Job) -> JobResult:
            raise CredentialError("API key rejected")

        job = await JobRerunner(store).regenerate(0, synthesize)
        assert job.status == JobStatus.FAILED
        assert job.error.kind == ErrorKind.CREDENTIAL

    @pytest.mark.asyncio
    async def test_rejects_non_terminal_job(self):
        store = BatchStore([Job(id=0, title="A", prompt="a")])

        async def synthesize(job):
            raise AssertionError("must not be called")

        with pytest.raises(InvalidJobStateError):
            await JobRerunner(store).regenerate(0, synthesize)

    @pytest.mark.asyncio
    async def test_rejects_job_being_upscaled(self, store):
        store.apply(0, lambda job: job.upscaling(True))

        async def synthesize(job):
            raise AssertionError("must not be called")

        with pytest.raises(InvalidJobStateError, match="upscaled"):
            await JobRerunner(store).regenerate(0, synthesize)
