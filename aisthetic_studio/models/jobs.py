# aisthetic_studio/models/jobs.py
"""
Job model: one unit of generative work and its lifecycle.

Jobs are immutable values. Every transition returns a new Job with the same
id, which is what lets the BatchStore apply updates as pure keyed merges.
"""

from dataclasses import dataclass, replace
from enum import Enum

from aisthetic_studio.errors import ErrorKind, SynthesisError


class JobStatus(Enum):
    """Job lifecycle states."""

    PENDING = "pending"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (JobStatus.SUCCEEDED, JobStatus.FAILED)


@dataclass(frozen=True)
class JobResult:
    """Content produced by a successful synthesis call."""

    data: bytes
    mime_type: str
    uri: str | None = None  # Remote reference when the content came from one (video)

    def __repr__(self) -> str:
        return f"JobResult(mime_type={self.mime_type!r}, size={len(self.data)}, uri={self.uri!r})"


@dataclass(frozen=True)
class JobError:
    """Failure recorded on a job."""

    message: str
    kind: ErrorKind = ErrorKind.UNKNOWN

    @classmethod
    def from_exception(cls, exc: BaseException) -> "JobError":
        """Classify an exception raised by a synthesis call."""
        if isinstance(exc, SynthesisError):
            return cls(message=exc.message, kind=exc.kind)
        return cls(message=f"{type(exc).__name__}: {exc}", kind=ErrorKind.UNKNOWN)


@dataclass(frozen=True)
class Job:
    """
    A single generation unit within a batch.

    Attributes:
        id: Ordinal, unique within its batch, never changes
        title: Human-readable label from the Planner
        prompt: Instruction payload for the content service
        status: Lifecycle state
        result: Present iff status is SUCCEEDED
        error: Present iff status is FAILED
        is_upscaling: In-place upgrade in flight (orthogonal to status)
        caption: Optional companion copy produced at plan time (campaign assets)
    """

    id: int
    title: str
    prompt: str
    status: JobStatus = JobStatus.PENDING
    result: JobResult | None = None
    error: JobError | None = None
    is_upscaling: bool = False
    caption: str | None = None

    def __post_init__(self) -> None:
        if (self.result is not None) != (self.status == JobStatus.SUCCEEDED):
            raise ValueError(
                f"Job {self.id}: result must be set iff status is succeeded "
                f"(status={self.status.value})"
            )
        if (self.error is not None) != (self.status == JobStatus.FAILED):
            raise ValueError(
                f"Job {self.id}: error must be set iff status is failed "
                f"(status={self.status.value})"
            )
        if self.is_upscaling and self.status != JobStatus.SUCCEEDED:
            raise ValueError(f"Job {self.id}: only a succeeded job can be upscaling")

    def started(self) -> "Job":
        """pending/terminal -> running. Clears any previous result or error."""
        return replace(self, status=JobStatus.RUNNING, result=None, error=None, is_upscaling=False)

    def succeeded(self, result: JobResult) -> "Job":
        return replace(self, status=JobStatus.SUCCEEDED, result=result, error=None, is_upscaling=False)

    def failed(self, error: JobError) -> "Job":
        return replace(self, status=JobStatus.FAILED, result=None, error=error, is_upscaling=False)

    def upscaling(self, active: bool) -> "Job":
        """Set or clear the in-place upgrade flag, leaving status untouched."""
        return replace(self, is_upscaling=active)

    def upscaled(self, result: JobResult) -> "Job":
        """Replace the result of a succeeded job and clear the upgrade flag."""
        return replace(self, result=result, is_upscaling=False)

