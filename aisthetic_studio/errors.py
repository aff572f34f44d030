# aisthetic_studio/errors.py
"""
Error hierarchy for aisthetic-studio.

Per-job failures (SynthesisError and its subclasses) are caught by the
executors and stored on the job. PlanningError and InputError propagate to
the caller because there is no job to attach them to.
"""

from enum import Enum


class ErrorKind(Enum):
    """Internal classification of a failed job."""

    SAFETY_BLOCK = "safety_block"
    NO_CONTENT = "no_content"
    TRANSPORT = "transport"
    CREDENTIAL = "credential"
    TIMEOUT = "timeout"
    RETRIEVAL = "retrieval"
    UNKNOWN = "unknown"


class StudioError(Exception):
    """Base class for all aisthetic-studio errors."""


class InputError(StudioError):
    """User input rejected before any service call was made."""


class PlanningError(StudioError):
    """Planner call failed or returned unusable structured data. Fatal to the batch."""


class InvalidJobStateError(StudioError):
    """A re-run was requested on a job that does not satisfy its preconditions."""


class SynthesisError(StudioError):
    """A single job's synthesis call failed."""

    kind: ErrorKind = ErrorKind.UNKNOWN

    def __init__(self, message: str, kind: ErrorKind | None = None) -> None:
        super().__init__(message)
        if kind is not None:
            self.kind = kind

    @property
    def message(self) -> str:
        return str(self)


class CredentialError(SynthesisError):
    """The external credential is invalid or expired. Re-prompt before retrying."""

    kind = ErrorKind.CREDENTIAL


class PollingTimeout(SynthesisError):
    """A long-running job never reached a terminal state within the poll budget."""

    kind = ErrorKind.TIMEOUT


class RetrievalError(SynthesisError):
    """A finished video reference could not be fetched into bytes."""

    kind = ErrorKind.RETRIEVAL


CREDENTIAL_MARKERS = ("api key not valid", "api_key_invalid", "requested entity was not found")


def is_credential_failure(code: int | None, message: str) -> bool:
    """Whether a service error means the credential itself was rejected."""
    if code in (401, 403):
        return True
    lowered = message.lower()
    return any(marker in lowered for marker in CREDENTIAL_MARKERS)
