# aisthetic_studio/content/base.py
"""
Content service contract.

The engine depends only on this interface. The Gemini implementation lives in
gemini.py; tests substitute an in-memory fake.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from aisthetic_studio.models.ideas import ImageData
from aisthetic_studio.models.jobs import JobResult


@dataclass
class VideoOperation:
    """
    State of a long-running video job.

    Attributes:
        handle: Opaque token returned by the service
        done: Whether the service reports a terminal state
        result_uri: Content reference, set when done and successful
        failure_kind: Failure description, set when done and unsuccessful
    """

    handle: Any
    done: bool = False
    result_uri: str | None = None
    failure_kind: str | None = None


class ContentService(ABC):
    """Narrow interface to the external generative-content service."""

    @abstractmethod
    async def describe_image(self, image: ImageData, instruction: str, system_instruction: str) -> str:
        """
        Produce short text about an image.

        Raises:
            SynthesisError: On service failure
        """

    @abstractmethod
    async def generate_text(
        self,
        text: str,
        system_instruction: str,
        images: list[ImageData] | None = None,
        use_search: bool = False,
    ) -> str:
        """
        Free-form text generation (captions, scripts, theme suggestions).

        Raises:
            SynthesisError: On service failure
        """

    @abstractmethod
    async def plan_ideas(
        self,
        text: str,
        system_instruction: str,
        images: list[ImageData],
        response_schema: Any,
    ) -> str:
        """
        Request a strictly-typed JSON array.

        Returns:
            Raw JSON text as returned by the service (validated by the Planner)
        """

    @abstractmethod
    async def synthesize_image(self, prompt: str, images: list[ImageData]) -> JobResult:
        """
        Synthesize one image from a prompt and 1-2 reference images.

        Raises:
            SynthesisError: kind SAFETY_BLOCK, NO_CONTENT or TRANSPORT
            CredentialError: If the credential is rejected
        """

    @abstractmethod
    async def synthesize_speech(self, text: str, voice: str, style_prefix: str = "") -> JobResult:
        """
        Synthesize speech audio.

        Raises:
            SynthesisError: kind NO_CONTENT when no audio came back
        """

    @abstractmethod
    async def submit_video(self, prompt: str, image: ImageData | None) -> VideoOperation:
        """Register a video job and return its operation state."""

    @abstractmethod
    async def poll_video(self, operation: VideoOperation) -> VideoOperation:
        """Query the status of a previously submitted video job."""

    @abstractmethod
    async def retrieve_video(self, result_uri: str) -> JobResult:
        """
        Fetch the bytes behind a finished video reference.

        Raises:
            RetrievalError: If the fetch failed
            CredentialError: If the credential was rejected
        """
