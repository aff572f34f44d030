# tests/conftest.py
"""Shared fixtures: an in-memory content service and sample inputs."""

import asyncio
import json

import pytest

from aisthetic_studio.content.base import ContentService, VideoOperation
from aisthetic_studio.models.ideas import ImageData
from aisthetic_studio.models.jobs import JobResult

VIDEO_URI = "https://generativelanguage.example/files/video-1:download"


def plan_json(count: int, prefix: str = "Shot") -> str:
    """A well-formed planner reply with `count` ideas."""
    return json.dumps(
        [{"title": f"{prefix} {i + 1}", "prompt": f"{prefix.lower()} prompt {i + 1}"} for i in range(count)]
    )


class FakeContentService(ContentService):
    """
    Records every call and returns canned content.

    Attributes:
        plan_response: Raw text returned by plan_ideas (or an exception to raise)
        text_response: Raw text returned by generate_text/describe_image
        image_failures: prompt substring -> exception raised by synthesize_image
        image_delays: prompt substring -> seconds to wait before answering
        speech_failures: text substring -> exception raised by synthesize_speech
        polls_until_done: poll_video calls before an operation reports done
        video_failure: failure_kind reported when the operation finishes
    """

    def __init__(self):
        self.plan_response: str | Exception = plan_json(6)
        self.text_response: str | Exception = "A lovely product."
        self.image_failures: dict[str, Exception] = {}
        self.image_delays: dict[str, float] = {}
        self.speech_failures: dict[str, Exception] = {}
        self.polls_until_done = 3
        self.video_failure: str | None = None
        self.video_uri: str | None = VIDEO_URI
        self.calls: list[tuple] = []
        self.api_keys: list[str] = []
        self._polls: dict[str, int] = {}

    def use_api_key(self, api_key: str) -> None:
        self.api_keys.append(api_key)

    @staticmethod
    def _raise_or_return(value):
        if isinstance(value, Exception):
            raise value
        return value

    async def describe_image(self, image, instruction, system_instruction):
        self.calls.append(("describe_image", image.name, instruction))
        return self._raise_or_return(self.text_response)

    async def generate_text(self, text, system_instruction, images=None, use_search=False):
        self.calls.append(("generate_text", text, system_instruction, len(images or []), use_search))
        return self._raise_or_return(self.text_response)

    async def plan_ideas(self, text, system_instruction, images, response_schema):
        self.calls.append(("plan_ideas", text, system_instruction, [i.name for i in images]))
        return self._raise_or_return(self.plan_response)

    async def synthesize_image(self, prompt, images):
        self.calls.append(("synthesize_image", prompt, [i.name for i in images]))
        for marker, delay in self.image_delays.items():
            if marker in prompt:
                await asyncio.sleep(delay)
        for marker, exc in self.image_failures.items():
            if marker in prompt:
                raise exc
        return JobResult(data=f"image:{prompt}".encode(), mime_type="image/png")

    async def synthesize_speech(self, text, voice, style_prefix=""):
        self.calls.append(("synthesize_speech", text, voice, style_prefix))
        for marker, exc in self.speech_failures.items():
            if marker in text:
                raise exc
        return JobResult(data=b"\x00\x01" * 240, mime_type="audio/L16;codec=pcm;rate=24000")

    async def submit_video(self, prompt, image):
        handle = f"op-{len(self._polls) + 1}"
        self._polls[handle] = 0
        self.calls.append(("submit_video", prompt, image.name if image else None))
        if self.polls_until_done == 0:
            return VideoOperation(handle=handle, done=True, result_uri=self.video_uri)
        return VideoOperation(handle=handle, done=False)

    async def poll_video(self, operation):
        self._polls[operation.handle] += 1
        self.calls.append(("poll_video", operation.handle))
        if self._polls[operation.handle] < self.polls_until_done:
            return VideoOperation(handle=operation.handle, done=False)
        if self.video_failure:
            return VideoOperation(handle=operation.handle, done=True, failure_kind=self.video_failure)
        return VideoOperation(handle=operation.handle, done=True, result_uri=self.video_uri)

    async def retrieve_video(self, result_uri):
        self.calls.append(("retrieve_video", result_uri))
        return JobResult(data=b"mp4-bytes", mime_type="video/mp4", uri=result_uri)

    def calls_to(self, name: str) -> list[tuple]:
        return [call for call in self.calls if call[0] == name]


@pytest.fixture
def fake_client() -> FakeContentService:
    return FakeContentService()


@pytest.fixture
def product_image() -> ImageData:
    return ImageData(data=b"\x89PNG product", mime_type="image/png", name="product.png")


@pytest.fixture
def model_image() -> ImageData:
    return ImageData(data=b"\xff\xd8 model", mime_type="image/jpeg", name="model.jpg")


@pytest.fixture
def make_plan():
    """Factory for well-formed planner replies."""
    return plan_json
