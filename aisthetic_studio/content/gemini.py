# aisthetic_studio/content/gemini.py
"""Google GenAI content service client: text, structured plans, image, speech and video."""

import logging
from typing import Any

import httpx
from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from aisthetic_studio.errors import (
    CredentialError,
    ErrorKind,
    RetrievalError,
    SynthesisError,
    is_credential_failure,
)
from aisthetic_studio.models.ideas import ImageData
from aisthetic_studio.models.jobs import JobResult

from .base import ContentService, VideoOperation
from .retry import content_retry

logger = logging.getLogger(__name__)

SAFETY_FINISH_REASONS = {
    "SAFETY",
    "IMAGE_SAFETY",
    "PROHIBITED_CONTENT",
    "BLOCKLIST",
    "SPII",
    "IMAGE_PROHIBITED_CONTENT",
}


def _reason_name(reason: Any) -> str:
    return getattr(reason, "name", None) or str(reason or "")


class GeminiContentClient(ContentService):
    """
    Async content service client backed by the google-genai SDK.

    Handles:
    - Retry of transient failures (429/5xx/transport) with exponential backoff
    - Mapping of service errors onto SynthesisError kinds
    - Credential rejection surfaced as CredentialError
    """

    def __init__(
        self,
        api_key: str,
        text_model: str = "gemini-2.5-flash",
        image_model: str = "gemini-2.5-flash-image",
        speech_model: str = "gemini-2.5-flash-preview-tts",
        video_model: str = "veo-2.0-generate-001",
        timeout: int = 120,
        max_retries: int = 3,
    ):
        """
        Initialize the client.

        Args:
            api_key: Opaque credential for the service
            text_model: Model for descriptions, plans and copy
            image_model: Model for image synthesis
            speech_model: Model for speech synthesis
            video_model: Model for video synthesis
            timeout: Request timeout in seconds
            max_retries: Attempts per call on transient errors
        """
        self._api_key = api_key
        self.text_model = text_model
        self.image_model = image_model
        self.speech_model = speech_model
        self.video_model = video_model
        self._timeout = timeout
        self._max_retries = max_retries
        self.client = self._build_client(api_key)

    def _build_client(self, api_key: str) -> genai.Client:
        return genai.Client(
            api_key=api_key, http_options=types.HttpOptions(timeout=self._timeout * 1000)
        )

    def use_api_key(self, api_key: str) -> None:
        """Swap in a re-entered credential; later calls (and existing synthesizers) use it."""
        self._api_key = api_key
        self.client = self._build_client(api_key)
        logger.info("Content client credential replaced")

    async def _call(self, label: str, func, **kwargs) -> Any:
        """Run one SDK coroutine with retries and error mapping."""
        try:
            async for attempt in content_retry(self._max_retries):
                with attempt:
                    return await func(**kwargs)
        except genai_errors.APIError as e:
            message = e.message or str(e)
            if is_credential_failure(e.code, message):
                logger.error(f"{label}: credential rejected ({e.code})")
                raise CredentialError(f"API key rejected: {message}") from e
            logger.error(f"{label} failed: {e.code} {message}")
            raise SynthesisError(f"{label} failed: {message}", ErrorKind.TRANSPORT) from e
        except (httpx.TransportError, ConnectionError) as e:
            logger.error(f"{label} transport failure: {e}")
            raise SynthesisError(f"{label} failed: {e}", ErrorKind.TRANSPORT) from e

    @staticmethod
    def _parts(text: str, images: list[ImageData] | None) -> list[types.Part]:
        parts = [types.Part.from_text(text=text)]
        for image in images or []:
            parts.append(types.Part.from_bytes(data=image.data, mime_type=image.mime_type))
        return parts

    @staticmethod
    def _text_of(response: Any, label: str) -> str:
        text = response.text
        if not text or not text.strip():
            raise SynthesisError(f"{label}: empty response", ErrorKind.NO_CONTENT)
        return text.strip()

    @staticmethod
    def _inline_blob(response: Any, what: str) -> types.Blob:
        """
        Find the first inline data part in a response.

        Raises:
            SynthesisError: SAFETY_BLOCK if the prompt or candidate was blocked,
                NO_CONTENT if nothing came back
        """
        feedback = getattr(response, "prompt_feedback", None)
        if feedback is not None and feedback.block_reason:
            raise SynthesisError(
                f"Request blocked by safety filters ({_reason_name(feedback.block_reason)})",
                ErrorKind.SAFETY_BLOCK,
            )

        candidates = response.candidates or []
        for candidate in candidates:
            content = candidate.content
            for part in (content.parts if content else None) or []:
                if part.inline_data is not None and part.inline_data.data:
                    return part.inline_data

        for candidate in candidates:
            reason = _reason_name(candidate.finish_reason)
            if reason in SAFETY_FINISH_REASONS:
                raise SynthesisError(
                    f"{what} blocked by safety filters ({reason})", ErrorKind.SAFETY_BLOCK
                )
        raise SynthesisError(f"No {what} data in response", ErrorKind.NO_CONTENT)

    async def describe_image(self, image: ImageData, instruction: str, system_instruction: str) -> str:
        logger.info(f"describe_image: model={self.text_model}, image={image.name}")
        response = await self._call(
            "describe_image",
            self.client.aio.models.generate_content,
            model=self.text_model,
            contents=self._parts(instruction, [image]),
            config=types.GenerateContentConfig(system_instruction=system_instruction),
        )
        return self._text_of(response, "describe_image")

    async def generate_text(
        self,
        text: str,
        system_instruction: str,
        images: list[ImageData] | None = None,
        use_search: bool = False,
    ) -> str:
        logger.info(
            f"generate_text: model={self.text_model}, images={len(images or [])}, search={use_search}"
        )
        tools = [types.Tool(google_search=types.GoogleSearch())] if use_search else None
        config = types.GenerateContentConfig(system_instruction=system_instruction, tools=tools)
        response = await self._call(
            "generate_text",
            self.client.aio.models.generate_content,
            model=self.text_model,
            contents=self._parts(text, images),
            config=config,
        )
        return self._text_of(response, "generate_text")

    async def plan_ideas(
        self,
        text: str,
        system_instruction: str,
        images: list[ImageData],
        response_schema: Any,
    ) -> str:
        logger.info(f"plan_ideas: model={self.text_model}, images={len(images)}")
        response = await self._call(
            "plan_ideas",
            self.client.aio.models.generate_content,
            model=self.text_model,
            contents=self._parts(text, images),
            config=types.GenerateContentConfig(
                system_instruction=system_instruction,
                response_mime_type="application/json",
                response_schema=response_schema,
            ),
        )
        return self._text_of(response, "plan_ideas")

    async def synthesize_image(self, prompt: str, images: list[ImageData]) -> JobResult:
        logger.info(f"synthesize_image: model={self.image_model}, references={len(images)}")
        response = await self._call(
            "synthesize_image",
            self.client.aio.models.generate_content,
            model=self.image_model,
            contents=self._parts(prompt, images),
            config=types.GenerateContentConfig(response_modalities=["IMAGE"]),
        )
        blob = self._inline_blob(response, "image")
        return JobResult(data=blob.data, mime_type=blob.mime_type or "image/png")

    async def synthesize_speech(self, text: str, voice: str, style_prefix: str = "") -> JobResult:
        logger.info(f"synthesize_speech: model={self.speech_model}, voice={voice}, chars={len(text)}")
        response = await self._call(
            "synthesize_speech",
            self.client.aio.models.generate_content,
            model=self.speech_model,
            contents=f"{style_prefix}{text}",
            config=types.GenerateContentConfig(
                response_modalities=["AUDIO"],
                speech_config=types.SpeechConfig(
                    voice_config=types.VoiceConfig(
                        prebuilt_voice_config=types.PrebuiltVoiceConfig(voice_name=voice)
                    )
                ),
            ),
        )
        blob = self._inline_blob(response, "audio")
        return JobResult(data=blob.data, mime_type=blob.mime_type or "audio/L16;rate=24000")

    async def submit_video(self, prompt: str, image: ImageData | None) -> VideoOperation:
        logger.info(f"submit_video: model={self.video_model}, image={'yes' if image else 'no'}")
        kwargs: dict[str, Any] = {
            "model": self.video_model,
            "prompt": prompt,
            "config": types.GenerateVideosConfig(number_of_videos=1),
        }
        if image is not None:
            kwargs["image"] = types.Image(image_bytes=image.data, mime_type=image.mime_type)
        operation = await self._call(
            "submit_video", self.client.aio.models.generate_videos, **kwargs
        )
        return self._to_video_operation(operation)

    async def poll_video(self, operation: VideoOperation) -> VideoOperation:
        refreshed = await self._call(
            "poll_video", self.client.aio.operations.get, operation=operation.handle
        )
        return self._to_video_operation(refreshed)

    @staticmethod
    def _to_video_operation(operation: Any) -> VideoOperation:
        if not operation.done:
            return VideoOperation(handle=operation, done=False)

        if operation.error:
            message = str(operation.error.get("message", operation.error))
            return VideoOperation(handle=operation, done=True, failure_kind=message)

        response = operation.response or getattr(operation, "result", None)
        videos = (response.generated_videos if response else None) or []
        uri = videos[0].video.uri if videos and videos[0].video else None
        if not uri:
            return VideoOperation(handle=operation, done=True, failure_kind="no video in response")
        return VideoOperation(handle=operation, done=True, result_uri=uri)

    async def retrieve_video(self, result_uri: str) -> JobResult:
        logger.info("retrieve_video: fetching finished video")
        try:
            async with httpx.AsyncClient(
                timeout=httpx.Timeout(self._timeout), follow_redirects=True
            ) as http:
                response = await http.get(result_uri, headers={"x-goog-api-key": self._api_key})
        except httpx.HTTPError as e:
            raise RetrievalError(f"Video download failed: {e}") from e

        if response.status_code in (401, 403):
            raise CredentialError(f"API key rejected while downloading video ({response.status_code})")
        if response.status_code >= 400:
            raise RetrievalError(f"Video download failed with HTTP {response.status_code}")

        mime_type = response.headers.get("content-type", "video/mp4").split(";")[0]
        return JobResult(data=response.content, mime_type=mime_type, uri=result_uri)
