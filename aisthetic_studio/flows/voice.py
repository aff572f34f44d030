# aisthetic_studio/flows/voice.py
"""Voice studio: synthesize script passages one at a time and export them."""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from aisthetic_studio.content.base import ContentService
from aisthetic_studio.engine import SequentialExecutor
from aisthetic_studio.errors import InputError
from aisthetic_studio.export import as_wav, zip_clips
from aisthetic_studio.models.jobs import JobResult
from aisthetic_studio.notifications import Notifier
from aisthetic_studio.planning import split_passages

logger = logging.getLogger(__name__)

VOICES: dict[str, str] = {
    "Aoede": "female, friendly",
    "Kore": "firm",
    "Charon": "informative",
    "Puck": "upbeat",
    "Leda": "youthful",
    "Zephyr": "bright",
    "Sadachbia": "lively",
    "Vindemiatrix": "gentle",
}

SPEECH_STYLES: dict[str, str] = {
    "normal": "",
    "storyteller": "Read this as a story narrator: ",
    "newsreader": "Read this in a formal newsreader tone: ",
    "excited": "Say this in a cheerful, excited tone: ",
    "somber": "Say this in a slow, sad voice: ",
}


@dataclass(frozen=True)
class VoiceClip:
    index: int
    passage: str
    audio: JobResult

    @property
    def name(self) -> str:
        return f"audio_{self.index + 1}"


async def synthesize_passages(
    client: ContentService,
    text: str,
    voice: str = "Aoede",
    style: str = "normal",
    sample_rate: int = 24000,
    notifier: Notifier | None = None,
    on_status: Callable[[str], Any] | None = None,
    on_clip: Callable[[int, VoiceClip], Any] | None = None,
) -> list[VoiceClip]:
    """
    Turn a multi-script text into one WAV clip per passage, strictly in order.

    A failing passage is reported to the notifier and skipped.

    Raises:
        InputError: If the text has no passages or voice/style is unknown
    """
    passages = split_passages(text)
    if not passages:
        raise InputError("Script is empty")
    if voice not in VOICES:
        raise InputError(f"Unknown voice '{voice}'; choose from {', '.join(VOICES)}")
    if style not in SPEECH_STYLES:
        raise InputError(f"Unknown style '{style}'; choose from {', '.join(SPEECH_STYLES)}")
    style_prefix = SPEECH_STYLES[style]

    async def synthesize(item: tuple[int, str]) -> VoiceClip:
        index, passage = item
        audio = await client.synthesize_speech(passage, voice, style_prefix)
        return VoiceClip(index=index, passage=passage, audio=as_wav(audio, sample_rate))

    executor = SequentialExecutor(notifier=notifier, on_status=on_status)
    clips = await executor.run(list(enumerate(passages)), synthesize, on_result=on_clip)
    logger.info(f"Voice studio: {len(clips)}/{len(passages)} clip(s) synthesized")
    return clips


def export_clips(clips: list[VoiceClip], archive_path: Path) -> Path:
    """Bundle all clips into one zip archive."""
    return zip_clips(((clip.name, clip.audio) for clip in clips), archive_path)
