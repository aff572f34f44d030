# aisthetic_studio/export.py
"""
Result packaging: write finished jobs to disk, wrap raw PCM speech as WAV,
and bundle audio clips into a zip archive.
"""

import io
import logging
import re
import wave
import zipfile
from collections.abc import Iterable
from pathlib import Path

from aisthetic_studio.models.jobs import JobResult
from aisthetic_studio.models.store import BatchStore

logger = logging.getLogger(__name__)

EXTENSIONS = {
    "image/png": "png",
    "image/jpeg": "jpg",
    "image/webp": "webp",
    "audio/wav": "wav",
    "audio/x-wav": "wav",
    "audio/mpeg": "mp3",
    "video/mp4": "mp4",
    "video/webm": "webm",
}


def is_raw_pcm(mime_type: str) -> bool:
    """The speech model returns headerless 16-bit PCM (audio/L16 or audio/pcm)."""
    base = mime_type.split(";")[0].strip().lower()
    return base in ("audio/l16", "audio/pcm")


def pcm_rate(mime_type: str, default: int = 24000) -> int:
    """Read the sample rate from a mime parameter such as 'audio/L16;rate=24000'."""
    match = re.search(r"rate=(\d+)", mime_type)
    return int(match.group(1)) if match else default


def pcm_to_wav(pcm: bytes, sample_rate: int = 24000, channels: int = 1, sample_width: int = 2) -> bytes:
    """Wrap raw little-endian PCM samples in a WAV container."""
    buffer = io.BytesIO()
    with wave.open(buffer, "wb") as wav:
        wav.setnchannels(channels)
        wav.setsampwidth(sample_width)
        wav.setframerate(sample_rate)
        wav.writeframes(pcm)
    return buffer.getvalue()


def as_wav(result: JobResult, default_rate: int = 24000) -> JobResult:
    """Return a playable WAV result; non-PCM results pass through unchanged."""
    if not is_raw_pcm(result.mime_type):
        return result
    rate = pcm_rate(result.mime_type, default_rate)
    return JobResult(data=pcm_to_wav(result.data, rate), mime_type="audio/wav", uri=result.uri)


def extension_for(mime_type: str) -> str:
    base = mime_type.split(";")[0].strip().lower()
    if base in EXTENSIONS:
        return EXTENSIONS[base]
    return base.split("/")[-1] or "bin"


def slugify(text: str, max_length: int = 40) -> str:
    slug = re.sub(r"[^a-z0-9]+", "-", text.lower()).strip("-")
    return slug[:max_length].rstrip("-") or "item"


def write_result(result: JobResult, out_dir: Path, stem: str) -> Path:
    """Write one result, converting raw PCM to WAV."""
    out_dir.mkdir(parents=True, exist_ok=True)
    result = as_wav(result)
    path = out_dir / f"{stem}.{extension_for(result.mime_type)}"
    path.write_bytes(result.data)
    logger.info(f"Wrote {path} ({len(result.data)} bytes)")
    return path


def write_batch(store: BatchStore, out_dir: Path, prefix: str) -> list[Path]:
    """
    Write every succeeded job of a batch into out_dir.

    Files are named '<prefix>-<id>-<title-slug>'. A job's caption, when
    present, is written next to it as a .txt file.

    Returns:
        Paths written, in plan order
    """
    written: list[Path] = []
    for job in store.succeeded():
        stem = f"{prefix}-{job.id + 1}-{slugify(job.title)}"
        written.append(write_result(job.result, out_dir, stem))
        if job.caption:
            caption_path = out_dir / f"{stem}.txt"
            caption_path.write_text(job.caption + "\n", encoding="utf-8")
            written.append(caption_path)
    return written


def zip_clips(clips: Iterable[tuple[str, JobResult]], archive_path: Path) -> Path:
    """
    Bundle audio clips into one zip archive.

    Args:
        clips: (name, result) pairs; raw PCM is wrapped as WAV
        archive_path: Destination .zip file

    Returns:
        archive_path
    """
    archive_path.parent.mkdir(parents=True, exist_ok=True)
    count = 0
    with zipfile.ZipFile(archive_path, "w", compression=zipfile.ZIP_DEFLATED) as archive:
        for name, result in clips:
            result = as_wav(result)
            archive.writestr(f"{name}.{extension_for(result.mime_type)}", result.data)
            count += 1
    logger.info(f"Wrote {count} clip(s) to {archive_path}")
    return archive_path
