# tests/unit/test_export.py
"""Tests for result packaging: WAV wrapping, batch files and zip archives."""

import io
import wave
import zipfile

from aisthetic_studio.errors import ErrorKind
from aisthetic_studio.export import (
    as_wav,
    extension_for,
    pcm_rate,
    pcm_to_wav,
    slugify,
    write_batch,
    zip_clips,
)
from aisthetic_studio.models.jobs import Job, JobError, JobResult
from aisthetic_studio.models.store import BatchStore

PCM = b"\x01\x00\xff\x7f" * 100


class TestWav:
    def test_pcm_to_wav_header(self):
        data = pcm_to_wav(PCM, sample_rate=24000)
        assert data[:4] == b"RIFF"
        assert data[8:12] == b"WAVE"
        with wave.open(io.BytesIO(data)) as wav:
            assert wav.getframerate() == 24000
            assert wav.getnchannels() == 1
            assert wav.getsampwidth() == 2
            assert wav.getnframes() == len(PCM) // 2

    def test_rate_from_mime(self):
        assert pcm_rate("audio/L16;codec=pcm;rate=16000") == 16000
        assert pcm_rate("audio/L16") == 24000

    def test_as_wav_converts_raw_pcm(self):
        result = as_wav(JobResult(PCM, "audio/L16;codec=pcm;rate=24000"))
        assert result.mime_type == "audio/wav"
        assert result.data[:4] == b"RIFF"

    def test_as_wav_passes_other_types_through(self):
        original = JobResult(b"png", "image/png")
        assert as_wav(original) is original


def test_extension_for():
    assert extension_for("image/png") == "png"
    assert extension_for("image/jpeg") == "jpg"
    assert extension_for("video/mp4") == "mp4"
    assert extension_for("image/avif") == "avif"


def test_slugify():
    assert slugify("Sunlit Marble Counter!") == "sunlit-marble-counter"
    assert slugify("***") == "item"


def test_write_batch_writes_succeeded_jobs_only(tmp_path):
    store = BatchStore(
        [
            Job(id=0, title="Instagram Post", prompt="p", caption="Glow! #skincare"),
            Job(id=1, title="Facebook Ad", prompt="p"),
        ]
    )
    store.apply(0, lambda job: job.started().succeeded(JobResult(b"img", "image/png")))
    store.apply(1, lambda job: job.started().failed(JobError("blocked", ErrorKind.SAFETY_BLOCK)))

    paths = write_batch(store, tmp_path, "campaign")

    assert [path.name for path in paths] == ["campaign-1-instagram-post.png", "campaign-1-instagram-post.txt"]
    assert paths[0].read_bytes() == b"img"
    assert paths[1].read_text().strip() == "Glow! #skincare"


def test_zip_clips(tmp_path):
    archive = zip_clips(
        [("audio_1", JobResult(PCM, "audio/L16;rate=24000")), ("audio_2", JobResult(PCM, "audio/wav"))],
        tmp_path / "out" / "clips.zip",
    )
    with zipfile.ZipFile(archive) as bundle:
        assert sorted(bundle.namelist()) == ["audio_1.wav", "audio_2.wav"]
        assert bundle.read("audio_1.wav")[:4] == b"RIFF"
