# tests/unit/test_validation.py
"""Tests for input sanitization, image loading and job id parsing."""

import pytest

from aisthetic_studio.errors import InputError
from aisthetic_studio.validation import load_image, parse_job_id, sanitize_description


class TestSanitizeDescription:
    def test_strips_whitespace(self):
        assert sanitize_description("  Vitamin C serum \n") == "Vitamin C serum"

    @pytest.mark.parametrize("text", ["", "   ", "\n\t", None])
    def test_empty_rejected(self, text):
        with pytest.raises(InputError, match="Description cannot be empty"):
            sanitize_description(text)

    def test_field_name_in_error(self):
        with pytest.raises(InputError, match="Pose cannot be empty"):
            sanitize_description(" ", field="Pose")

    def test_truncates(self, caplog):
        result = sanitize_description("a" * 30, max_length=10)
        assert result == "a" * 10
        assert "truncated" in caplog.text


class TestLoadImage:
    def test_loads_png(self, tmp_path):
        path = tmp_path / "Product Shot.PNG"
        path.write_bytes(b"\x89PNG data")

        image = load_image(path)

        assert image.data == b"\x89PNG data"
        assert image.mime_type == "image/png"
        assert image.name == "Product Shot.PNG"

    def test_jpeg_from_string_path(self, tmp_path):
        path = tmp_path / "model.jpg"
        path.write_bytes(b"\xff\xd8 jpeg")
        assert load_image(str(path)).mime_type == "image/jpeg"

    def test_missing_file(self, tmp_path):
        with pytest.raises(InputError, match="not found"):
            load_image(tmp_path / "nope.png")

    def test_directory_rejected(self, tmp_path):
        with pytest.raises(InputError, match="not found"):
            load_image(tmp_path)

    def test_unsupported_type(self, tmp_path):
        path = tmp_path / "notes.txt"
        path.write_text("hello")
        with pytest.raises(InputError, match="Unsupported image type"):
            load_image(path)

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.png"
        path.write_bytes(b"")
        with pytest.raises(InputError, match="empty"):
            load_image(path)

    def test_too_large(self, tmp_path):
        path = tmp_path / "big.png"
        path.write_bytes(b"x" * 100)
        with pytest.raises(InputError, match="too large"):
            load_image(path, max_bytes=50)


class TestParseJobId:
    @pytest.mark.parametrize("raw, expected", [("3", 3), ("#3", 3), (" 12 ", 12), ("0", 0)])
    def test_valid(self, raw, expected):
        assert parse_job_id(raw) == expected

    @pytest.mark.parametrize("raw", ["", "abc", "-1", "3.5", "#", "1 2"])
    def test_invalid(self, raw):
        with pytest.raises(InputError):
            parse_job_id(raw)
