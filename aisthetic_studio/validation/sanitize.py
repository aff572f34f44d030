# aisthetic_studio/validation/sanitize.py
"""
Input sanitization and validation utilities.

Checks user text and image files before any service call is made.
"""

import logging
import mimetypes
import re
from pathlib import Path

from aisthetic_studio.errors import InputError
from aisthetic_studio.models.ideas import ImageData

logger = logging.getLogger(__name__)

SUPPORTED_IMAGE_TYPES = ("image/png", "image/jpeg", "image/webp", "image/heic", "image/heif")

MAX_IMAGE_BYTES = 20 * 1024 * 1024


def sanitize_description(text: str, max_length: int = 5000, field: str = "Description") -> str:
    """
    Sanitize and validate free-text input.

    Strips whitespace and validates non-empty.
    Truncates to max_length if needed.

    Args:
        text: User-provided text
        max_length: Maximum allowed length (default 5000)
        field: Name used in error messages

    Returns:
        Cleaned text

    Raises:
        InputError: If the text is empty after stripping
    """
    cleaned = (text or "").strip()

    if not cleaned:
        raise InputError(f"{field} cannot be empty")

    if len(cleaned) > max_length:
        logger.warning(f"{field} truncated from {len(cleaned)} to {max_length} characters")
        cleaned = cleaned[:max_length]

    return cleaned


def load_image(user_path: str | Path, max_bytes: int = MAX_IMAGE_BYTES) -> ImageData:
    """
    Read an image file into ImageData.

    Args:
        user_path: User-provided file path
        max_bytes: Largest accepted file size

    Returns:
        ImageData with bytes, media type and file name

    Raises:
        InputError: If the file is missing, empty, too large or not a supported image
    """
    try:
        resolved = Path(user_path).expanduser().resolve()
    except (ValueError, OSError) as e:
        raise InputError(f"Invalid path '{user_path}': {e}") from e

    if not resolved.is_file():
        raise InputError(f"Image not found: {resolved}")

    mime_type, _ = mimetypes.guess_type(resolved.name)
    if mime_type not in SUPPORTED_IMAGE_TYPES:
        raise InputError(
            f"Unsupported image type for {resolved.name} ({mime_type or 'unknown'}); "
            f"use PNG, JPEG, WEBP or HEIC"
        )

    size = resolved.stat().st_size
    if size == 0:
        raise InputError(f"Image is empty: {resolved}")
    if size > max_bytes:
        raise InputError(f"Image is too large ({size} bytes, limit {max_bytes}): {resolved}")

    logger.info(f"Loaded image {resolved.name} ({mime_type}, {size} bytes)")
    return ImageData(data=resolved.read_bytes(), mime_type=mime_type, name=resolved.name)


def parse_job_id(raw: str) -> int:
    """
    Parse a job id typed by the user.

    Accepts '3' or '#3'.

    Raises:
        InputError: If the value is not a non-negative integer
    """
    match = re.fullmatch(r"#?(\d{1,6})", raw.strip())
    if not match:
        raise InputError(f"Invalid job id '{raw}': expected a number such as 3")
    return int(match.group(1))
