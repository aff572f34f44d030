# aisthetic_studio/planning/parsing.py
"""
JSON extraction from content service text.

Structured calls ask for application/json, but theme suggestions run with the
search tool (no JSON mode) and come back fenced or wrapped in prose.
"""

import json
import logging
import re
from typing import Any

logger = logging.getLogger(__name__)


def extract_json(raw_output: str) -> Any:
    """
    Pull the plan array (or object) out of a planner or theme reply.

    JSON-mode replies parse as-is. Search-grounded theme replies arrive
    inside a ```json fence or after a sentence of prose, so those are tried
    next, looking for the array before any object.

    Raises:
        ValueError: If the reply holds no parseable JSON
    """
    text = raw_output.strip()
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        pass

    candidates = []
    fence = re.search(r"```(?:json)?\s*\n(.*?)\n```", text, re.DOTALL | re.IGNORECASE)
    if fence:
        candidates.append(fence.group(1).strip())
    for pattern in (r"\[.*\]", r"\{.*\}"):
        block = re.search(pattern, text, re.DOTALL)
        if block:
            candidates.append(block.group(0))

    for candidate in candidates:
        try:
            return json.loads(candidate)
        except json.JSONDecodeError:
            continue

    preview = text[:200].replace("\n", "\\n")
    logger.debug(f"Unparseable reply ({len(raw_output)} chars): {preview}")
    raise ValueError(f"reply is not JSON ({len(raw_output)} chars, starts: {preview[:80]!r})")


def split_passages(text: str) -> list[str]:
    """Split a multi-script text on blank lines, dropping empty passages."""
    return [passage.strip() for passage in re.split(r"\n\s*\n", text.strip()) if passage.strip()]
