# aisthetic_studio/logging_config.py
"""
Stderr logging configuration.

Command output goes to stdout; ALL logging goes to stderr.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

VERBOSITY_LEVELS = {
    "quiet": logging.WARNING,
    "normal": logging.INFO,
    "verbose": logging.DEBUG,
}

HUMAN_FORMAT = "%(asctime)s  %(levelname)-7s  %(message)s"

NOISY_LOGGERS = ("httpx", "httpcore", "google_genai")


class JsonFormatter(logging.Formatter):
    """One JSON object per line; engine records carry the job id they concern."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        job_id = getattr(record, "job_id", None)
        if job_id is not None:
            entry["job"] = job_id
        if record.exc_info:
            entry["exc"] = self.formatException(record.exc_info)
        return json.dumps(entry)


def configure_logging(verbosity: str = "normal", json_output: bool = False) -> None:
    """
    Configure a single stderr handler on the root logger.

    Clears existing handlers so repeated calls (tests, re-entry) don't stack.

    Args:
        verbosity: quiet, normal or verbose
        json_output: Emit one JSON object per line instead of human-readable text
    """
    level = VERBOSITY_LEVELS.get(verbosity, logging.INFO)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(JsonFormatter() if json_output else logging.Formatter(HUMAN_FORMAT))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

    # Third-party clients log every request at INFO
    for logger_name in NOISY_LOGGERS:
        logging.getLogger(logger_name).setLevel(
            logging.DEBUG if verbosity == "verbose" else logging.WARNING
        )
