# aisthetic_studio/notifications.py
"""
Notification side-channel.

Executors report human-readable outcomes here (per-item failures in the
sequential executor, upscale results). The CLI plugs in a console notifier.
"""

import logging
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

logger = logging.getLogger(__name__)


class Level(Enum):
    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"


@dataclass(frozen=True)
class Notification:
    message: str
    level: Level


class Notifier:
    """Default notifier: writes notifications to the log and keeps the most recent ones."""

    def __init__(
        self, sink: Callable[[Notification], None] | None = None, history_size: int = 100
    ) -> None:
        self._sink = sink
        self.history: deque[Notification] = deque(maxlen=history_size)

    def notify(self, message: str, level: Level = Level.INFO) -> None:
        notification = Notification(message=message, level=level)
        self.history.append(notification)
        if level == Level.ERROR:
            logger.warning(message)
        else:
            logger.info(message)
        if self._sink is not None:
            self._sink(notification)

    def success(self, message: str) -> None:
        self.notify(message, Level.SUCCESS)

    def error(self, message: str) -> None:
        self.notify(message, Level.ERROR)

    def info(self, message: str) -> None:
        self.notify(message, Level.INFO)
