# aisthetic_studio/engine/__init__.py
"""Generation engine: fan-out and sequential executors, targeted re-run, video poller."""

from .callbacks import ProgressCallback, Synthesize
from .fanout import FanOutExecutor, settle_job
from .poller import PollPhase, VideoPoller
from .rerun import JobRerunner
from .sequential import SequentialExecutor, progress_label

__all__ = [
    "FanOutExecutor",
    "SequentialExecutor",
    "JobRerunner",
    "VideoPoller",
    "PollPhase",
    "ProgressCallback",
    "Synthesize",
    "settle_job",
    "progress_label",
]
