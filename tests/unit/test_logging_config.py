# tests/unit/test_logging_config.py
"""Tests for stderr logging configuration."""

import json
import logging

import pytest

from aisthetic_studio.logging_config import JsonFormatter, configure_logging


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def test_single_handler_after_repeated_calls():
    configure_logging()
    configure_logging()
    assert len(logging.getLogger().handlers) == 1


@pytest.mark.parametrize(
    "verbosity, level",
    [("quiet", logging.WARNING), ("normal", logging.INFO), ("verbose", logging.DEBUG)],
)
def test_verbosity_levels(verbosity, level):
    configure_logging(verbosity)
    assert logging.getLogger().level == level


def test_noisy_loggers_quieted_unless_verbose():
    configure_logging("normal")
    assert logging.getLogger("httpx").level == logging.WARNING

    configure_logging("verbose")
    assert logging.getLogger("httpx").level == logging.DEBUG


def test_json_formatter():
    record = logging.LogRecord("aisthetic_studio.engine", logging.INFO, __file__, 1, "job %d done", (3,), None)

    data = json.loads(JsonFormatter().format(record))

    assert data["level"] == "INFO"
    assert data["logger"] == "aisthetic_studio.engine"
    assert data["msg"] == "job 3 done"
    assert "exc" not in data


def test_json_formatter_includes_job_id():
    record = logging.LogRecord("aisthetic_studio.engine.fanout", logging.WARNING, __file__, 1, "failed", (), None)
    record.job_id = 2

    data = json.loads(JsonFormatter().format(record))

    assert data["job"] == 2


@pytest.mark.asyncio
async def test_settled_job_records_carry_job_id(caplog):
    from aisthetic_studio.engine import settle_job
    from aisthetic_studio.models.jobs import Job, JobResult
    from aisthetic_studio.models.store import BatchStore

    store = BatchStore([Job(id=4, title="Hero", prompt="p")])

    async def synthesize(job):
        return JobResult(data=b"png", mime_type="image/png")

    with caplog.at_level(logging.INFO, logger="aisthetic_studio.engine.fanout"):
        await settle_job(store, 4, synthesize)

    assert [record.job_id for record in caplog.records if record.name.endswith("fanout")] == [4, 4]
