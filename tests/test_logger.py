"""Unit tests for the structlog logging sink."""

from __future__ import annotations

import logging

import pytest
import structlog
from structlog.testing import capture_logs

from reformql.config import Settings
from reformql.logger import StructlogLogger, configure_logging
from reformql.querier import Querier
from reformql.dialects.sqlite import SQLITE3
from tests.fixtures import FakeDBTX, Person


@pytest.fixture()
def restore_logging():
    yield
    structlog.reset_defaults()
    reform_logger = logging.getLogger("reformql")
    reform_logger.handlers[:] = []
    reform_logger.propagate = True
    reform_logger.setLevel(logging.NOTSET)


def test_statement_events():
    with capture_logs() as logs:
        Querier(FakeDBTX(), SQLITE3, StructlogLogger()).delete(Person(id=1, name="x"))

    started, finished = logs
    assert started["event"] == "statement_started"
    assert started["query"] == 'DELETE FROM "people" WHERE "id" = ?'
    assert started["args"] == [1]
    assert finished["event"] == "statement_finished"
    assert finished["log_level"] == "debug"
    assert finished["duration_ms"] >= 0


def test_failed_statement_is_warning():
    fake = FakeDBTX(error=ValueError("bad"))
    with capture_logs() as logs:
        with pytest.raises(ValueError):
            Querier(fake, SQLITE3, StructlogLogger()).delete(Person(id=1, name="x"))

    assert logs[-1]["event"] == "statement_failed"
    assert logs[-1]["log_level"] == "warning"
    assert "bad" in logs[-1]["error"]


def test_args_can_be_hidden():
    with capture_logs() as logs:
        StructlogLogger(log_args=False).before("SELECT 1", ["secret"])
    assert "args" not in logs[0]


def test_configure_logging_json(restore_logging, capsys):
    configure_logging(Settings(log_level="DEBUG", log_format="json"))
    StructlogLogger().after("COMMIT", [], 0.002, None)

    err = capsys.readouterr().err
    assert '"event": "statement_finished"' in err
    assert '"query": "COMMIT"' in err
    assert logging.getLogger("reformql").level == logging.DEBUG


def test_configure_logging_filters_by_level(restore_logging, capsys):
    configure_logging(Settings(log_level="WARNING"))
    StructlogLogger().before("SELECT 1", [])
    assert capsys.readouterr().err == ""
