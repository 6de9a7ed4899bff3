from __future__ import annotations

"""
Unit tests for the Console Sink (stdlib logging pass-through).
"""

import logging

import pytest

from prettylogger.core.sinks.console import ConsoleLogSink, to_logging_level
from prettylogger.domain.models import Priority


@pytest.mark.parametrize(
    "priority, level",
    [
        (Priority.VERBOSE, logging.DEBUG),
        (Priority.DEBUG, logging.DEBUG),
        (Priority.INFO, logging.INFO),
        (Priority.WARN, logging.WARNING),
        (Priority.ERROR, logging.ERROR),
        (Priority.ASSERT, logging.CRITICAL),
        (0, logging.DEBUG),
        (99, logging.CRITICAL),
    ],
)
def test_priority_mapping(priority, level):
    assert to_logging_level(priority) == level


def test_entries_go_to_tag_logger(caplog):
    sink = ConsoleLogSink()

    with caplog.at_level(logging.DEBUG, logger="pretty"):
        sink.log(Priority.WARN, "PRETTY_LOGGER-Net", "block text")

    record = caplog.records[-1]
    assert record.name == "pretty.PRETTY_LOGGER-Net"
    assert record.levelno == logging.WARNING
    assert record.getMessage() == "block text"


def test_missing_tag_uses_namespace_logger(caplog):
    sink = ConsoleLogSink(namespace="custom")

    with caplog.at_level(logging.DEBUG, logger="custom"):
        sink.log(Priority.INFO, None, "text")

    assert caplog.records[-1].name == "custom"


def test_failures_are_contained(monkeypatch, caplog):
    sink = ConsoleLogSink()

    def boom(tag):
        raise RuntimeError("no logger")

    monkeypatch.setattr(sink, "logger_for", boom)

    with caplog.at_level(logging.ERROR, logger="prettylogger"):
        sink.log(Priority.INFO, "x", "text")

    assert any("Console sink failed" in r.getMessage() for r in caplog.records)
