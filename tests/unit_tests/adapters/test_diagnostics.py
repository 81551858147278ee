"""Unit tests for diagnostic sinks."""

from __future__ import annotations

import logging

import pytest

from plain_codec.adapters.diagnostics import LoggingSink, NullSink
from plain_codec.application.ports import DiagnosticSink


def test_sinks_satisfy_port() -> None:
    """Implement the diagnostic sink port."""
    assert isinstance(NullSink(), DiagnosticSink)
    assert isinstance(LoggingSink(), DiagnosticSink)


def test_null_sink_discards() -> None:
    """Accept notices without side effects."""
    NullSink().notice("dropped")


def test_logging_sink_logs_at_level(caplog: pytest.LogCaptureFixture) -> None:
    """Forward notices to the configured logger and level."""
    logger = logging.getLogger("plain_codec.tests")
    with caplog.at_level(logging.INFO, logger="plain_codec.tests"):
        LoggingSink(logger, level=logging.INFO).notice("invalid bytes seen")
    assert [r.getMessage() for r in caplog.records] == ["invalid bytes seen"]
    assert caplog.records[0].levelno == logging.INFO


def test_logging_sink_defaults_to_package_logger() -> None:
    """Default to the package logger at WARNING."""
    sink = LoggingSink()
    assert sink.logger.name == "plain_codec"
    assert sink.level == logging.WARNING
