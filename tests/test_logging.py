"""Tests for spelcpp.logging."""

from __future__ import annotations

import io
import logging
from pathlib import Path

from spelcpp.logging import configure_logging, get_logger, unit_logger


def test_console_level_follows_verbose(spelcpp_logger: logging.Logger) -> None:
    stream = io.StringIO()
    configure_logging(stream=stream)

    get_logger("orchestrator").debug("hidden")
    get_logger("orchestrator").info("shown")

    assert stream.getvalue() == "[spelcpp] INFO shown\n"


def test_log_file_receives_debug_records(tmp_path: Path, spelcpp_logger: logging.Logger) -> None:
    stream = io.StringIO()
    log_file = tmp_path / "logs" / "spelcpp.log"
    configure_logging(log_file=log_file, stream=stream)

    unit_logger("/p/a.cpp", "orchestrator").debug("arguments: %s", "-DA")
    for handler in spelcpp_logger.handlers:
        handler.flush()

    assert stream.getvalue() == ""
    text = log_file.read_text(encoding="utf-8")
    assert "DEBUG spelcpp.orchestrator: /p/a.cpp: arguments: -DA" in text


def test_reconfiguring_replaces_handlers(tmp_path: Path, spelcpp_logger: logging.Logger) -> None:
    configure_logging(log_file=tmp_path / "first.log", stream=io.StringIO())
    configure_logging(stream=io.StringIO())

    assert len(spelcpp_logger.handlers) == 1
