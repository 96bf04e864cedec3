"""Diagnostic logging for spelcpp runs.

Observations are written by the sinks; this module only carries progress
messages and per-unit parser diagnostics, which go to stderr and optionally
to a log file.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import IO, Any, MutableMapping, Optional, Tuple

_LOGGER_NAME = "spelcpp"

_CONSOLE_FORMAT = "[spelcpp] %(levelname)s %(message)s"
_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-scoped logger under the spelcpp hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


class UnitLogger(logging.LoggerAdapter):
    """Prefixes messages with the translation unit they concern."""

    def __init__(self, logger: logging.Logger, source: str) -> None:
        super().__init__(logger, {"unit": source})

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> Tuple[Any, MutableMapping[str, Any]]:
        return f"{self.extra['unit']}: {msg}", kwargs


def unit_logger(source: str, name: str = "unit") -> UnitLogger:
    return UnitLogger(get_logger(name), source)


def configure_logging(
    *,
    verbose: bool = False,
    log_file: Optional[Path] = None,
    stream: Optional[IO[str]] = None,
) -> logging.Logger:
    """Send spelcpp diagnostics to stderr (or ``stream``) and optionally ``log_file``.

    Verbose runs log at DEBUG, which includes every unit's effective
    arguments and parser diagnostics. The log file always receives DEBUG
    records so a quiet console run still leaves a full trace behind.
    """
    console_level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.propagate = False

    # Reset handlers so repeated invocations in one process do not duplicate output.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler(stream)
    console.setLevel(console_level)
    console.setFormatter(logging.Formatter(_CONSOLE_FORMAT))
    logger.addHandler(console)

    logger_level = console_level
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(_FILE_FORMAT))
        logger.addHandler(file_handler)
        logger_level = logging.DEBUG

    logger.setLevel(logger_level)
    return logger


__all__ = ["UnitLogger", "configure_logging", "get_logger", "unit_logger"]
