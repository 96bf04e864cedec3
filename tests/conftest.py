from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

import pytest

from spelcpp.sinks import CollectingSink
from tests._fixtures.project_builder import ProjectBuilder


@pytest.fixture
def sink() -> CollectingSink:
    """Provide an in-memory observation sink."""
    return CollectingSink()


@pytest.fixture
def project_builder(tmp_path: Path) -> ProjectBuilder:
    """Provide a reusable project builder rooted at the pytest tmp_path."""
    return ProjectBuilder(tmp_path)


@pytest.fixture
def spelcpp_logger() -> Iterator[logging.Logger]:
    """Restore the spelcpp logger after a test reconfigures it."""
    logger = logging.getLogger("spelcpp")
    yield logger
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
