from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

import pytest

from tests._fixtures.component_builder import ComponentDirBuilder


@pytest.fixture
def component_builder(tmp_path: Path) -> ComponentDirBuilder:
    """Provide a project with an empty src/components directory under tmp_path."""
    return ComponentDirBuilder(tmp_path)


@pytest.fixture(autouse=True)
def _reset_compdoc_logger() -> Iterator[None]:
    # configure_logging() detaches the hierarchy from root, which hides records from caplog.
    yield
    logger = logging.getLogger("compdoc")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
