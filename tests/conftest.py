from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

import pytest

from tests._fixtures.docs_tree import DocsTreeBuilder


@pytest.fixture
def tree_builder(tmp_path: Path) -> DocsTreeBuilder:
    """Provide a reusable tree builder rooted at the pytest tmp_path."""
    return DocsTreeBuilder(tmp_path)


@pytest.fixture(autouse=True)
def _restore_tagdocs_logger() -> Iterator[None]:
    """CLI runs reconfigure the package logger; undo that so caplog keeps working."""
    yield
    logger = logging.getLogger("tagdocs")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
