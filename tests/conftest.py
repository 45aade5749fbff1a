"""Shared fixtures for folder consolidator tests."""

import logging
from pathlib import Path
from typing import List

import pytest

from folder_consolidator.logging_config import LOGGER_NAME
from folder_consolidator.models.file_ref import FileRef


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Undo handlers installed by configure_logging during a test."""
    yield
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


def make_file(path: Path, content: str = "data") -> Path:
    """Create a file (and its parents) with text content."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    return path


def refs(*paths: Path) -> List[FileRef]:
    return [FileRef.from_path(p) for p in paths]


@pytest.fixture
def scenario_tree(tmp_path):
    """root.txt at the top, photo.jpg in both sub/ and sub2/."""
    root = tmp_path / "target"
    make_file(root / "root.txt", "root")
    make_file(root / "sub" / "photo.jpg", "first photo")
    make_file(root / "sub2" / "photo.jpg", "second photo")
    return root
