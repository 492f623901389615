"""File utility functions."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import Final

logger: Final = logging.getLogger(__name__)


def ensure_directory_exists(directory: Path) -> None:
    """Create directory if it doesn't exist.

    Args:
        directory: Path to create
    """
    if not directory.exists():
        directory.mkdir(parents=True, exist_ok=True)
        logger.debug("Created directory: %s", directory)


def remove_directory(directory: Path) -> None:
    """Delete a directory tree if present.

    Args:
        directory: Path to remove
    """
    if directory.exists():
        logger.info("Cleaning up existing directory: %s", directory)
        shutil.rmtree(directory)
