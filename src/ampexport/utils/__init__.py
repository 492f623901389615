"""Common utility functions for the ampexport package."""

from ampexport.utils.file import ensure_directory_exists, remove_directory

__all__ = [
    "ensure_directory_exists",
    "remove_directory",
]
