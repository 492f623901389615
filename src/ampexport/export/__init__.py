"""Export package - holds the API client, range and credential models, and errors."""

from .api import ExportAPI, ExportResult, build_export_url
from .archive import check_extract_dir, extract_archive, gunzip_tree
from .credentials import Credentials
from .errors import (
    AuthenticationError,
    BadRangeError,
    ExportAPIError,
    ExtractError,
    MissingCredentialsError,
    NetworkError,
)
from .timerange import ExportRange

__all__ = [
    "AuthenticationError",
    "BadRangeError",
    "Credentials",
    "ExportAPI",
    "ExportAPIError",
    "ExportRange",
    "ExportResult",
    "ExtractError",
    "MissingCredentialsError",
    "NetworkError",
    "build_export_url",
    "check_extract_dir",
    "extract_archive",
    "gunzip_tree",
]
