"""Export API client for Amplitude."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Final

import requests

from ampexport.constants import DOWNLOAD_CHUNK_SIZE, EXPORT_URL
from ampexport.utils import ensure_directory_exists

from .credentials import Credentials
from .errors import ExportAPIError, NetworkError
from .timerange import ExportRange

logger: Final = logging.getLogger(__name__)


def build_export_url(endpoint: str, export_range: ExportRange) -> str:
    """Return ``endpoint`` with the range as ``start`` and ``end`` query parameters."""
    return f"{endpoint}?start={export_range.start}&end={export_range.end}"


@dataclass(frozen=True)
class ExportResult:
    """Outcome of a completed download."""

    url: str
    path: Path
    status_code: int
    bytes_written: int
    content_type: str | None = None


class ExportAPI:
    """Amplitude Export API client.

    Issues exactly one authenticated GET per download and streams the
    response body to disk without transforming it. There is no retry,
    and no timeout unless one is passed in.
    """

    def __init__(
        self,
        credentials: Credentials,
        endpoint: str = EXPORT_URL,
        timeout: float | None = None,
        chunk_size: int = DOWNLOAD_CHUNK_SIZE,
    ) -> None:
        """Initialize the export client.

        Args:
            credentials: Project API key and secret key
            endpoint: Export endpoint URL
            timeout: Seconds to wait for the server, None blocks until done
            chunk_size: Bytes read per streamed chunk
        """
        self.credentials = credentials
        self.endpoint = endpoint
        self.timeout = timeout
        self.chunk_size = chunk_size

    def build_url(self, export_range: ExportRange) -> str:
        """Return the request URL for ``export_range``."""
        return build_export_url(self.endpoint, export_range)

    def download(self, export_range: ExportRange, output_path: Path) -> ExportResult:
        """Fetch the export bundle for ``export_range`` into ``output_path``.

        The response body is written byte-for-byte, replacing any existing
        file. Error bodies are written too, then reported as an exception.

        Args:
            export_range: Hours to export
            output_path: File to create or overwrite

        Returns:
            ExportResult describing the written file

        Raises:
            NetworkError: When DNS, TLS or the connection fails
            AuthenticationError: When the key/secret pair is rejected
            BadRangeError: When the range is refused
            ExportAPIError: For any other non-2xx status
        """
        url = self.build_url(export_range)
        ensure_directory_exists(output_path.parent)
        logger.info("Requesting Amplitude export %s", export_range)
        logger.debug("GET %s -> %s", url, output_path)

        written = 0
        try:
            with requests.get(
                url,
                auth=self.credentials.as_auth(),
                stream=True,
                timeout=self.timeout,
            ) as resp:
                with output_path.open("wb") as fh:
                    for chunk in resp.iter_content(chunk_size=self.chunk_size):
                        fh.write(chunk)
                        written += len(chunk)
                status_code = resp.status_code
                content_type = resp.headers.get("Content-Type")
        except requests.RequestException as exc:
            logger.warning("Export API network error: %s", exc)
            raise NetworkError(f"Network error: {exc}", exc) from exc

        if not 200 <= status_code < 300:
            body = output_path.read_bytes()
            err = ExportAPIError.from_status(status_code, body)
            logger.error(
                "Export API error: %s - %s (%d byte body written to %s)",
                status_code,
                err.message,
                written,
                output_path,
            )
            raise err

        logger.info("Export saved to %s (%d bytes)", output_path, written)
        return ExportResult(
            url=url,
            path=output_path,
            status_code=status_code,
            bytes_written=written,
            content_type=content_type,
        )
