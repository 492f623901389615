"""Export settings loaded from an optional ampexport.yaml."""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import ClassVar, Literal

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, model_validator

from ampexport.constants import (
    CONFIG_ENV,
    DEFAULT_END,
    DEFAULT_OUTPUT,
    DEFAULT_START,
    EU_EXPORT_URL,
    EXPORT_URL,
)
from ampexport.export.timerange import ExportRange

# Load environment variables from .env file(s)
load_dotenv()


def _interpolate_env(content: str) -> str:
    return re.sub(r"\$\{(\w+)\}", lambda m: os.getenv(m.group(1), ""), content)


class ExportSettings(BaseModel):
    """Settings for one export run.

    Every field has a default, so an empty or absent config file yields
    the built-in range written to ``amplitude-export.zip``. Credentials
    are not part of the schema; they come from the environment only.
    """

    # Default search paths for configuration
    DEFAULT_CONFIG_PATHS: ClassVar[list[Path]] = [
        Path("ampexport.yaml"),
        Path("~/.config/ampexport/config.yaml").expanduser(),
    ]

    # Range
    start: str = Field(DEFAULT_START, description="First hour exported (YYYYMMDDTHH)")
    end: str = Field(DEFAULT_END, description="Last hour exported (YYYYMMDDTHH)")

    # Output
    output: Path = Field(Path(DEFAULT_OUTPUT), description="Archive file to write")
    extract_dir: Path | None = Field(
        None, description="If set, unpack the archive and gunzip its files here"
    )

    # Endpoint
    region: Literal["us", "eu"] = Field("us", description="Data residency of the project")
    endpoint: str | None = Field(None, description="Override the export endpoint URL")
    timeout: float | None = Field(
        None, gt=0, description="Seconds to wait for the server; null waits indefinitely"
    )

    # ---- validators ----
    @model_validator(mode="after")
    def check_range(self) -> ExportSettings:
        try:
            ExportRange(start=self.start, end=self.end)
        except ValidationError as err:
            raise ValueError("; ".join(e["msg"] for e in err.errors())) from err
        return self

    # ---- convenience ----
    @property
    def export_range(self) -> ExportRange:
        return ExportRange(start=self.start, end=self.end)

    @property
    def export_url(self) -> str:
        """Endpoint to call, honouring an explicit override before the region."""
        if self.endpoint:
            return self.endpoint
        return EU_EXPORT_URL if self.region == "eu" else EXPORT_URL

    @classmethod
    def load(cls, path: Path | None = None) -> ExportSettings:
        """Load settings from a YAML file.

        Args:
            path: Path to config file (optional, searches default locations if None)

        Returns:
            Validated ExportSettings object; defaults if no file is found

        Raises:
            FileNotFoundError: If an explicitly named config file is missing
            RuntimeError: If the config file cannot be parsed or is invalid
        """
        if path is None:
            # Check environment variable first
            env_path = os.environ.get(CONFIG_ENV)
            if env_path:
                path = Path(env_path)
                if not path.exists():
                    raise FileNotFoundError(f"Config file from {CONFIG_ENV} not found: {path}")
            else:
                for default_path in cls.DEFAULT_CONFIG_PATHS:
                    if default_path.exists():
                        path = default_path
                        break
                else:
                    return cls()
        elif not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        import yaml  # local import to avoid hard dep for callers

        try:
            raw = _interpolate_env(path.read_text())
            data = yaml.safe_load(raw) or {}
        except Exception as exc:
            raise RuntimeError(f"Unable to read config YAML: {exc}") from exc

        try:
            return cls.model_validate(data)
        except ValidationError as err:
            raise RuntimeError(f"Invalid configuration:\n{err}") from err
