"""Hour-granularity time ranges accepted by the Export API."""

from __future__ import annotations

import re
from datetime import UTC, date, datetime, timedelta
from typing import Final

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ampexport.constants import DEFAULT_END, DEFAULT_START, TIMESTAMP_FORMAT

_TIMESTAMP_RE: Final = re.compile(r"^\d{8}T\d{2}$")


def parse_timestamp(value: str) -> datetime:
    """Parse a ``YYYYMMDDTHH`` timestamp into a naive UTC datetime.

    Raises:
        ValueError: If the value is not a real hour in that format
    """
    if not _TIMESTAMP_RE.match(value):
        raise ValueError(f"timestamp {value!r} must use the YYYYMMDDTHH format")
    return datetime.strptime(value, TIMESTAMP_FORMAT)


def format_timestamp(dt: datetime) -> str:
    """Format a datetime as ``YYYYMMDDTHH``; aware values are converted to UTC first."""
    if dt.tzinfo is not None:
        dt = dt.astimezone(UTC)
    return dt.strftime(TIMESTAMP_FORMAT)


class ExportRange(BaseModel):
    """Inclusive start/end window, both bounds in ``YYYYMMDDTHH`` form.

    Amplitude interprets the bounds as UTC hours. The end hour is
    included in the export.
    """

    model_config = ConfigDict(frozen=True)

    start: str = Field(DEFAULT_START, description="First hour exported (YYYYMMDDTHH)")
    end: str = Field(DEFAULT_END, description="Last hour exported (YYYYMMDDTHH)")

    @field_validator("start", "end")
    @classmethod
    def check_format(cls, v: str) -> str:
        parse_timestamp(v)
        return v

    @model_validator(mode="after")
    def check_order(self) -> ExportRange:
        if parse_timestamp(self.start) > parse_timestamp(self.end):
            raise ValueError(f"start {self.start} is after end {self.end}")
        return self

    @classmethod
    def default(cls) -> ExportRange:
        """Return the built-in range (Dec 1 2024 00:00 - May 26 2025 23:59)."""
        return cls(start=DEFAULT_START, end=DEFAULT_END)

    @classmethod
    def from_dates(cls, start_date: date | str, end_date: date | str) -> ExportRange:
        """Build a range covering whole days.

        Args:
            start_date: First day, ``date`` or ``YYYY-MM-DD``
            end_date: Last day, ``date`` or ``YYYY-MM-DD``

        Returns:
            Range from ``start_date`` hour 00 to ``end_date`` hour 23
        """
        if isinstance(start_date, str):
            start_date = date.fromisoformat(start_date)
        if isinstance(end_date, str):
            end_date = date.fromisoformat(end_date)
        return cls(
            start=f"{start_date:%Y%m%d}T00",
            end=f"{end_date:%Y%m%d}T23",
        )

    @classmethod
    def from_datetimes(cls, start: datetime, end: datetime) -> ExportRange:
        """Build a range from two datetimes, truncated to the hour."""
        return cls(start=format_timestamp(start), end=format_timestamp(end))

    @property
    def start_dt(self) -> datetime:
        return parse_timestamp(self.start)

    @property
    def end_dt(self) -> datetime:
        return parse_timestamp(self.end)

    @property
    def hours(self) -> int:
        """Number of hours covered, both bounds included."""
        return int((self.end_dt - self.start_dt) / timedelta(hours=1)) + 1

    def as_params(self) -> dict[str, str]:
        """Query parameters in the order the API documents them."""
        return {"start": self.start, "end": self.end}

    def __str__(self) -> str:
        return f"{self.start}..{self.end}"
