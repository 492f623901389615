"""Amplitude export CLI application.

This module provides the command-line interface for downloading an
Amplitude project export: the export itself, a dry URL preview, and
configuration utilities.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any, Final, Optional

import typer
from pydantic import ValidationError

from ampexport.export import (
    Credentials,
    ExportAPI,
    ExportAPIError,
    ExportRange,
    ExtractError,
    MissingCredentialsError,
    build_export_url,
    check_extract_dir,
    extract_archive,
    gunzip_tree,
)
from ampexport.settings import SAMPLE_CONFIG_YAML, ExportSettings

# ── CLI setup ────────────────────────────────────────────────────────────────
app = typer.Typer(help="Amplitude Export CLI", add_completion=False)
config_app = typer.Typer(help="Config helpers")
app.add_typer(config_app, name="config")

logger: Final = logging.getLogger(__name__)  # Will be "ampexport.cli"

EXIT_EXPORT_FAILED: Final = 1
EXIT_USAGE: Final = 2

# Options shared by the commands
CONFIG_OPTION = typer.Option(None, "--config", "-c", dir_okay=False, help="YAML settings file")
DEBUG_OPTION = typer.Option(False, "--debug", help="Enable debug logging")
START_OPTION = typer.Option(None, "--start", help="First hour exported (YYYYMMDDTHH)")
END_OPTION = typer.Option(None, "--end", help="Last hour exported (YYYYMMDDTHH)")
START_DATE_OPTION = typer.Option(
    None, "--start-date", help="First day exported (YYYY-MM-DD), from hour 00"
)
END_DATE_OPTION = typer.Option(
    None, "--end-date", help="Last day exported (YYYY-MM-DD), through hour 23"
)
OUTPUT_OPTION = typer.Option(None, "--output", "-o", help="Archive file to write")
EXTRACT_OPTION = typer.Option(
    None, "--extract", "-x", file_okay=False, help="Unpack the archive into this directory"
)
TIMEOUT_OPTION = typer.Option(None, "--timeout", help="Seconds to wait for the server")
REGION_OPTION = typer.Option(None, "--region", help="Project data residency: us or eu")
DST_ARGUMENT = typer.Argument(..., help="Output config YAML")
FORCE_OPTION = typer.Option(False, "--force", "-f", help="Overwrite an existing file")


def _setup_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    if debug:
        logging.getLogger().setLevel(logging.DEBUG)


def _fail(message: str, code: int) -> typer.Exit:
    typer.secho(message, fg=typer.colors.RED, err=True)
    return typer.Exit(code=code)


def _load_settings(config: Optional[Path], overrides: dict[str, Any]) -> ExportSettings:
    """Load settings and apply command-line overrides, re-validating the result."""
    try:
        settings = ExportSettings.load(config)
    except (FileNotFoundError, RuntimeError) as exc:
        raise _fail(str(exc), EXIT_USAGE) from exc

    updates = {k: v for k, v in overrides.items() if v is not None}
    if not updates:
        return settings
    try:
        return ExportSettings.model_validate({**settings.model_dump(), **updates})
    except ValidationError as err:
        raise _fail(f"Invalid options:\n{err}", EXIT_USAGE) from err


def _range_overrides(
    start: Optional[str],
    end: Optional[str],
    start_date: Optional[str],
    end_date: Optional[str],
) -> dict[str, Any]:
    overrides: dict[str, Any] = {"start": start, "end": end}
    if start_date or end_date:
        if not (start_date and end_date):
            raise _fail("--start-date and --end-date must be given together", EXIT_USAGE)
        try:
            day_range = ExportRange.from_dates(start_date, end_date)
        except ValueError as exc:
            raise _fail(f"Invalid date range: {exc}", EXIT_USAGE) from exc
        overrides.update(start=day_range.start, end=day_range.end)
    return overrides


def run_export(settings: ExportSettings) -> None:
    """Download the export described by ``settings``; exit non-zero on failure."""
    try:
        credentials = Credentials.from_env()
    except MissingCredentialsError as exc:
        raise _fail(exc.message, EXIT_USAGE) from exc

    if settings.extract_dir is not None:
        try:
            check_extract_dir(settings.output, settings.extract_dir)
        except ExtractError as exc:
            raise _fail(exc.message, EXIT_USAGE) from exc

    api = ExportAPI(credentials, endpoint=settings.export_url, timeout=settings.timeout)
    try:
        result = api.download(settings.export_range, settings.output)
    except ExportAPIError as exc:
        if exc.body is not None:
            typer.echo(f"Response body written to {settings.output}", err=True)
        raise _fail(f"Export failed: {exc}", EXIT_EXPORT_FAILED) from exc

    typer.echo(f"Export saved to {result.path} ({result.bytes_written} bytes)")

    if settings.extract_dir is not None:
        try:
            files = extract_archive(result.path, settings.extract_dir)
            unzipped = gunzip_tree(settings.extract_dir)
        except ExportAPIError as exc:
            raise _fail(f"Extraction failed: {exc}", EXIT_EXPORT_FAILED) from exc
        typer.echo(
            f"Extracted {len(files)} files to {settings.extract_dir}"
            f" ({len(unzipped)} decompressed)"
        )


@app.callback(invoke_without_command=True)
def main_callback(ctx: typer.Context, debug: bool = DEBUG_OPTION) -> None:
    """Download an Amplitude project export.

    Without a command, exports the configured range (or the built-in one)
    to amplitude-export.zip in the working directory.
    """
    _setup_logging(debug)
    if ctx.invoked_subcommand is None:
        run_export(_load_settings(None, {}))


@app.command()
def export(
    config: Optional[Path] = CONFIG_OPTION,
    start: Optional[str] = START_OPTION,
    end: Optional[str] = END_OPTION,
    start_date: Optional[str] = START_DATE_OPTION,
    end_date: Optional[str] = END_DATE_OPTION,
    output: Optional[Path] = OUTPUT_OPTION,
    extract: Optional[Path] = EXTRACT_OPTION,
    timeout: Optional[float] = TIMEOUT_OPTION,
    region: Optional[str] = REGION_OPTION,
    debug: bool = DEBUG_OPTION,
) -> None:
    """Export events for a time range to a local archive."""
    _setup_logging(debug)
    overrides = _range_overrides(start, end, start_date, end_date)
    overrides.update(output=output, extract_dir=extract, timeout=timeout, region=region)
    run_export(_load_settings(config, overrides))


@app.command()
def url(
    config: Optional[Path] = CONFIG_OPTION,
    start: Optional[str] = START_OPTION,
    end: Optional[str] = END_OPTION,
    region: Optional[str] = REGION_OPTION,
) -> None:
    """Print the request URL without contacting Amplitude."""
    settings = _load_settings(config, {"start": start, "end": end, "region": region})
    typer.echo(build_export_url(settings.export_url, settings.export_range))


# ───────────────────────── config sub-commands ───────────────────────────────
@config_app.command("validate")
def validate_config(file: Path):
    """Validate a YAML config file against the schema."""
    try:
        settings = ExportSettings.load(file)
    except (FileNotFoundError, RuntimeError) as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=EXIT_USAGE) from exc
    typer.echo(f"✅ Config valid ({settings.export_range}, {settings.export_range.hours} hours)")


@config_app.command("init")
def init_config(dst: Path = DST_ARGUMENT, force: bool = FORCE_OPTION):
    """Write a sample config file (credentials stay in the environment)."""
    if dst.exists() and not force:
        raise _fail(f"{dst} already exists; use --force to overwrite", EXIT_USAGE)
    dst.parent.mkdir(parents=True, exist_ok=True)
    dst.write_text(SAMPLE_CONFIG_YAML, encoding="utf-8")
    typer.secho(f"Config written to {dst}", fg=typer.colors.GREEN)


def main() -> None:
    """Console script entry point."""
    try:
        app()
    except KeyboardInterrupt:
        sys.exit(130)


# ───────────────────────── module entrypoint ────────────────────────────────
if __name__ == "__main__":
    main()
