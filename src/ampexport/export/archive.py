"""Unpacking of downloaded export bundles.

Amplitude returns a zip holding one directory per project, each with
hourly ``*.json.gz`` files. Extraction is optional and never looks
inside the event files.
"""

from __future__ import annotations

import gzip
import logging
import shutil
import zipfile
from pathlib import Path
from typing import Final

from ampexport.utils import ensure_directory_exists, remove_directory

from .errors import ExtractError

logger: Final = logging.getLogger(__name__)


def check_extract_dir(zip_path: Path, dest_dir: Path) -> None:
    """Refuse a clean extraction that would delete the bundle or the working directory.

    Raises:
        ExtractError: If ``dest_dir`` contains ``zip_path`` or the working directory
    """
    root = dest_dir.resolve()
    if Path.cwd().resolve().is_relative_to(root):
        raise ExtractError(f"Extract directory {dest_dir} contains the working directory")
    if zip_path.resolve().is_relative_to(root):
        raise ExtractError(f"Extract directory {dest_dir} would delete the archive {zip_path}")


def extract_archive(zip_path: Path, dest_dir: Path, clean: bool = True) -> list[Path]:
    """Extract every member of ``zip_path`` below ``dest_dir``.

    Args:
        zip_path: Downloaded export bundle
        dest_dir: Directory to extract into
        clean: Remove an existing ``dest_dir`` first

    Returns:
        Paths of the extracted files

    Raises:
        ExtractError: If ``dest_dir`` is unsafe to clean, the file is not a zip,
            a member escapes ``dest_dir``, or the filesystem fails
    """
    if clean:
        check_extract_dir(zip_path, dest_dir)
        remove_directory(dest_dir)
    ensure_directory_exists(dest_dir)
    root = dest_dir.resolve()

    extracted: list[Path] = []
    try:
        with zipfile.ZipFile(zip_path) as zf:
            for member in zf.infolist():
                target = (dest_dir / member.filename).resolve()
                if not target.is_relative_to(root):
                    raise ExtractError(f"Refusing to extract {member.filename!r} outside {dest_dir}")
                if member.is_dir():
                    ensure_directory_exists(target)
                    continue
                ensure_directory_exists(target.parent)
                with zf.open(member) as src, target.open("wb") as dst:
                    shutil.copyfileobj(src, dst)
                extracted.append(target)
    except zipfile.BadZipFile as exc:
        raise ExtractError(f"{zip_path} is not a zip archive: {exc}", exc) from exc
    except OSError as exc:
        raise ExtractError(f"Unable to extract {zip_path}: {exc}", exc) from exc

    logger.info("Export extracted to %s (%d files)", dest_dir, len(extracted))
    return extracted


def gunzip_tree(root: Path) -> list[Path]:
    """Decompress every ``*.gz`` file under ``root`` in place.

    Each ``name.gz`` becomes ``name`` and the compressed file is removed.

    Returns:
        Paths of the decompressed files

    Raises:
        ExtractError: If a ``.gz`` file is corrupt
    """
    produced: list[Path] = []
    for gz_path in sorted(root.rglob("*.gz")):
        if not gz_path.is_file():
            continue
        out_path = gz_path.with_suffix("")
        try:
            with gzip.open(gz_path, "rb") as src, out_path.open("wb") as dst:
                shutil.copyfileobj(src, dst)
        except (OSError, EOFError) as exc:
            out_path.unlink(missing_ok=True)
            raise ExtractError(f"Unable to decompress {gz_path}: {exc}", exc) from exc
        gz_path.unlink()
        produced.append(out_path)

    if produced:
        logger.info("Unzipped %d gzipped files", len(produced))
    return produced
