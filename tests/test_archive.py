import gzip
import zipfile
from pathlib import Path

import pytest

from ampexport.export.archive import check_extract_dir, extract_archive, gunzip_tree
from ampexport.export.errors import ExtractError

EVENTS = b'{"event_type": "session_start"}\n'


def _make_bundle(path: Path, members: dict[str, bytes]) -> Path:
    with zipfile.ZipFile(path, "w") as zf:
        for name, data in members.items():
            zf.writestr(name, data)
    return path


def test_extract_and_gunzip(tmp_path: Path) -> None:
    bundle = _make_bundle(
        tmp_path / "amplitude-export.zip",
        {
            "123456/123456_2024-12-01_0#0.json.gz": gzip.compress(EVENTS),
            "123456/123456_2024-12-01_1#0.json.gz": gzip.compress(EVENTS * 2),
        },
    )
    dest = tmp_path / "export"

    files = extract_archive(bundle, dest)
    assert len(files) == 2
    assert all(f.suffix == ".gz" for f in files)

    produced = gunzip_tree(dest)
    assert sorted(p.name for p in produced) == [
        "123456_2024-12-01_0#0.json",
        "123456_2024-12-01_1#0.json",
    ]
    assert (dest / "123456" / "123456_2024-12-01_0#0.json").read_bytes() == EVENTS
    assert not list(dest.rglob("*.gz"))


def test_extract_cleans_existing_directory(tmp_path: Path) -> None:
    dest = tmp_path / "export"
    dest.mkdir()
    (dest / "leftover.json").write_text("old")
    bundle = _make_bundle(tmp_path / "b.zip", {"a.json": b"{}"})

    extract_archive(bundle, dest)
    assert not (dest / "leftover.json").exists()
    assert (dest / "a.json").read_bytes() == b"{}"


def test_extract_keeps_existing_directory_when_not_cleaning(tmp_path: Path) -> None:
    dest = tmp_path / "export"
    dest.mkdir()
    (dest / "leftover.json").write_text("old")
    bundle = _make_bundle(tmp_path / "b.zip", {"a.json": b"{}"})

    extract_archive(bundle, dest, clean=False)
    assert (dest / "leftover.json").exists()


def test_extract_rejects_non_zip(tmp_path: Path) -> None:
    bogus = tmp_path / "amplitude-export.zip"
    bogus.write_bytes(b'{"error": "Invalid API key"}')
    with pytest.raises(ExtractError, match="not a zip"):
        extract_archive(bogus, tmp_path / "export")


def test_extract_rejects_path_traversal(tmp_path: Path) -> None:
    bundle = _make_bundle(tmp_path / "evil.zip", {"../escape.txt": b"x"})
    with pytest.raises(ExtractError, match="outside"):
        extract_archive(bundle, tmp_path / "export")
    assert not (tmp_path / "escape.txt").exists()


def test_gunzip_tree_corrupt_file(tmp_path: Path) -> None:
    (tmp_path / "broken.json.gz").write_bytes(b"not gzip at all")
    with pytest.raises(ExtractError):
        gunzip_tree(tmp_path)
    assert not (tmp_path / "broken.json").exists()


def test_gunzip_tree_empty(tmp_path: Path) -> None:
    assert gunzip_tree(tmp_path) == []


def test_extract_refuses_to_delete_archive_inside_dest(tmp_path: Path) -> None:
    dest = tmp_path / "export"
    dest.mkdir()
    bundle = _make_bundle(dest / "amplitude-export.zip", {"a.json": b"{}"})

    with pytest.raises(ExtractError, match="would delete the archive"):
        extract_archive(bundle, dest)
    assert bundle.exists()


def test_extract_refuses_working_directory(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.chdir(tmp_path)
    notes = tmp_path / "notes.txt"
    notes.write_text("keep me")
    (tmp_path / "downloads").mkdir()
    bundle = _make_bundle(tmp_path / "downloads" / "b.zip", {"a.json": b"{}"})

    for dest in (Path("."), tmp_path.parent):
        with pytest.raises(ExtractError, match="working directory"):
            extract_archive(bundle, dest)
    assert notes.read_text() == "keep me"


def test_check_extract_dir_allows_sibling(tmp_path: Path) -> None:
    check_extract_dir(tmp_path / "amplitude-export.zip", tmp_path / "export")


def test_extract_missing_archive_wrapped(tmp_path: Path) -> None:
    with pytest.raises(ExtractError) as excinfo:
        extract_archive(tmp_path / "gone.zip", tmp_path / "export")
    assert isinstance(excinfo.value.original_error, FileNotFoundError)
