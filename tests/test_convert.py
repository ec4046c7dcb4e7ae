"""tests for batch conversion."""

import json
import zipfile
from pathlib import Path
from typing import Any, Optional
from unittest.mock import patch

import pytest

from htmlify_json.convert import convert_files, discover_files
from htmlify_json.core.models import RenderOptions
from htmlify_json.exporters.html import HTMLExporter


def _write_json(path: Path, value: object) -> Path:
    path.write_text(json.dumps(value), encoding="utf-8")
    return path


def test_discover_single_json_file(tmp_path: Path) -> None:
    """discovers a single JSON file."""
    json_file = _write_json(tmp_path / "data.json", {"a": 1})

    assert discover_files(json_file) == [json_file]


def test_discover_directory_of_json_files(tmp_path: Path) -> None:
    """discovers JSON files in a directory, sorted by name."""
    _write_json(tmp_path / "b.json", {})
    _write_json(tmp_path / "a.json", {})
    (tmp_path / "readme.txt").write_text("ignore me", encoding="utf-8")

    files = discover_files(tmp_path)

    assert [f.name for f in files] == ["a.json", "b.json"]


def test_discover_zip_archive(tmp_path: Path) -> None:
    """extracts JSON members of a ZIP archive."""
    zip_path = tmp_path / "export.zip"
    with zipfile.ZipFile(zip_path, "w") as zf:
        zf.writestr("one.json", '{"id": 1}')
        zf.writestr("nested/two.json", '{"id": 2}')
        zf.writestr("readme.txt", "ignore me")
    extract_dir = tmp_path / "extracted"
    extract_dir.mkdir()

    files = discover_files(zip_path, extract_dir)

    assert [f.name for f in files] == ["one.json", "two.json"]
    assert all(f.parent == extract_dir for f in files)


def test_discover_ignores_other_files(tmp_path: Path) -> None:
    """non-JSON files yield nothing."""
    text_file = tmp_path / "notes.txt"
    text_file.write_text("x", encoding="utf-8")

    assert discover_files(text_file) == []
    assert discover_files(tmp_path) == []


def test_discover_nonexistent_source_raises(tmp_path: Path) -> None:
    """missing sources raise FileNotFoundError."""
    with pytest.raises(FileNotFoundError):
        discover_files(tmp_path / "missing.json")


def test_convert_directory_to_html_files(tmp_path: Path) -> None:
    """each JSON file becomes an .html file in the destination."""
    source = tmp_path / "src"
    source.mkdir()
    _write_json(source / "user.json", {"user": {"id": 1}})
    _write_json(source / "list.json", [1, 2])
    destination = tmp_path / "out"

    options = RenderOptions(headers={"user": 1}, use_styles="none")
    result = convert_files(source, destination, options=options, quiet=True)

    assert result == 0
    user_html = (destination / "user.html").read_text(encoding="utf-8")
    assert "<h1>user</h1>" in user_html
    assert "<li><span>2</span></li>" in (destination / "list.html").read_text(
        encoding="utf-8"
    )


def test_convert_continues_after_invalid_file(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """a broken file is reported and the rest still convert."""
    source = tmp_path / "src"
    source.mkdir()
    (source / "bad.json").write_text("{bad", encoding="utf-8")
    _write_json(source / "good.json", {"a": 1})
    destination = tmp_path / "out"

    result = convert_files(source, destination, quiet=True)

    assert result == 1
    assert (destination / "good.html").exists()
    assert not (destination / "bad.html").exists()
    assert "bad.json" in capsys.readouterr().err


def test_convert_prints_to_stdout_without_destination(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """without a destination the HTML goes to stdout."""
    source = _write_json(tmp_path / "data.json", {"a": 1})

    result = convert_files(
        source, None, options=RenderOptions(use_styles="none"), quiet=True
    )

    assert result == 0
    out = capsys.readouterr().out
    assert "<div><div><span>a:</span><span>1</span></div></div>" in out


def test_convert_document_mode(tmp_path: Path) -> None:
    """document mode writes full pages titled after the file."""
    source = _write_json(tmp_path / "report.json", {"a": 1})
    destination = tmp_path / "out"

    convert_files(source, destination, document=True, quiet=True)

    html = (destination / "report.html").read_text(encoding="utf-8")
    assert html.startswith("<!DOCTYPE html>")
    assert "<title>report</title>" in html


def test_convert_dry_run_writes_nothing(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """dry run renders without writing files or printing HTML."""
    source = _write_json(tmp_path / "data.json", {"a": 1})
    destination = tmp_path / "out"

    assert convert_files(source, destination, dry_run=True, quiet=True) == 0
    assert convert_files(source, None, dry_run=True, quiet=True) == 0

    assert not destination.exists()
    assert "<div" not in capsys.readouterr().out


def test_convert_keeps_existing_files(tmp_path: Path) -> None:
    """existing .html files are only replaced with overwrite."""
    source = _write_json(tmp_path / "data.json", {"a": 1})
    destination = tmp_path / "out"
    destination.mkdir()
    existing = destination / "data.html"
    existing.write_text("old", encoding="utf-8")

    convert_files(source, destination, quiet=True)
    assert existing.read_text(encoding="utf-8") == "old"

    convert_files(source, destination, overwrite=True, quiet=True)
    assert existing.read_text(encoding="utf-8") != "old"


def test_convert_zip_archive(tmp_path: Path) -> None:
    """files inside a ZIP archive are converted."""
    zip_path = tmp_path / "export.zip"
    with zipfile.ZipFile(zip_path, "w") as zf:
        zf.writestr("data.json", '{"a": 1}')
    destination = tmp_path / "out"

    assert convert_files(zip_path, destination, quiet=True) == 0
    assert (destination / "data.html").exists()


def test_convert_empty_directory_succeeds(tmp_path: Path) -> None:
    """nothing to convert is not an error."""
    assert convert_files(tmp_path, tmp_path / "out", quiet=True) == 0
    assert not (tmp_path / "out").exists()


def test_convert_continues_after_unexpected_error(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """any per-file exception is reported and the batch carries on."""
    source = tmp_path / "src"
    source.mkdir()
    _write_json(source / "broken.json", {"a": 1})
    _write_json(source / "ok.json", {"a": 1})
    destination = tmp_path / "out"
    original_export = HTMLExporter.export

    def export(
        self: HTMLExporter, value: Any, name: str, dest: Path, **kwargs: Any
    ) -> Optional[Path]:
        if name == "broken.json":
            raise RecursionError("maximum recursion depth exceeded")
        return original_export(self, value, name, dest, **kwargs)

    with patch.object(HTMLExporter, "export", export):
        result = convert_files(source, destination, quiet=True)

    assert result == 1
    assert (destination / "ok.html").exists()
    assert not (destination / "broken.html").exists()
    assert "broken.json" in capsys.readouterr().err


def test_convert_deeply_nested_file(tmp_path: Path) -> None:
    """very deep documents convert, truncated by the depth marker."""
    source = tmp_path / "src"
    source.mkdir()
    (source / "deep.json").write_text(
        '{"a": ' * 400 + "1" + "}" * 400, encoding="utf-8"
    )
    _write_json(source / "ok.json", {"a": 1})
    destination = tmp_path / "out"

    assert convert_files(source, destination, quiet=True) == 0
    assert "[Max Depth Exceeded]" in (destination / "deep.html").read_text(
        encoding="utf-8"
    )
    assert (destination / "ok.html").exists()
