"""Batch conversion of JSON files to HTML."""

import tempfile
import zipfile
from pathlib import Path
from typing import Optional

from htmlify_json.core.loader import load_json
from htmlify_json.core.models import RenderOptions
from htmlify_json.exporters.html import HTMLExporter
from htmlify_json.progress import ProgressHandler


def discover_files(source: Path, extract_dir: Optional[Path] = None) -> list[Path]:
    """
    discovers JSON files from source path.

    Args:
        source: path to JSON file, directory, or ZIP archive
        extract_dir: where to unpack ZIP members (a new temp dir if None)

    Returns:
        list of paths to JSON files

    Raises:
        FileNotFoundError: if source doesn't exist
    """
    if not source.exists():
        raise FileNotFoundError(f"Source not found: {source}")

    if source.is_file():
        if source.suffix == ".zip":
            return _extract_zip(source, extract_dir)
        if source.suffix == ".json":
            return [source]
        return []

    if source.is_dir():
        return sorted(source.glob("*.json"))

    return []


def _extract_zip(zip_path: Path, extract_dir: Optional[Path]) -> list[Path]:
    """extracts JSON files from ZIP archive into extract_dir."""
    target_dir = extract_dir or Path(tempfile.mkdtemp(prefix="htmlify_json_"))
    with zipfile.ZipFile(zip_path, "r") as zf:
        for name in zf.namelist():
            if name.endswith(".json"):
                # uses only the member's file name, preventing path traversal
                target_path = target_dir / Path(name).name
                target_path.write_bytes(zf.read(name))

    return sorted(target_dir.glob("*.json"))


def convert_files(  # pylint: disable=too-many-arguments
    source: Path,
    destination: Optional[Path] = None,
    options: Optional[RenderOptions] = None,
    document: bool = False,
    dry_run: bool = False,
    overwrite: bool = False,
    quiet: bool = False,
    progress: bool = False,
) -> int:
    """
    renders every JSON file found in source.

    Args:
        source: path to JSON file, directory, or ZIP archive
        destination: directory for .html files; None prints HTML to stdout
        options: rendering options
        document: if True, wrap each fragment in a full HTML page
        dry_run: if True, don't write any files
        overwrite: if True, replace existing .html files
        quiet: if True, suppress non-error output
        progress: if True, show progress bar

    Returns:
        exit code (0 success, 1 partial failure)
    """
    exporter = HTMLExporter(options, document=document)

    with ProgressHandler(quiet=quiet, show_progress=progress) as handler:
        with tempfile.TemporaryDirectory(prefix="htmlify_json_") as temp_dir:
            handler.start_discovery()

            files = discover_files(source, Path(temp_dir))
            if not files:
                handler.log_info(f"No JSON files found in {source}")
                return 0

            handler.log_info(f"Found {len(files)} JSON file(s) to render")
            handler.set_total(len(files))

            processed = 0
            failed = 0
            for file_path in files:
                if _convert_file(
                    file_path, exporter, destination, dry_run, overwrite, handler
                ):
                    processed += 1
                else:
                    failed += 1

        handler.finish(processed, failed)

    return 1 if failed else 0


def _convert_file(  # pylint: disable=too-many-arguments
    file_path: Path,
    exporter: HTMLExporter,
    destination: Optional[Path],
    dry_run: bool,
    overwrite: bool,
    handler: ProgressHandler,
) -> bool:
    """renders one file; returns False (after reporting) if it fails."""
    try:
        value = load_json(file_path)

        if destination is None:
            if not dry_run:
                print(exporter.render(value, title=file_path.stem))
        else:
            exporter.export(
                value,
                file_path.name,
                destination,
                dry_run=dry_run,
                overwrite=overwrite,
            )

        handler.update(file_path.name)
        return True

    except Exception as e:  # pylint: disable=broad-exception-caught
        handler.log_error(f"Failed: {file_path.name}: {e}")
        handler.update(file_path.name)
        return False
