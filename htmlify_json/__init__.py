"""JSON to semantic HTML renderer."""

import argparse
import logging
from pathlib import Path
from typing import Optional, Union

from htmlify_json.convert import convert_files
from htmlify_json.core.loader import load_json
from htmlify_json.core.models import OUTPUT_FORMATS, RenderOptions
from htmlify_json.renderers.html_renderer import JsonHtmlRenderer, render

__all__ = ["JsonHtmlRenderer", "RenderOptions", "main", "render"]

logger = logging.getLogger(__name__)


def _parse_header(text: str) -> tuple[str, int]:
    """parses a PATH=LEVEL header argument."""
    path, sep, level = text.rpartition("=")
    if not sep or not path:
        raise argparse.ArgumentTypeError(f"expected PATH=LEVEL, got {text!r}")
    try:
        return path, int(level)
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"heading level must be an integer, got {level!r}"
        ) from None


def _load_styles(path: Path) -> dict[str, str]:
    """loads a JSON object of style overrides."""
    styles = load_json(path)
    if not isinstance(styles, dict):
        raise ValueError(f"Styles file must contain a JSON object: {path}")
    return {str(key): str(value) for key, value in styles.items()}


def _build_options(args: argparse.Namespace) -> RenderOptions:
    """builds render options from parsed CLI arguments."""
    use_styles: Union[str, dict[str, str]] = "default"
    if args.no_styles:
        use_styles = "none"
    elif args.styles:
        use_styles = _load_styles(Path(args.styles))

    list_objects: Union[bool, list[str]] = False
    if args.list_objects is not None:
        # bare flag enables lists everywhere, names restrict them
        list_objects = args.list_objects or True

    return RenderOptions(
        headers=dict(args.header or []),
        indent=args.indent,
        initial_path=args.initial_path,
        use_styles=use_styles,
        list_objects=list_objects,
        format_keys=args.format_keys,
        style_location=args.style_location,
        output_format=args.output_format,
        header_preview=args.header_preview,
        last_segment_fallback=args.last_segment_fallback,
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="htmlify-json", description="Render JSON documents as semantic HTML"
    )
    parser.add_argument(
        "source",
        help="JSON file, directory of JSON files, or ZIP archive",
    )
    parser.add_argument(
        "destination",
        nargs="?",
        default=None,
        help="directory for .html files (default: print to stdout)",
    )
    parser.add_argument(
        "--header",
        action="append",
        type=_parse_header,
        metavar="PATH=LEVEL",
        help="render the property at PATH as an <hLEVEL> heading (repeatable)",
    )
    parser.add_argument(
        "--indent", type=int, default=2, help="spaces per nesting level (default: 2)"
    )
    parser.add_argument(
        "--initial-path", default="", help="path prefix of the root value"
    )
    styles = parser.add_mutually_exclusive_group()
    styles.add_argument("--no-styles", action="store_true", help="emit no styling")
    styles.add_argument(
        "--styles", metavar="FILE", help="JSON object of style overrides"
    )
    parser.add_argument(
        "--list-objects",
        nargs="*",
        metavar="KEY",
        default=None,
        help="render objects as lists (all objects, or only the named keys)",
    )
    parser.add_argument(
        "--format-keys",
        action="store_true",
        help="turn camelCase/snake_case keys into readable text",
    )
    parser.add_argument(
        "--style-location",
        choices=["inline", "class-based", "top"],
        default="inline",
        help="inline style attributes, or classes plus a <style> block",
    )
    parser.add_argument(
        "--output-format",
        choices=list(OUTPUT_FORMATS),
        default="minified",
        help="final formatting of the HTML (default: minified)",
    )
    parser.add_argument(
        "--header-preview",
        action="store_true",
        help="summarize objects and arrays inside their headings",
    )
    parser.add_argument(
        "--last-segment-fallback",
        action="store_true",
        help="also match headers by the bare property name",
    )
    parser.add_argument(
        "--document",
        action="store_true",
        help="wrap output in a complete HTML page",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="process files but don't write any output",
    )
    parser.add_argument(
        "--overwrite",
        action="store_true",
        help="replace existing .html files",
    )
    parser.add_argument(
        "--progress",
        action="store_true",
        help="show progress bar",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="suppress non-error output",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="enable debug logging",
    )
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """
    main entry point for htmlify-json CLI.

    Args:
        argv: command line arguments (defaults to sys.argv[1:])

    Returns:
        exit code (0 success, 1 partial failure, 2 fatal error)
    """
    args = _build_parser().parse_args(argv)

    # configures logging
    level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="[%(levelname)s] %(message)s",
    )

    # validates source path exists
    source_path = Path(args.source)
    if not source_path.exists():
        logger.error("Source not found: %s", args.source)
        return 2

    try:
        options = _build_options(args)
    except (OSError, ValueError) as e:
        logger.error("Invalid options: %s", e)
        return 2

    destination: Optional[Path] = (
        Path(args.destination) if args.destination is not None else None
    )

    try:
        return convert_files(
            source=source_path,
            destination=destination,
            options=options,
            document=args.document,
            dry_run=args.dry_run,
            overwrite=args.overwrite,
            quiet=args.quiet,
            progress=args.progress,
        )
    except Exception as e:  # pylint: disable=broad-exception-caught
        logger.error("Fatal error: %s", e)
        return 2
