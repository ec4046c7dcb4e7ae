"""HTML file exporter for rendered JSON documents."""

import html as html_lib
import logging
from pathlib import Path
from typing import Optional

from htmlify_json.core.models import JsonValue, RenderOptions
from htmlify_json.renderers.html_renderer import JsonHtmlRenderer

logger = logging.getLogger(__name__)


class HTMLExporter:
    """writes rendered JSON to .html files."""

    def __init__(
        self, options: Optional[RenderOptions] = None, document: bool = False
    ) -> None:
        self.renderer = JsonHtmlRenderer(options)
        self.document = document

    def output_path(self, name: str, destination: Path) -> Path:
        """returns the file an export of name would be written to."""
        return destination / f"{Path(name).stem}.html"

    def render(self, value: JsonValue, title: str = "") -> str:
        """renders value, wrapped in a full HTML page if document mode is on."""
        fragment = self.renderer.render(value)
        if not self.document:
            return fragment

        title_escaped = html_lib.escape(title)
        return f"""<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
    <title>{title_escaped}</title>
</head>
<body>
{fragment}
</body>
</html>"""

    def export(
        self,
        value: JsonValue,
        name: str,
        destination: Path,
        dry_run: bool = False,
        overwrite: bool = False,
    ) -> Optional[Path]:
        """
        exports a rendered JSON value to an HTML file.

        Args:
            value: JSON value to render
            name: source file name, used for the output name and page title
            destination: directory to write into
            dry_run: if True, don't write anything
            overwrite: if True, replace an existing file

        Returns:
            path written, or None if nothing was written
        """
        output_path = self.output_path(name, destination)

        if dry_run:
            logger.info("Would write to: %s", output_path)
            return None

        if output_path.exists() and not overwrite:
            logger.info("Skipping existing file: %s", output_path)
            return None

        content = self.render(value, title=Path(name).stem)

        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(content, encoding="utf-8")
        logger.debug("Wrote %s", output_path)
        return output_path
