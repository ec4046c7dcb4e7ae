"""Data models for JSON to HTML rendering."""

import logging
import re
from dataclasses import dataclass, field, fields
from decimal import Decimal
from typing import Any, Optional, Union

logger = logging.getLogger(__name__)

# recursive JSON value as produced by the loader (non-integer numbers as Decimal)
JsonValue = Union[
    None, bool, int, float, Decimal, str, dict[str, Any], list[Any], tuple[Any, ...]
]

STYLE_MODES = ("default", "none")
STYLE_LOCATIONS = ("inline", "class-based")
OUTPUT_FORMATS = ("pretty", "minified", "none")

# "top" is the historical name of the class-based location
_STYLE_LOCATION_ALIASES = {"top": "class-based"}

MIN_HEADING_LEVEL = 1
MAX_HEADING_LEVEL = 6


def _snake_case(name: str) -> str:
    """converts a camelCase option name to snake_case."""
    return re.sub(r"(?<!^)(?=[A-Z])", "_", name).lower()


@dataclass
class RenderOptions:  # pylint: disable=too-many-instance-attributes
    """Rendering configuration, validated once before traversal starts."""

    headers: dict[str, int] = field(default_factory=dict)
    indent: int = 2
    initial_path: str = ""
    use_styles: Union[str, dict[str, str]] = "default"
    list_objects: Union[bool, list[str]] = False
    format_keys: bool = False
    style_location: str = "inline"
    output_format: str = "minified"
    header_preview: bool = False
    last_segment_fallback: bool = False

    def __post_init__(self) -> None:
        self.headers = _normalize_headers(self.headers)

        if isinstance(self.indent, bool) or not isinstance(self.indent, int):
            raise ValueError(f"indent must be an integer, got {self.indent!r}")
        if self.indent < 0:
            raise ValueError(f"indent must be >= 0, got {self.indent}")

        if isinstance(self.use_styles, str):
            if self.use_styles not in STYLE_MODES:
                raise ValueError(
                    f"use_styles must be one of {STYLE_MODES} or a mapping, "
                    f"got {self.use_styles!r}"
                )
        elif isinstance(self.use_styles, dict):
            self.use_styles = {str(k): str(v) for k, v in self.use_styles.items()}
        else:
            raise ValueError(
                f"use_styles must be a string or mapping, got {self.use_styles!r}"
            )

        if isinstance(self.list_objects, str):
            raise ValueError(
                "list_objects must be a boolean or a list of key names, "
                f"got {self.list_objects!r}"
            )
        if not isinstance(self.list_objects, bool):
            self.list_objects = [str(name) for name in self.list_objects]

        location = _STYLE_LOCATION_ALIASES.get(
            self.style_location, self.style_location
        )
        if location not in STYLE_LOCATIONS:
            raise ValueError(
                f"style_location must be one of {STYLE_LOCATIONS}, "
                f"got {self.style_location!r}"
            )
        self.style_location = location

        if self.output_format not in OUTPUT_FORMATS:
            raise ValueError(
                f"output_format must be one of {OUTPUT_FORMATS}, "
                f"got {self.output_format!r}"
            )

    @property
    def lists_enabled(self) -> bool:
        """True when any object may render as a list."""
        return bool(self.list_objects)

    @classmethod
    def from_mapping(cls, options: Optional[dict[str, Any]]) -> "RenderOptions":
        """
        builds options from a plain mapping.

        Keys may be given in snake_case or in camelCase (``formatKeys``,
        ``styleLocation``, ...).

        Args:
            options: mapping of option names to values

        Returns:
            validated RenderOptions

        Raises:
            ValueError: if an option name is unknown or a value is invalid
        """
        known = {f.name for f in fields(cls)}
        kwargs: dict[str, Any] = {}
        for name, value in (options or {}).items():
            key = _snake_case(name)
            if key not in known:
                raise ValueError(f"Unknown render option: {name}")
            kwargs[key] = value
        return cls(**kwargs)


def _normalize_headers(headers: dict[str, Any]) -> dict[str, int]:
    """validates heading levels, clamping integers into the h1-h6 range."""
    normalized: dict[str, int] = {}
    for pattern, level in headers.items():
        if isinstance(level, bool) or not isinstance(level, int):
            raise ValueError(
                f"Heading level for {pattern!r} must be an integer, got {level!r}"
            )
        clamped = min(max(level, MIN_HEADING_LEVEL), MAX_HEADING_LEVEL)
        if clamped != level:
            logger.warning(
                "Heading level %d for %r clamped to %d", level, pattern, clamped
            )
        normalized[str(pattern)] = clamped
    return normalized
