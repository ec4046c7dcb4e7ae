"""HTML rendering for arbitrary JSON values."""

import dataclasses
import html as html_lib
import logging
import math
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Optional, Union

from htmlify_json.core.models import JsonValue, RenderOptions
from htmlify_json.renderers.segments import (
    HeaderSegment,
    ListSegment,
    segment_array,
)
from htmlify_json.renderers.utils.keys import KeyFormatter
from htmlify_json.renderers.utils.output import OutputPipeline
from htmlify_json.renderers.utils.paths import PathMatcher, last_segment
from htmlify_json.renderers.utils.styles import StyleResolver

logger = logging.getLogger(__name__)

CIRCULAR_MARKER = "[Circular Reference]"
DEPTH_MARKER = "[Max Depth Exceeded]"
EMPTY_OBJECT_MARKER = "<div>(empty object)</div>"
EMPTY_ARRAY_MARKER = "<div>(empty array)</div>"

# object/array nesting rendered before the depth marker takes over
MAX_DEPTH = 150


@dataclass
class _RenderState:
    """bookkeeping for one render call."""

    visited: set[int] = field(default_factory=set)
    depth: int = 0
    headings: int = 0


def _is_compound(value: Any) -> bool:
    return isinstance(value, (dict, list, tuple))


def _format_number(value: Union[int, float, Decimal]) -> str:
    """returns the literal text of a number."""
    if isinstance(value, float) and not math.isfinite(value):
        if math.isnan(value):
            return "NaN"
        return "Infinity" if value > 0 else "-Infinity"
    return str(value)


class JsonHtmlRenderer:  # pylint: disable=too-few-public-methods
    """renders JSON values to semantic HTML."""

    def __init__(self, options: Optional[RenderOptions] = None) -> None:
        self.options = options or RenderOptions()
        self.styles = StyleResolver(
            self.options.use_styles, self.options.style_location
        )
        self.keys = KeyFormatter(self.options.format_keys)
        self.matcher = PathMatcher(
            self.options.headers, self.options.last_segment_fallback
        )
        self.pipeline = OutputPipeline(self.styles, self.options.output_format)

    def _indent(self, level: int) -> str:
        return " " * (level * self.options.indent)

    def _key_text(self, key: str) -> str:
        return html_lib.escape(self.keys.format(key))

    def _format_primitive(self, value: Any) -> str:
        """renders a scalar as a styled span with escaped text."""
        if value is None:
            return f"<span{self.styles.resolve('null')}>null</span>"
        # bool subclasses int, so it is checked first
        if isinstance(value, bool):
            text = "true" if value else "false"
            return f"<span{self.styles.resolve('boolean')}>{text}</span>"
        if isinstance(value, (int, float, Decimal)):
            text = html_lib.escape(_format_number(value))
            return f"<span{self.styles.resolve('number')}>{text}</span>"
        text = html_lib.escape(str(value))
        return f"<span{self.styles.resolve('value')}>{text}</span>"

    def _marker(self, text: str) -> str:
        return f"<span{self.styles.resolve('circular')}>{text}</span>"

    def _preview(self, value: Any) -> str:
        """summarizes a compound value for display inside a heading."""
        summary = f"[{len(value)} items]" if not isinstance(value, dict) else "{...}"
        return f"<span{self.styles.resolve('value')}>{summary}</span>"

    def _should_render_as_list(self, path: str) -> bool:
        list_objects = self.options.list_objects
        if isinstance(list_objects, bool):
            return list_objects
        return last_segment(path) in list_objects

    def _convert_value(
        self, value: Any, path: str, level: int, state: _RenderState
    ) -> str:
        """renders any value, descending into objects and arrays once each."""
        if not _is_compound(value):
            return self._format_primitive(value)

        if id(value) in state.visited:
            return self._marker(CIRCULAR_MARKER)
        if state.depth >= MAX_DEPTH:
            logger.warning("Nesting deeper than %d levels at %s", MAX_DEPTH, path)
            return self._marker(DEPTH_MARKER)
        # stays marked for the rest of the call, so shared instances are reported too
        state.visited.add(id(value))

        state.depth += 1
        try:
            if isinstance(value, dict):
                return self._convert_object(value, path, level, state)
            return self._convert_array(value, path, level, state)
        finally:
            state.depth -= 1

    def _render_heading(  # pylint: disable=too-many-arguments
        self,
        key: str,
        value: Any,
        path: str,
        level: int,
        header_level: int,
        state: _RenderState,
    ) -> str:
        """renders a promoted key as a heading, followed by its subtree if any."""
        state.headings += 1
        pad = self._indent(level)
        tag = f"h{header_level}"
        opening = f"{pad}<{tag}{self.styles.resolve('heading')}>{self._key_text(key)}"

        if not _is_compound(value):
            return f"{opening}: {self._format_primitive(value)}</{tag}>"

        if self.options.header_preview:
            opening = f"{opening}: {self._preview(value)}"
        subtree = self._convert_value(value, path, level + 1, state)
        return f"{opening}</{tag}>\n{subtree}"

    def _labeled_block(self, key: str, value: Any, rendered: str, level: int) -> str:
        """wraps an already rendered value with its key in block layout."""
        pad = self._indent(level)
        inner = self._indent(level + 1)

        if not _is_compound(value):
            label = f"<span{self.styles.resolve('key')}>{self._key_text(key)}:</span>"
        else:
            label = f"<div{self.styles.resolve('key')}>{self._key_text(key)}</div>"
        # nested blocks carry their own indentation
        body = rendered.lstrip(" ")
        return f"{pad}<div>\n{inner}{label}\n{inner}{body}\n{pad}</div>"

    def _render_labeled(
        self, key: str, value: Any, path: str, level: int, state: _RenderState
    ) -> str:
        """renders a key/value pair in block layout."""
        rendered = self._convert_value(value, path, level + 1, state)
        return self._labeled_block(key, value, rendered, level)

    def _list_item(self, key: str, value: Any, rendered: str, level: int) -> str:
        """wraps an already rendered value with its key as a list item."""
        pad = self._indent(level)
        label = f"<span{self.styles.resolve('key')}>{self._key_text(key)}:</span>"

        if not _is_compound(value):
            return f"{pad}<li>{label} {rendered}</li>"
        return f"{pad}<li>{label}\n{rendered}\n{pad}</li>"

    def _wrap_list(self, items: list[str], level: int, style: str = "list") -> str:
        pad = self._indent(level)
        body = "\n".join(items)
        return f"{pad}<ul{self.styles.resolve(style)}>\n{body}\n{pad}</ul>"

    def _convert_object(
        self, obj: dict[Any, Any], path: str, level: int, state: _RenderState
    ) -> str:
        if not obj:
            return EMPTY_OBJECT_MARKER

        as_list = self._should_render_as_list(path)
        parts: list[str] = []
        list_items: list[str] = []

        for raw_key, value in obj.items():
            key = str(raw_key)
            child_path = f"{path}.{key}" if path else key
            header_level = self.matcher.match(child_path)
            logger.debug("Checking path: %s, heading: %s", child_path, header_level)

            if header_level:
                # headings never sit inside list markup
                if list_items:
                    parts.append(self._wrap_list(list_items, level))
                    list_items = []
                parts.append(
                    self._render_heading(
                        key, value, child_path, level, header_level, state
                    )
                )
            elif not as_list:
                parts.append(self._render_labeled(key, value, child_path, level, state))
            else:
                headings = state.headings
                rendered = self._convert_value(value, child_path, level + 2, state)
                if state.headings > headings:
                    # a subtree holding headings leaves the list as a block
                    if list_items:
                        parts.append(self._wrap_list(list_items, level))
                        list_items = []
                    parts.append(self._labeled_block(key, value, rendered, level))
                else:
                    list_items.append(
                        self._list_item(key, value, rendered, level + 1)
                    )

        if list_items:
            parts.append(self._wrap_list(list_items, level))
        return "\n".join(parts)

    def _convert_array(
        self, items: Any, path: str, level: int, state: _RenderState
    ) -> str:
        if not items:
            return EMPTY_ARRAY_MARKER

        # outer lists of nested structures get the distinct marker style
        list_style = (
            "top-list"
            if self.options.lists_enabled and any(_is_compound(i) for i in items)
            else "list"
        )

        parts: list[str] = []
        for segment in segment_array(items, path, self.matcher):
            if isinstance(segment, HeaderSegment):
                parts.append(self._render_header_segment(segment, level, state))
            elif segment.items:
                parts.append(
                    self._render_list_segment(segment, path, level, list_style, state)
                )
        return "\n".join(parts)

    def _render_header_segment(
        self, segment: HeaderSegment, level: int, state: _RenderState
    ) -> str:
        """renders the promoted keys of one element, then its other keys."""
        if id(segment.item) in state.visited:
            return f"{self._indent(level)}{self._marker(CIRCULAR_MARKER)}"
        state.visited.add(id(segment.item))

        parts = []
        for key, value, header_level in segment.headers:
            parts.append(
                self._render_heading(
                    key,
                    value,
                    f"{segment.item_path}.{key}",
                    level,
                    header_level,
                    state,
                )
            )
        for key, value in segment.remaining:
            parts.append(
                self._render_labeled(
                    key, value, f"{segment.item_path}.{key}", level, state
                )
            )
        return "\n".join(parts)

    def _render_list_segment(  # pylint: disable=too-many-arguments
        self,
        segment: ListSegment,
        path: str,
        level: int,
        list_style: str,
        state: _RenderState,
    ) -> str:
        pad = self._indent(level)
        inner = self._indent(level + 1)
        parts: list[str] = []
        items: list[str] = []
        for item, index in segment.items:
            headings = state.headings
            rendered = self._convert_value(item, f"{path}[{index}]", level + 1, state)
            if state.headings > headings:
                if items:
                    parts.append(self._wrap_list(items, level, list_style))
                    items = []
                parts.append(f"{pad}<div>\n{rendered}\n{pad}</div>")
            else:
                items.append(f"{inner}<li>{rendered.lstrip(' ')}</li>")

        if items:
            parts.append(self._wrap_list(items, level, list_style))
        return "\n".join(parts)

    def render(self, value: JsonValue) -> str:
        """
        renders a JSON value to an HTML fragment.

        Objects and arrays nested more than MAX_DEPTH levels deep render as
        a "[Max Depth Exceeded]" marker instead of their content.

        Args:
            value: JSON-compatible value (dict, list, str, number, bool, None)

        Returns:
            HTML string: optional <style> block plus one container <div>
        """
        state = _RenderState()
        body = self._convert_value(value, self.options.initial_path, 0, state)
        raw = (
            f"{self.styles.style_block()}"
            f"<div{self.styles.resolve('container')}>\n{body}\n</div>"
        )
        return self.pipeline.finalize(raw)


def render(
    value: JsonValue,
    options: Union[RenderOptions, dict[str, Any], None] = None,
    **overrides: Any,
) -> str:
    """
    renders a JSON value to HTML.

    Args:
        value: JSON-compatible value
        options: RenderOptions, or a mapping of option names (camelCase accepted)
        overrides: individual RenderOptions fields, applied on top of options

    Returns:
        HTML string
    """
    if isinstance(options, dict):
        options = RenderOptions.from_mapping({**options, **overrides})
    elif options is None:
        options = RenderOptions(**overrides)
    elif overrides:
        options = dataclasses.replace(options, **overrides)
    return JsonHtmlRenderer(options).render(value)
