"""utility modules for the JSON renderer."""

from htmlify_json.renderers.utils.keys import KeyFormatter, format_key
from htmlify_json.renderers.utils.output import OutputPipeline
from htmlify_json.renderers.utils.paths import PathMatcher, should_be_header
from htmlify_json.renderers.utils.styles import DEFAULT_STYLES, StyleResolver

__all__ = [
    "DEFAULT_STYLES",
    "KeyFormatter",
    "OutputPipeline",
    "PathMatcher",
    "StyleResolver",
    "format_key",
    "should_be_header",
]
