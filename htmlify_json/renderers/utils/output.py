"""post-processing and formatting of assembled HTML."""

import re

from htmlify_json.renderers.utils.styles import StyleResolver

EMPTY_LIST_PATTERN = re.compile(r"<ul[^>]*>\s*</ul>")
BETWEEN_TAGS_PATTERN = re.compile(r">\s+<")
ADJACENT_TAGS_PATTERN = re.compile(r">\s*<")
SPACE_RUN_PATTERN = re.compile(r"\s{2,}")
NEWLINE_PATTERN = re.compile(r"[\n\r]")
TAG_PATTERN = re.compile(r"<(/?)([a-zA-Z][\w-]*)[^>]*>")
VOID_TAGS = frozenset({"br", "hr", "img", "input", "link", "meta"})

PRETTY_INDENT = "  "


def remove_empty_lists(html: str) -> str:
    """strips <ul> elements containing only whitespace, until none remain."""
    prev = ""
    while prev != html:
        prev = html
        html = EMPTY_LIST_PATTERN.sub("", html)
    return html


def minify(html: str) -> str:
    """collapses whitespace between tags and removes newlines."""
    html = BETWEEN_TAGS_PATTERN.sub("><", html)
    html = SPACE_RUN_PATTERN.sub(" ", html)
    return NEWLINE_PATTERN.sub("", html).strip()


def _tag_balance(line: str) -> int:
    """returns opened minus closed non-void elements in line."""
    balance = 0
    for match in TAG_PATTERN.finditer(line):
        if match.group(2).lower() in VOID_TAGS:
            continue
        balance += -1 if match.group(1) else 1
    return balance


def pretty_print(html: str) -> str:
    """
    puts every tag pair on its own line, indented by nesting depth.

    A line that closes more than it opens (a standalone closing tag) is
    dedented before it is written; a line that opens more than it closes
    (a standalone opening tag) indents the lines after it.

    Args:
        html: HTML string

    Returns:
        indented HTML with two spaces per nesting level
    """
    depth = 0
    lines = []
    for raw_line in ADJACENT_TAGS_PATTERN.sub(">\n<", html).split("\n"):
        line = raw_line.strip()
        if not line:
            continue
        balance = _tag_balance(line)
        if balance < 0:
            depth = max(0, depth + balance)
        lines.append(PRETTY_INDENT * depth + line)
        if balance > 0:
            depth += balance
    return "\n".join(lines)


class OutputPipeline:  # pylint: disable=too-few-public-methods
    """cleans up rendered markup and applies the output format."""

    def __init__(self, resolver: StyleResolver, output_format: str = "minified"):
        self.resolver = resolver
        self.output_format = output_format

    def _promote_outer_lists(self, html: str) -> str:
        """uses the outer-list style for keyed lists whose first item is a list."""
        list_attr = self.resolver.resolve("list")
        top_list_attr = self.resolver.resolve("top-list")
        if not list_attr or list_attr == top_list_attr:
            return html

        pattern = re.compile(
            r"(<li><span"
            + re.escape(self.resolver.resolve("key"))
            + r">[^<]*</span>\s*<ul)"
            + re.escape(list_attr)
            + r">(?=\s*<li>\s*<ul)"
        )
        return pattern.sub(lambda m: m.group(1) + top_list_attr + ">", html)

    def finalize(self, html: str) -> str:
        """
        applies structural cleanup, then the configured formatting.

        Args:
            html: raw assembled HTML

        Returns:
            final HTML string
        """
        html = self._promote_outer_lists(html)
        html = remove_empty_lists(html)

        if self.output_format == "minified":
            return minify(html)
        if self.output_format == "pretty":
            return pretty_print(html)
        return html
