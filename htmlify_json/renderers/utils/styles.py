"""style resolution for rendered JSON markup."""

from typing import Union

DEFAULT_STYLES: dict[str, str] = {
    "container": "font-family: system-ui, sans-serif; line-height: 1.5; padding: 5px;",
    "key": "font-weight: bold; color: #000;",
    "value": "margin-left: 8px; color: #3b3b3b;",
    "number": "margin-left: 8px; color: #0F766E;",
    "boolean": "margin-left: 8px; color: #9333EA;",
    "null": "margin-left: 8px; color: #888; font-style: italic;",
    "heading": "margin: 16px 0 8px 0;",
    "list": "margin: 0; padding-left: 20px; line-height: 1.5;",
    "top-list": (
        "margin: 0; padding-left: 20px; list-style-type: '→'; "
        "list-style-position: outside; padding-left: 28px;"
    ),
    "circular": "margin-left: 8px; color: #DC2626;",
}

# list styles carrying a custom marker get an extra rule for their items
MARKER_LIST_RULES = {"top-list": "padding-left: 8px;"}

CLASS_PREFIX = "json-"


def merge_styles(use_styles: Union[str, dict[str, str]]) -> dict[str, str]:
    """
    resolves the style mode into a concrete style map.

    Args:
        use_styles: "none", "default", or a mapping of overrides

    Returns:
        mapping of style key to CSS declarations
    """
    if use_styles == "none":
        return {}
    if use_styles == "default":
        return dict(DEFAULT_STYLES)
    if isinstance(use_styles, dict):
        return {**DEFAULT_STYLES, **use_styles}
    return dict(DEFAULT_STYLES)


class StyleResolver:
    """renders style keys into inline style or class attributes."""

    def __init__(
        self,
        use_styles: Union[str, dict[str, str]] = "default",
        style_location: str = "inline",
    ) -> None:
        self.styles = merge_styles(use_styles)
        self.style_location = style_location

    @property
    def class_based(self) -> bool:
        """True when styles are emitted as classes plus a style block."""
        return self.style_location != "inline"

    def resolve(self, key: str) -> str:
        """
        returns the attribute for a style key, with a leading space.

        Args:
            key: semantic style key ("key", "number", "list", ...)

        Returns:
            ' style="..."' or ' class="json-..."', or "" when key has no style
        """
        declaration = self.styles.get(key)
        if not declaration:
            return ""

        if self.class_based:
            return f' class="{CLASS_PREFIX}{key}"'

        if key in MARKER_LIST_RULES:
            # writes the marker glyph as a CSS escape
            declaration = declaration.replace("'→'", "'\\2192'")
        return f' style="{declaration.replace(chr(34), "&quot;")}"'

    def style_block(self) -> str:
        """returns the <style> element for class-based output, or ""."""
        if not self.class_based or not self.styles:
            return ""

        rules = []
        for key, declaration in self.styles.items():
            rules.append(f".{CLASS_PREFIX}{key} {{ {declaration} }}")
            if key in MARKER_LIST_RULES:
                rules.append(
                    f".{CLASS_PREFIX}{key} > li {{ {MARKER_LIST_RULES[key]} }}"
                )

        return "<style>\n" + "\n".join(rules) + "\n</style>\n\n"
