"""key text formatting for display."""

import re

UPPERCASE_PATTERN = re.compile(r"(?<=.)([A-Z])")
WHITESPACE_PATTERN = re.compile(r"\s+")


def format_key(identifier: str) -> str:
    """
    converts a camelCase or snake_case identifier to readable text.

    Args:
        identifier: key as found in the JSON object

    Returns:
        text such as "Date Of Birth" for "date_of_birth"
    """
    words = []
    for word in identifier.split("_"):
        word = word[:1].upper() + word[1:]
        # splits embedded camelCase
        words.append(UPPERCASE_PATTERN.sub(r" \1", word))

    return WHITESPACE_PATTERN.sub(" ", " ".join(words)).strip()


class KeyFormatter:  # pylint: disable=too-few-public-methods
    """formats keys when enabled, otherwise passes them through."""

    def __init__(self, enabled: bool = False) -> None:
        self.enabled = enabled

    def format(self, key: str) -> str:
        """returns display text for key."""
        return format_key(key) if self.enabled else key
