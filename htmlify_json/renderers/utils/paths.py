"""header matching for JSON paths."""

import re
from typing import Optional

INDEX_PATTERN = re.compile(r"\[\d+\]")
BRACKET_PATTERN = re.compile(r"\[\d*\]")
DOTS_PATTERN = re.compile(r"\.{2,}")


def generalize_indices(path: str) -> str:
    """replaces every numeric index with empty brackets: a[0].b -> a[].b"""
    return INDEX_PATTERN.sub("[]", path)


def strip_indices(path: str) -> str:
    """removes bracket groups and collapses separators: a[0].b -> a.b"""
    return DOTS_PATTERN.sub(".", BRACKET_PATTERN.sub("", path)).strip(".")


def last_segment(path: str) -> str:
    """returns the final property name of a path: a.b[2] -> b"""
    return strip_indices(path).rsplit(".", 1)[-1]


def candidate_patterns(path: str, last_segment_fallback: bool = False) -> list[str]:
    """
    lists the header patterns to try for path, highest precedence first.

    Args:
        path: logical JSON path including array indices
        last_segment_fallback: also try the bare last property name

    Returns:
        exact path, index-generalized path, index-stripped path, and
        optionally the last segment
    """
    candidates = [path, generalize_indices(path), strip_indices(path)]
    if last_segment_fallback:
        candidates.append(last_segment(path))
    return candidates


def should_be_header(
    path: str, headers: dict[str, int], last_segment_fallback: bool = False
) -> Optional[int]:
    """
    resolves the heading level for path, or None if it is not a header.

    The last-segment fallback matches any property sharing a name with a
    header pattern, anywhere in the tree, so it is off unless requested.
    """
    if not headers:
        return None
    for candidate in candidate_patterns(path, last_segment_fallback):
        level = headers.get(candidate)
        if level:
            return level
    return None


class PathMatcher:  # pylint: disable=too-few-public-methods
    """binds a header map to the path lookup."""

    def __init__(
        self, headers: dict[str, int], last_segment_fallback: bool = False
    ) -> None:
        self.headers = headers
        self.last_segment_fallback = last_segment_fallback

    def match(self, path: str) -> Optional[int]:
        """returns the heading level for path, or None."""
        return should_be_header(path, self.headers, self.last_segment_fallback)
