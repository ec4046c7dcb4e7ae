"""array segmentation into header blocks and list runs."""

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any, Optional, Union

from htmlify_json.renderers.utils.paths import PathMatcher, strip_indices


@dataclass
class HeaderSegment:
    """array element whose header keys are promoted out of the list."""

    headers: list[tuple[str, Any, int]]  # (key, value, level)
    remaining: list[tuple[str, Any]]
    item_path: str
    item: Any = None


@dataclass
class ListSegment:
    """run of consecutive array elements rendered as one list."""

    items: list[tuple[Any, int]] = field(default_factory=list)  # (value, index)


Segment = Union[HeaderSegment, ListSegment]


def element_header_level(
    array_path: str, index: int, key: str, matcher: PathMatcher
) -> Optional[int]:
    """resolves an element key from its direct path, then its normalized form."""
    full_path = f"{array_path}[{index}].{key}"
    level = matcher.match(full_path)
    if level:
        return level
    return matcher.match(strip_indices(full_path))


def segment_array(
    items: Sequence[Any], path: str, matcher: PathMatcher
) -> list[Segment]:
    """
    partitions array elements into alternating header and list segments.

    Args:
        items: array elements
        path: path of the array itself
        matcher: header matcher

    Returns:
        ordered segments; a ListSegment always follows a HeaderSegment
    """
    segments: list[Segment] = []
    current: Optional[ListSegment] = None

    for index, item in enumerate(items):
        headers: list[tuple[str, Any, int]] = []
        remaining: list[tuple[str, Any]] = []
        if isinstance(item, dict):
            for key, value in item.items():
                level = element_header_level(path, index, str(key), matcher)
                if level:
                    headers.append((str(key), value, level))
                else:
                    remaining.append((str(key), value))

        if headers:
            segments.append(
                HeaderSegment(
                    headers=headers,
                    remaining=remaining,
                    item_path=f"{path}[{index}]",
                    item=item,
                )
            )
            # elements after a header start a fresh list
            current = ListSegment()
            segments.append(current)
            continue

        if current is None:
            current = ListSegment()
            segments.append(current)
        current.items.append((item, index))

    return segments
