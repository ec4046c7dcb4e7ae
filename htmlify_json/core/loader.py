"""Loader for JSON documents that keeps full numeric precision."""

from pathlib import Path
from typing import Any, BinaryIO

import ijson

from htmlify_json.core.models import JsonValue


def load_json(path: Path) -> JsonValue:
    """
    Load a complete JSON document from disk.

    Non-integer numbers are returned as ``Decimal`` and integers as ``int``,
    so values wider than a double survive until rendering.

    Args:
        path: path to a JSON file

    Returns:
        the decoded JSON value

    Raises:
        ValueError: if the file is empty or not valid JSON
    """
    with open(path, "rb") as f:
        return parse_json(f)


def parse_json(stream: BinaryIO) -> JsonValue:
    """decodes exactly one JSON document from a binary stream."""
    try:
        documents = ijson.items(stream, "")
        value: Any = next(documents)
    except StopIteration:
        raise ValueError("No JSON document found") from None
    except ijson.JSONError as e:
        raise ValueError(f"Invalid JSON: {e}") from e
    return value
