"""tests for render options."""

import logging

import pytest

from htmlify_json.core.models import RenderOptions


def test_defaults() -> None:
    """RenderOptions has documented defaults."""
    options = RenderOptions()

    assert options.headers == {}
    assert options.indent == 2
    assert options.initial_path == ""
    assert options.use_styles == "default"
    assert options.list_objects is False
    assert options.format_keys is False
    assert options.style_location == "inline"
    assert options.output_format == "minified"
    assert options.header_preview is False
    assert options.last_segment_fallback is False


@pytest.mark.parametrize(("level", "expected"), [(9, 6), (7, 6), (0, 1), (-3, 1)])
def test_heading_levels_are_clamped(
    level: int, expected: int, caplog: pytest.LogCaptureFixture
) -> None:
    """out of range heading levels are clamped with a warning."""
    with caplog.at_level(logging.WARNING):
        options = RenderOptions(headers={"a": level})

    assert options.headers == {"a": expected}
    assert "clamped" in caplog.text


def test_valid_heading_levels_are_kept(caplog: pytest.LogCaptureFixture) -> None:
    """levels 1-6 pass through silently."""
    with caplog.at_level(logging.WARNING):
        options = RenderOptions(headers={f"k{n}": n for n in range(1, 7)})

    assert list(options.headers.values()) == [1, 2, 3, 4, 5, 6]
    assert caplog.text == ""


@pytest.mark.parametrize("level", ["2", 2.0, True, None])
def test_non_integer_heading_levels_rejected(level: object) -> None:
    """heading levels must be integers."""
    with pytest.raises(ValueError, match="Heading level"):
        RenderOptions(headers={"a": level})  # type: ignore[dict-item]


def test_top_is_alias_for_class_based() -> None:
    """'top' style location normalizes to class-based."""
    assert RenderOptions(style_location="top").style_location == "class-based"


@pytest.mark.parametrize(
    "kwargs",
    [
        {"style_location": "header"},
        {"output_format": "fancy"},
        {"use_styles": "bright"},
        {"use_styles": 3},
        {"indent": -1},
        {"indent": "2"},
        {"indent": True},
    ],
)
def test_invalid_values_rejected(kwargs: dict) -> None:
    """invalid option values raise ValueError."""
    with pytest.raises(ValueError):
        RenderOptions(**kwargs)


def test_style_overrides_coerced_to_strings() -> None:
    """style override mappings hold strings."""
    options = RenderOptions(use_styles={"key": "color: red;"})
    assert options.use_styles == {"key": "color: red;"}


def test_list_objects_names_become_list() -> None:
    """any iterable of names becomes a list of strings."""
    names: list = ["details", "status"]
    options = RenderOptions(list_objects=tuple(names))  # type: ignore[arg-type]
    assert options.list_objects == ["details", "status"]


@pytest.mark.parametrize(
    ("list_objects", "enabled"),
    [(False, False), (True, True), ([], False), (["a"], True)],
)
def test_lists_enabled(list_objects: object, enabled: bool) -> None:
    """lists_enabled reflects whether any object may render as a list."""
    options = RenderOptions(list_objects=list_objects)  # type: ignore[arg-type]
    assert options.lists_enabled is enabled


def test_from_mapping_accepts_camel_case() -> None:
    """from_mapping converts camelCase names."""
    options = RenderOptions.from_mapping(
        {
            "useStyles": "none",
            "listObjects": ["details"],
            "formatKeys": True,
            "styleLocation": "top",
            "outputFormat": "pretty",
            "initialPath": "root",
            "headers": {"root.a": 2},
        }
    )

    assert options.use_styles == "none"
    assert options.list_objects == ["details"]
    assert options.format_keys is True
    assert options.style_location == "class-based"
    assert options.output_format == "pretty"
    assert options.initial_path == "root"
    assert options.headers == {"root.a": 2}


def test_from_mapping_accepts_snake_case() -> None:
    """from_mapping also takes field names directly."""
    options = RenderOptions.from_mapping({"header_preview": True, "indent": 4})

    assert options.header_preview is True
    assert options.indent == 4


def test_from_mapping_none_gives_defaults() -> None:
    """an absent mapping gives default options."""
    assert RenderOptions.from_mapping(None) == RenderOptions()


def test_from_mapping_rejects_unknown_keys() -> None:
    """unknown option names are reported."""
    with pytest.raises(ValueError, match="Unknown render option: colour"):
        RenderOptions.from_mapping({"colour": "red"})


def test_list_objects_rejects_bare_string() -> None:
    """a single key name must be given as a list."""
    with pytest.raises(ValueError, match="list_objects"):
        RenderOptions(list_objects="items")  # type: ignore[arg-type]
