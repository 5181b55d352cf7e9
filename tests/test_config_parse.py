import json
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from textoverlay.components.config import (
    default_config,
    load_config,
    merge_configs,
    parse_overlays,
    validate_overlays,
)
from textoverlay.components.config.parse import parse_overlay, snake_case
from textoverlay.components.fonts import FontResolver
from textoverlay.exceptions import (
    InvalidFontSizeError,
    InvalidTimingError,
    UnresolvableFontError,
    ValidationError,
)
from textoverlay.models import Position, TextOverlay


def test_load_config_reads_yaml(tmp_path):
    path = tmp_path / "overlays.yaml"
    path.write_text(
        "text_overlays:\n"
        "  - text: Hello\n"
        "    start_time: 1\n"
        "    end_time: 3\n",
        encoding="utf-8",
    )
    assert load_config(str(path)) == {
        "text_overlays": [{"text": "Hello", "start_time": 1, "end_time": 3}]
    }


def test_load_config_reads_json(tmp_path):
    path = tmp_path / "overlays.json"
    data = {"textOverlays": [{"text": "Hi", "startTime": 0, "endTime": 2}]}
    path.write_text(json.dumps(data), encoding="utf-8")
    assert load_config(str(path)) == data


def test_load_config_reports_syntax_error_position(tmp_path):
    path = tmp_path / "broken.yaml"
    path.write_text("text_overlays:\n  - text: [unclosed\n", encoding="utf-8")
    with pytest.raises(ValidationError) as excinfo:
        load_config(str(path))
    assert excinfo.value.line_number is not None
    assert "Line:" in str(excinfo.value)


def test_load_config_missing_file(tmp_path):
    with pytest.raises(ValidationError, match="not found"):
        load_config(str(tmp_path / "missing.yaml"))


def test_load_config_rejects_non_mapping_root(tmp_path):
    path = tmp_path / "list.yaml"
    path.write_text("- 1\n- 2\n", encoding="utf-8")
    with pytest.raises(ValidationError, match="mapping"):
        load_config(str(path))


def test_snake_case():
    assert snake_case("fontSize") == "font_size"
    assert snake_case("offsetX") == "offset_x"
    assert snake_case("font_size") == "font_size"


def test_parse_overlays_accepts_camel_case():
    overlays = parse_overlays(
        {
            "textOverlays": [
                {
                    "text": "Hello\\nWorld",
                    "startTime": 1,
                    "endTime": 3,
                    "fontSize": 6,
                    "fontFamily": "cookie",
                    "textAlign": "Left",
                    "textShadow": {"enabled": True, "offsetX": 4},
                    "position": {"x": "10%", "y": 300},
                }
            ]
        }
    )
    overlay = overlays[0]
    assert overlay.text == "Hello\nWorld"
    assert overlay.font_size == 6
    assert overlay.font_family == "cookie"
    assert overlay.text_align == "left"
    assert overlay.text_shadow.enabled is True
    assert overlay.text_shadow.offset_x == 4
    assert overlay.text_shadow.offset_y == 2
    assert overlay.position == Position(x="10%", y=300)


def test_parse_overlays_merges_defaults_under_each_entry():
    overlays = parse_overlays(
        {
            "defaults": {
                "font_color": "yellow",
                "text_outline": {"enabled": True, "width": 4},
            },
            "text_overlays": [
                {"text": "A", "start_time": 0, "end_time": 1},
                {
                    "text": "B",
                    "start_time": 1,
                    "end_time": 2,
                    "font_color": "red",
                    "text_outline": {"color": "blue"},
                },
            ],
        }
    )
    first, second = overlays
    assert first.font_color == "yellow"
    assert first.text_outline.width == 4
    assert second.font_color == "red"
    assert second.text_outline.enabled is True
    assert second.text_outline.color == "blue"
    assert second.text_outline.width == 4


def test_parse_overlay_preset_position_and_elements():
    overlay = parse_overlay(
        {
            "text": "x",
            "start_time": 0,
            "end_time": 4,
            "position": " Bottom-Center ",
            "text_elements": [{"text": "a", "line": 1, "fontColor": "red"}],
        }
    )
    assert overlay.position == "bottom-center"
    assert overlay.text_elements[0].line == 1
    assert overlay.text_elements[0].font_color == "red"


@pytest.mark.parametrize(
    "raw, message",
    [
        ({"start_time": 0, "end_time": 1}, "missing 'text'"),
        ({"text": "a", "start_time": "soon", "end_time": 1}, "must be a number"),
        ({"text": "a", "start_time": 0, "end_time": 1, "text_align": "justify"}, "text_align"),
        ({"text": "a", "start_time": 0, "end_time": 1, "text_box": {"radius": 3}}, "Unknown keys"),
    ],
)
def test_parse_overlay_errors(raw, message):
    with pytest.raises(ValidationError, match=message):
        parse_overlay(raw, index=2)


def test_parse_overlays_requires_list():
    with pytest.raises(ValidationError):
        parse_overlays({})
    with pytest.raises(ValidationError):
        parse_overlays({"text_overlays": {"text": "a"}})


def test_merge_configs_is_recursive():
    base = {"a": {"b": 1, "c": 2}, "d": 1}
    assert merge_configs(base, {"a": {"c": 3}}) == {"a": {"b": 1, "c": 3}, "d": 1}
    assert base == {"a": {"b": 1, "c": 2}, "d": 1}


def test_default_config_parses():
    overlays = parse_overlays(default_config())
    assert [o.text for o in overlays][0] == "Hello World,"
    assert len(overlays) == 7
    assert all(o.animation.enabled for o in overlays)


@pytest.fixture
def resolver(tmp_path):
    (tmp_path / "DMSerifDisplay-Regular.ttf").write_bytes(b"")
    return FontResolver(tmp_path)


def test_validate_rejects_empty_list(resolver):
    with pytest.raises(ValidationError, match="No text overlays"):
        validate_overlays([], resolver)


def test_validate_rejects_inverted_timing(resolver):
    overlays = [
        TextOverlay(text="ok", start_time=0, end_time=1),
        TextOverlay(text="bad", start_time=3, end_time=2),
    ]
    with pytest.raises(InvalidTimingError) as excinfo:
        validate_overlays(overlays, resolver)
    assert excinfo.value.overlay_index == 1
    assert "Text overlay 2" in str(excinfo.value)


def test_validate_rejects_non_positive_font_size(resolver):
    with pytest.raises(InvalidFontSizeError):
        validate_overlays([TextOverlay(text="a", start_time=0, end_time=1, font_size=0)], resolver)


def test_validate_checks_font_before_timing(resolver):
    overlay = TextOverlay(text="a", start_time=2, end_time=1, font_family="comic-sans")
    with pytest.raises(UnresolvableFontError) as excinfo:
        validate_overlays([overlay], resolver)
    assert "dm-serif-display-regular" in excinfo.value.available


def test_validate_rejects_empty_text(resolver):
    with pytest.raises(ValidationError, match="empty text"):
        validate_overlays([TextOverlay(text=" <br> ", start_time=0, end_time=1)], resolver)


def test_nested_style_values_are_coerced():
    overlay = parse_overlays(
        {
            "text_overlays": [
                {
                    "text": "Hi",
                    "start_time": 0,
                    "end_time": 2,
                    "font_size": "5",
                    "text_outline": {"enabled": "false", "width": "3"},
                    "text_box": {"enabled": "yes", "padding": "12", "color": "black@0.4"},
                    "animation": {"enabled": True, "type": "fade-in", "duration": "0.5", "delay": "1"},
                    "text_elements": [
                        {"text": "a", "textShadow": {"enabled": 1, "offsetX": "4"}},
                    ],
                }
            ]
        }
    )[0]
    assert overlay.font_size == 5.0
    assert overlay.text_outline.enabled is False
    assert overlay.text_outline.width == 3.0
    assert overlay.text_box.enabled is True
    assert overlay.text_box.padding == 12.0
    assert overlay.animation.duration == 0.5
    assert overlay.animation.delay == 1.0
    assert overlay.text_elements[0].text_shadow == {"enabled": True, "offset_x": 4.0}


@pytest.mark.parametrize(
    "nested, message",
    [
        ({"animation": {"duration": "fast"}}, "animation.duration"),
        ({"animation": {"delay": [1]}}, "animation.delay"),
        ({"text_outline": {"enabled": "maybe"}}, "text_outline.enabled"),
        ({"text_shadow": {"color": {"r": 1}}}, "text_shadow.color"),
    ],
)
def test_bad_nested_style_values_raise_validation_error(nested, message):
    raw = {"text": "a", "start_time": 0, "end_time": 1, **nested}
    with pytest.raises(ValidationError, match=message) as excinfo:
        parse_overlay(raw, index=3)
    assert excinfo.value.overlay_index == 3


def test_bad_element_style_value_names_overlay():
    raw = {
        "text": "a",
        "start_time": 0,
        "end_time": 1,
        "text_elements": [{"text": "b", "animation": {"duration": "slow"}}],
    }
    with pytest.raises(ValidationError, match="animation.duration") as excinfo:
        parse_overlays({"text_overlays": [raw]})
    assert excinfo.value.overlay_index == 0


@pytest.mark.parametrize("text", ["a\\nb", "a<br>b", "a\nb"])
def test_validate_rejects_multi_line_element_text(resolver, text):
    overlays = parse_overlays(
        {
            "text_overlays": [
                {
                    "text": "x",
                    "start_time": 0,
                    "end_time": 2,
                    "text_elements": [{"text": "ok", "line": 0}, {"text": text, "line": 1}],
                }
            ]
        }
    )
    with pytest.raises(ValidationError, match="element 2 text must be a single line"):
        validate_overlays(overlays, resolver)
