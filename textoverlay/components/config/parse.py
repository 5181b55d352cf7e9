"""Turn raw configuration mappings into overlay dataclasses."""

from __future__ import annotations

import re
from dataclasses import fields
from typing import Any, Dict, List, Mapping, Optional, Type, TypeVar

from ...exceptions import ValidationError
from ...models import (
    TEXT_ALIGN_CHOICES,
    Animation,
    Position,
    PositionValue,
    TextBox,
    TextElement,
    TextOutline,
    TextOverlay,
    TextShadow,
)
from ...utils.overlay_text import normalize_overlay_text
from .merge import merge_configs

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")

T = TypeVar("T")


def snake_case(key: str) -> str:
    """``fontSize`` -> ``font_size``; snake_case keys pass through."""
    return _CAMEL_BOUNDARY.sub("_", str(key)).lower()


def normalize_keys(raw: Mapping[str, Any]) -> Dict[str, Any]:
    """Normalize keys one level deep, recursing into nested mappings."""
    normalized: Dict[str, Any] = {}
    for key, value in raw.items():
        if isinstance(value, Mapping):
            value = normalize_keys(value)
        normalized[snake_case(key)] = value
    return normalized


def _number(value: Any, field_name: str, index: int) -> float:
    if isinstance(value, bool):
        raise ValidationError(f"'{field_name}' must be a number.", overlay_index=index)
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ValidationError(
            f"'{field_name}' must be a number, got {value!r}.", overlay_index=index
        ) from None


def _optional_number(value: Any, field_name: str, index: int) -> Optional[float]:
    return None if value is None else _number(value, field_name, index)


def _text_align(value: Any, index: int) -> Optional[str]:
    if value is None:
        return None
    align = str(value).strip().lower()
    if align not in TEXT_ALIGN_CHOICES:
        raise ValidationError(
            f"'text_align' must be one of {list(TEXT_ALIGN_CHOICES)}, got {value!r}.",
            overlay_index=index,
        )
    return align


_STYLE_NUMBERS = {"width", "offset_x", "offset_y", "padding", "duration", "delay"}
_TRUE_WORDS = {"true", "yes", "on", "1"}
_FALSE_WORDS = {"false", "no", "off", "0"}


def _flag(value: Any, field_name: str, index: int) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        word = value.strip().lower()
        if word in _TRUE_WORDS:
            return True
        if word in _FALSE_WORDS:
            return False
    raise ValidationError(
        f"'{field_name}' must be true or false, got {value!r}.", overlay_index=index
    )


def _style_value(key: str, value: Any, field_name: str, index: int) -> Any:
    if value is None:
        return None
    label = f"{field_name}.{key}"
    if key == "enabled":
        return _flag(value, label, index)
    if key in _STYLE_NUMBERS:
        return _number(value, label, index)
    if isinstance(value, (Mapping, list)):
        raise ValidationError(f"'{label}' must be a string.", overlay_index=index)
    return str(value)


def _nested_override(raw: Any, cls: Type[Any], field_name: str, index: int) -> Optional[Dict[str, Any]]:
    if raw is None:
        return None
    if not isinstance(raw, Mapping):
        raise ValidationError(f"'{field_name}' must be a mapping.", overlay_index=index)
    allowed = {f.name for f in fields(cls)}
    unknown = set(raw) - allowed
    if unknown:
        raise ValidationError(
            f"Unknown keys in '{field_name}': {sorted(unknown)}.", overlay_index=index
        )
    return {key: _style_value(key, value, field_name, index) for key, value in raw.items()}


def _nested(raw: Any, cls: Type[T], field_name: str, index: int) -> T:
    override = _nested_override(raw, cls, field_name, index)
    if not override:
        return cls()
    return cls(**{k: v for k, v in override.items() if v is not None})


def parse_position(raw: Any, index: int = 0) -> PositionValue:
    if raw is None:
        return Position()
    if isinstance(raw, str):
        return raw.strip().lower()
    if isinstance(raw, Mapping):
        return Position(x=raw.get("x", "50%"), y=raw.get("y", "50%"))
    raise ValidationError(
        "'position' must be a preset name or a mapping with 'x' and 'y'.", overlay_index=index
    )


def parse_element(raw: Any, index: int) -> TextElement:
    if not isinstance(raw, Mapping):
        raise ValidationError("Each text element must be a mapping.", overlay_index=index)
    data = normalize_keys(raw)
    if "text" not in data:
        raise ValidationError("Each text element needs 'text'.", overlay_index=index)
    try:
        line = int(data.get("line", 0))
    except (TypeError, ValueError):
        raise ValidationError(
            f"Text element 'line' must be an integer, got {data.get('line')!r}.",
            overlay_index=index,
        ) from None
    return TextElement(
        text=normalize_overlay_text(data["text"]),
        line=line,
        font_size=_optional_number(data.get("font_size"), "font_size", index),
        font_family=data.get("font_family"),
        font_color=data.get("font_color"),
        text_align=_text_align(data.get("text_align"), index),
        start_time=_optional_number(data.get("start_time"), "start_time", index),
        end_time=_optional_number(data.get("end_time"), "end_time", index),
        text_outline=_nested_override(data.get("text_outline"), TextOutline, "text_outline", index),
        text_shadow=_nested_override(data.get("text_shadow"), TextShadow, "text_shadow", index),
        text_box=_nested_override(data.get("text_box"), TextBox, "text_box", index),
        animation=_nested_override(data.get("animation"), Animation, "animation", index),
    )


def parse_overlay(raw: Any, index: int = 0) -> TextOverlay:
    """Parse one overlay mapping; ``index`` is only used in error messages."""
    if not isinstance(raw, Mapping):
        raise ValidationError("Text overlay must be a mapping.", overlay_index=index)
    data = normalize_keys(raw)

    for required in ("text", "start_time", "end_time"):
        if data.get(required) is None:
            raise ValidationError(f"Text overlay is missing '{required}'.", overlay_index=index)

    elements_raw = data.get("text_elements") or []
    if not isinstance(elements_raw, list):
        raise ValidationError("'text_elements' must be a list.", overlay_index=index)

    overlay = TextOverlay(
        text=normalize_overlay_text(data["text"]),
        start_time=_number(data["start_time"], "start_time", index),
        end_time=_number(data["end_time"], "end_time", index),
        position=parse_position(data.get("position"), index),
        text_outline=_nested(data.get("text_outline"), TextOutline, "text_outline", index),
        text_shadow=_nested(data.get("text_shadow"), TextShadow, "text_shadow", index),
        text_box=_nested(data.get("text_box"), TextBox, "text_box", index),
        animation=_nested(data.get("animation"), Animation, "animation", index),
        text_elements=[parse_element(el, index) for el in elements_raw],
        **_scalar_fields(data, index),
    )
    return overlay


def _scalar_fields(data: Dict[str, Any], index: int) -> Dict[str, Any]:
    scalars: Dict[str, Any] = {}
    if data.get("font_size") is not None:
        scalars["font_size"] = _number(data["font_size"], "font_size", index)
    if data.get("font_family") is not None:
        scalars["font_family"] = str(data["font_family"])
    if data.get("font_color") is not None:
        scalars["font_color"] = str(data["font_color"])
    align = _text_align(data.get("text_align"), index)
    if align is not None:
        scalars["text_align"] = align
    return scalars


def parse_overlays(config: Mapping[str, Any]) -> List[TextOverlay]:
    """Parse ``text_overlays`` from a loaded configuration.

    A top-level ``defaults`` mapping is deep-merged under every overlay entry.
    """
    data = normalize_keys(config or {})
    overlays_raw = data.get("text_overlays")
    if overlays_raw is None:
        raise ValidationError("Configuration has no 'text_overlays' list.")
    if not isinstance(overlays_raw, list):
        raise ValidationError("'text_overlays' must be a list.")

    defaults = data.get("defaults") or {}
    if not isinstance(defaults, Mapping):
        raise ValidationError("'defaults' must be a mapping.")

    overlays = []
    for index, raw in enumerate(overlays_raw):
        if isinstance(raw, Mapping) and defaults:
            raw = merge_configs(dict(defaults), normalize_keys(raw))
        overlays.append(parse_overlay(raw, index))
    return overlays
