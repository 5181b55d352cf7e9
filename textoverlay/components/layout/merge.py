"""Field-level merging of word element overrides onto their parent overlay.

Each nested style object has its own merge function so the override contract
stays explicit: keys present in the override replace the parent's value,
every other field keeps the parent's value.
"""

from __future__ import annotations

from dataclasses import fields, replace
from typing import Any, Dict, Mapping, Optional, TypeVar

from ...models import Animation, TextBox, TextElement, TextOutline, TextOverlay, TextShadow

T = TypeVar("T")


def _known_overrides(target: Any, override: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    if not override:
        return {}
    names = {f.name for f in fields(target)}
    return {k: v for k, v in override.items() if k in names and v is not None}


def merge_outline(parent: TextOutline, override: Optional[Mapping[str, Any]]) -> TextOutline:
    return replace(parent, **_known_overrides(parent, override))


def merge_shadow(parent: TextShadow, override: Optional[Mapping[str, Any]]) -> TextShadow:
    return replace(parent, **_known_overrides(parent, override))


def merge_box(parent: TextBox, override: Optional[Mapping[str, Any]]) -> TextBox:
    return replace(parent, **_known_overrides(parent, override))


def merge_animation(parent: Animation, override: Optional[Mapping[str, Any]]) -> Animation:
    return replace(parent, **_known_overrides(parent, override))


def _pick(value: Optional[T], default: T) -> T:
    return default if value is None else value


def merge_element(parent: TextOverlay, element: TextElement) -> Dict[str, Any]:
    """Return the atomic overlay fields for ``element`` placed in ``parent``.

    Position is not included; the layout engine assigns it per line.
    """
    return {
        "text": element.text,
        "start_time": _pick(element.start_time, parent.start_time),
        "end_time": _pick(element.end_time, parent.end_time),
        "font_size": _pick(element.font_size, parent.font_size),
        "font_family": _pick(element.font_family, parent.font_family),
        "font_color": _pick(element.font_color, parent.font_color),
        "text_align": element.text_align or parent.text_align or "center",
        "text_outline": merge_outline(parent.text_outline, element.text_outline),
        "text_shadow": merge_shadow(parent.text_shadow, element.text_shadow),
        "text_box": merge_box(parent.text_box, element.text_box),
        "animation": merge_animation(parent.animation, element.animation),
    }
