"""Build one ``drawtext`` filter per atomic overlay.

The filter starts as ``drawtext=text='...'`` and each applier in
``STYLE_APPLIERS`` appends its own options. Appliers only read the fields
they own and never touch earlier output.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, List, Tuple

from ..models import AtomicOverlay
from ..utils.expressions import format_number
from ..utils.overlay_text import escape_drawtext_text, normalize_font_path
from .effects import generate_animation
from .layout.coordinates import resolve_coordinates
from .layout.font_size import resolve_font_size


@dataclass
class StyleContext:
    video_width: int
    video_height: int
    warnings: List[str] = field(default_factory=list)


StyleApplier = Callable[[str, AtomicOverlay, StyleContext], str]


def apply_font(filter_str: str, overlay: AtomicOverlay, ctx: StyleContext) -> str:
    if overlay.font_path:
        filter_str += f":fontfile='{normalize_font_path(overlay.font_path)}'"
    size = resolve_font_size(overlay.font_size, ctx.video_height)
    return filter_str + f":fontsize={format_number(size)}"


def apply_color(filter_str: str, overlay: AtomicOverlay, ctx: StyleContext) -> str:
    if overlay.font_color:
        filter_str += f":fontcolor={overlay.font_color}"
    return filter_str


def apply_outline(filter_str: str, overlay: AtomicOverlay, ctx: StyleContext) -> str:
    outline = overlay.text_outline
    if not outline or not outline.enabled:
        return filter_str
    return filter_str + f":borderw={format_number(outline.width)}:bordercolor={outline.color}"


def apply_shadow(filter_str: str, overlay: AtomicOverlay, ctx: StyleContext) -> str:
    shadow = overlay.text_shadow
    if not shadow or not shadow.enabled:
        return filter_str
    return filter_str + (
        f":shadowx={format_number(shadow.offset_x)}"
        f":shadowy={format_number(shadow.offset_y)}"
        f":shadowcolor={shadow.color}"
    )


def apply_box(filter_str: str, overlay: AtomicOverlay, ctx: StyleContext) -> str:
    box = overlay.text_box
    if not box or not box.enabled:
        return filter_str
    return filter_str + f":box=1:boxcolor={box.color}:boxborderw={format_number(box.padding)}"


def apply_position(filter_str: str, overlay: AtomicOverlay, ctx: StyleContext) -> str:
    coordinates = resolve_coordinates(
        overlay.position, overlay.text_align, ctx.video_width, ctx.video_height
    )
    return filter_str + f":{coordinates.as_option()}"


def apply_animation(filter_str: str, overlay: AtomicOverlay, ctx: StyleContext) -> str:
    coordinates = resolve_coordinates(
        overlay.position, overlay.text_align, ctx.video_width, ctx.video_height
    )
    fragment = generate_animation(overlay, coordinates, ctx.video_height)
    if fragment.warning:
        ctx.warnings.append(fragment.warning)
    return filter_str + fragment.expression


STYLE_APPLIERS: Tuple[StyleApplier, ...] = (
    apply_font,
    apply_color,
    apply_outline,
    apply_shadow,
    apply_box,
    apply_position,
    apply_animation,
)


def build_drawtext_filter(overlay: AtomicOverlay, ctx: StyleContext) -> str:
    """Return the complete ``drawtext`` filter for one atomic overlay."""
    filter_str = f"drawtext=text='{escape_drawtext_text(overlay.text)}'"
    for applier in STYLE_APPLIERS:
        filter_str = applier(filter_str, overlay, ctx)
    return filter_str
