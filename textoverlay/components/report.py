"""Human readable summary of a compiled overlay configuration."""

from __future__ import annotations

from typing import Dict, List, Sequence

from ..models import AtomicOverlay, Position, VideoDimensions
from ..utils.expressions import format_number
from ..utils.logger import KVLogger
from .effects import effect_display_name
from .layout.font_size import is_percentage_size, resolve_font_size


def group_by_source(overlays: Sequence[AtomicOverlay]) -> Dict[int, List[AtomicOverlay]]:
    groups: Dict[int, List[AtomicOverlay]] = {}
    for overlay in overlays:
        groups.setdefault(overlay.provenance.overlay_index, []).append(overlay)
    return groups


def _describe_position(overlay: AtomicOverlay, auto: bool) -> str:
    position = overlay.position
    if not isinstance(position, Position):
        return str(position)
    x, y = (
        format_number(v) if isinstance(v, (int, float)) else v for v in (position.x, position.y)
    )
    return f"x: {x}, y: {y} (auto-positioned)" if auto else f"x: {x}, y: {y}"


def _describe_group(group: List[AtomicOverlay], dimensions: VideoDimensions) -> List[str]:
    first = group[0]
    origin = first.provenance
    lines = [f"  Text {origin.overlay_index + 1}:"]

    if origin.kind == "element":
        lines.append(f'    Text:        "{origin.original_text}" ({len(group)} text elements)')
        for number, overlay in enumerate(group, start=1):
            timing = ""
            if (overlay.start_time, overlay.end_time) != (first.start_time, first.end_time):
                timing = f" ({format_number(overlay.start_time)}s-{format_number(overlay.end_time)}s)"
            lines.append(
                f'      Element {number}: "{overlay.text}" on line {overlay.provenance.line_index}{timing}'
            )
    elif origin.kind == "multiline":
        lines.append(f'    Text:        "{origin.original_text}" ({len(group)} lines)')
        for number, overlay in enumerate(group, start=1):
            lines.append(f'      Line {number}:   "{overlay.text}"')
    else:
        lines.append(f'    Text:        "{first.text}"')

    lines.append(
        f"    Timing:      {format_number(first.start_time)}s - {format_number(first.end_time)}s"
    )
    lines.append(f"    Font:        {first.font_name or first.font_family}")
    size = resolve_font_size(first.font_size, dimensions.height)
    if is_percentage_size(first.font_size):
        lines.append(
            f"    Font Size:   {format_number(first.font_size)}% of video height -> {format_number(size)}px"
        )
    else:
        lines.append(f"    Font Size:   {format_number(first.font_size)}px (fixed)")
    lines.append(f"    Text Align:  {first.text_align or 'center'}")
    lines.append(f"    Color:       {first.font_color}")
    lines.append(f"    Position:    {_describe_position(first, origin.kind != 'single')}")

    outline, shadow, box, animation = (
        first.text_outline,
        first.text_shadow,
        first.text_box,
        first.animation,
    )
    lines.append(
        "    Outline:     "
        + (f"{outline.color} ({format_number(outline.width)}px)" if outline.enabled else "Disabled")
    )
    lines.append(
        "    Shadow:      "
        + (
            f"{shadow.color} ({format_number(shadow.offset_x)}, {format_number(shadow.offset_y)})"
            if shadow.enabled
            else "Disabled"
        )
    )
    lines.append("    Background:  " + (box.color if box.enabled else "Disabled"))
    lines.append(
        "    Animation:   "
        + (effect_display_name(animation.type) if animation.enabled else "Disabled")
    )
    return lines


def summarize_overlays(
    overlays: Sequence[AtomicOverlay], dimensions: VideoDimensions
) -> List[str]:
    """Summary lines grouped by the logical overlay each atomic overlay came from."""
    lines = [
        "Multi-Text Overlay Configuration:",
        f"  Video resolution: {dimensions.width}x{dimensions.height}",
        f"  Total overlays: {len(overlays)}",
    ]
    for group in group_by_source(overlays).values():
        lines.extend(_describe_group(group, dimensions))
    return lines


def log_overlay_summary(
    logger: KVLogger, overlays: Sequence[AtomicOverlay], dimensions: VideoDimensions
) -> None:
    for line in summarize_overlays(overlays, dimensions):
        logger.info(line)
