"""Expand logical overlays into single-line atomic overlays.

Multi-line text and word elements are stacked as one block centered on the
overlay's vertical position. Each line is ``LINE_SPACING`` times its largest
resolved font size tall.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence, Tuple

from ...models import (
    AtomicOverlay,
    AxisValue,
    Position,
    PositionValue,
    Provenance,
    TextElement,
    TextOverlay,
    VideoDimensions,
)
from ...utils.logger import logger
from .coordinates import PRESET_MARGIN, resolve_center_y
from .font_size import resolve_font_size
from .merge import merge_element

LINE_SPACING = 1.2


def _split_preset(preset: str) -> Tuple[str, str]:
    parts = preset.strip().lower().split("-")
    if len(parts) == 2 and parts[0] in ("top", "middle", "bottom") and parts[1] in (
        "left",
        "center",
        "right",
    ):
        return parts[0], parts[1]
    return "middle", "center"


def _block_anchor(
    position: PositionValue, total_height: float, dimensions: VideoDimensions
) -> Tuple[AxisValue, Optional[str], float]:
    """Return the block's x value, a forced alignment (or None) and its center y."""
    if isinstance(position, Position):
        return position.x, None, resolve_center_y(position.y, dimensions.height)

    vertical, horizontal = _split_preset(position)
    if vertical == "top":
        center_y = PRESET_MARGIN + total_height / 2
    elif vertical == "bottom":
        center_y = dimensions.height - PRESET_MARGIN - total_height / 2
    else:
        center_y = dimensions.height / 2

    if horizontal == "left":
        return PRESET_MARGIN, "left", center_y
    if horizontal == "right":
        return dimensions.width - PRESET_MARGIN, "right", center_y
    return "50%", "center", center_y


def _line_offsets(line_heights: Dict[int, float], starting_y: float) -> Dict[int, float]:
    offsets: Dict[int, float] = {}
    current_y = starting_y
    for line in sorted(line_heights):
        offsets[line] = current_y
        current_y += line_heights[line]
    return offsets


def _from_parent(
    overlay: TextOverlay, text: str, position: PositionValue, text_align: str, provenance: Provenance
) -> AtomicOverlay:
    return AtomicOverlay(
        text=text,
        start_time=overlay.start_time,
        end_time=overlay.end_time,
        font_size=overlay.font_size,
        font_family=overlay.font_family,
        font_color=overlay.font_color,
        position=position,
        text_align=text_align,
        text_outline=overlay.text_outline,
        text_shadow=overlay.text_shadow,
        text_box=overlay.text_box,
        animation=overlay.animation,
        provenance=provenance,
    )


def _expand_lines(
    overlay: TextOverlay, lines: Sequence[str], dimensions: VideoDimensions, overlay_index: int
) -> List[AtomicOverlay]:
    line_height = resolve_font_size(overlay.font_size, dimensions.height) * LINE_SPACING
    total_height = line_height * len(lines)
    x_value, forced_align, center_y = _block_anchor(overlay.position, total_height, dimensions)
    starting_y = center_y - total_height / 2
    text_align = forced_align or overlay.text_align or "center"

    result = []
    for index, line in enumerate(lines):
        provenance = Provenance(
            overlay_index=overlay_index,
            kind="multiline",
            line_index=index,
            total=len(lines),
            original_text=overlay.text,
        )
        position = Position(x=x_value, y=starting_y + index * line_height)
        result.append(_from_parent(overlay, line.strip(), position, text_align, provenance))
    return result


def _expand_elements(
    overlay: TextOverlay, dimensions: VideoDimensions, overlay_index: int
) -> List[AtomicOverlay]:
    elements: List[TextElement] = list(overlay.text_elements)

    line_groups: Dict[int, List[TextElement]] = {}
    for element in elements:
        line_groups.setdefault(element.line, []).append(element)

    line_heights = {
        line: max(
            resolve_font_size(
                el.font_size if el.font_size is not None else overlay.font_size,
                dimensions.height,
            )
            for el in group
        )
        * LINE_SPACING
        for line, group in line_groups.items()
    }
    total_height = sum(line_heights[line] for line in sorted(line_heights))
    x_value, forced_align, center_y = _block_anchor(overlay.position, total_height, dimensions)
    line_y = _line_offsets(line_heights, center_y - total_height / 2)

    result = []
    for index, element in enumerate(elements):
        merged = merge_element(overlay, element)
        if forced_align:
            merged["text_align"] = forced_align
        result.append(
            AtomicOverlay(
                position=Position(x=x_value, y=line_y[element.line]),
                provenance=Provenance(
                    overlay_index=overlay_index,
                    kind="element",
                    line_index=element.line,
                    element_index=index,
                    total=len(elements),
                    original_text=overlay.text,
                ),
                **merged,
            )
        )
    return result


def expand_overlay(
    overlay: TextOverlay, dimensions: VideoDimensions, overlay_index: int = 0
) -> List[AtomicOverlay]:
    """Expand one overlay into its atomic overlays, in declaration order."""
    if overlay.text_elements:
        atomic = _expand_elements(overlay, dimensions, overlay_index)
    else:
        lines = overlay.text.split("\n")
        if len(lines) == 1:
            provenance = Provenance(overlay_index=overlay_index, original_text=overlay.text)
            atomic = [
                _from_parent(
                    overlay, overlay.text, overlay.position, overlay.text_align, provenance
                )
            ]
        else:
            atomic = _expand_lines(overlay, lines, dimensions, overlay_index)

    logger.kv_debug(
        "Expanded overlay",
        kv_pairs={"Event": "Layout", "Overlay": overlay_index + 1, "Atomic": len(atomic)},
    )
    return atomic


def layout_overlays(
    overlays: Sequence[TextOverlay], dimensions: VideoDimensions
) -> List[AtomicOverlay]:
    """Expand every overlay and concatenate the results in input order."""
    result: List[AtomicOverlay] = []
    for index, overlay in enumerate(overlays):
        result.extend(expand_overlay(overlay, dimensions, index))
    return result
