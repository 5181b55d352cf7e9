"""Translate overlay positions into drawtext ``x``/``y`` expressions.

Expressions reference the renderer's own symbols: ``w``/``h`` are the video
size and ``text_w``/``text_h`` the measured size of the drawn text.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from ...models import AxisValue, Position, PositionValue
from ...utils.expressions import format_number

PRESET_MARGIN = 50

CENTER_X = "(w-text_w)/2"
CENTER_Y = "(h-text_h)/2"

PRESET_POSITIONS: Dict[str, Tuple[str, str]] = {
    "top-left": (f"{PRESET_MARGIN}", f"{PRESET_MARGIN}"),
    "top-center": (CENTER_X, f"{PRESET_MARGIN}"),
    "top-right": (f"w-text_w-{PRESET_MARGIN}", f"{PRESET_MARGIN}"),
    "middle-left": (f"{PRESET_MARGIN}", CENTER_Y),
    "middle-center": (CENTER_X, CENTER_Y),
    "middle-right": (f"w-text_w-{PRESET_MARGIN}", CENTER_Y),
    "bottom-left": (f"{PRESET_MARGIN}", f"h-text_h-{PRESET_MARGIN}"),
    "bottom-center": (CENTER_X, f"h-text_h-{PRESET_MARGIN}"),
    "bottom-right": (f"w-text_w-{PRESET_MARGIN}", f"h-text_h-{PRESET_MARGIN}"),
    "center": (CENTER_X, CENTER_Y),
}


@dataclass(frozen=True)
class Coordinates:
    x: str
    y: str

    def as_option(self) -> str:
        return f"x={self.x}:y={self.y}"


def parse_percentage(value: AxisValue) -> Optional[float]:
    """``"50%"`` -> ``0.5``; anything else -> ``None``."""
    if not isinstance(value, str) or "%" not in value:
        return None
    try:
        return float(value.replace("%", "").strip()) / 100
    except ValueError:
        return None


def parse_pixels(value: AxisValue) -> Optional[float]:
    """Numbers and numeric strings are pixel offsets."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str) and "%" not in value:
        try:
            return float(value.strip())
        except ValueError:
            return None
    return None


def _align_x(base: str, text_align: str) -> str:
    if text_align == "left":
        return base
    if text_align == "right":
        return f"{base}-text_w"
    return f"{base}-text_w/2"


def resolve_x(value: AxisValue, text_align: str = "center") -> str:
    percentage = parse_percentage(value)
    if percentage is not None:
        return _align_x(f"w*{format_number(percentage)}", text_align)
    pixels = parse_pixels(value)
    if pixels is not None:
        return _align_x(format_number(pixels), text_align)
    return CENTER_X


def resolve_y(value: AxisValue) -> str:
    percentage = parse_percentage(value)
    if percentage is not None:
        return f"h*{format_number(percentage)}-text_h/2"
    pixels = parse_pixels(value)
    if pixels is not None:
        return format_number(pixels)
    return CENTER_Y


def resolve_coordinates(
    position: Optional[PositionValue],
    text_align: Optional[str] = "center",
    video_width: int = 1920,
    video_height: int = 1080,
) -> Coordinates:
    """Resolve ``position`` into drawtext coordinates.

    Malformed input never raises: unknown presets and unparsable axis values
    fall back to centering on that axis.
    """
    align = text_align or "center"
    if isinstance(position, Position):
        return Coordinates(resolve_x(position.x, align), resolve_y(position.y))
    if isinstance(position, str):
        x, y = PRESET_POSITIONS.get(position.strip().lower(), PRESET_POSITIONS["center"])
        return Coordinates(x, y)
    return Coordinates(*PRESET_POSITIONS["center"])


def resolve_center_y(value: AxisValue, video_height: int) -> float:
    """Numeric vertical anchor used to center a multi-line block."""
    percentage = parse_percentage(value)
    if percentage is not None:
        return video_height * percentage
    pixels = parse_pixels(value)
    if pixels is not None:
        return pixels
    return video_height / 2
