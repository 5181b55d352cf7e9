from .coordinates import Coordinates, resolve_coordinates, resolve_center_y
from .font_size import resolve_font_size
from .multiline import LINE_SPACING, expand_overlay, layout_overlays

__all__ = [
    "Coordinates",
    "resolve_coordinates",
    "resolve_center_y",
    "resolve_font_size",
    "LINE_SPACING",
    "expand_overlay",
    "layout_overlays",
]
