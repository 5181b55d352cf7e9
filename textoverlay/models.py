"""Overlay data structures shared by the layout, style and effect stages."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

AxisValue = Union[str, int, float]

TEXT_ALIGN_CHOICES = ("left", "center", "right")


@dataclass(frozen=True)
class Position:
    """Per-axis position: ``"50%"``, ``540`` or ``"540"``."""

    x: AxisValue = "50%"
    y: AxisValue = "50%"


# A named preset such as "bottom-center" or a per-axis Position.
PositionValue = Union[Position, str]


@dataclass(frozen=True)
class TextOutline:
    enabled: bool = False
    color: str = "black"
    width: float = 2


@dataclass(frozen=True)
class TextShadow:
    enabled: bool = False
    color: str = "black"
    offset_x: float = 2
    offset_y: float = 2


@dataclass(frozen=True)
class TextBox:
    enabled: bool = False
    color: str = "black@0.5"
    padding: float = 10


@dataclass(frozen=True)
class Animation:
    """Animation request. ``duration`` of ``None`` uses the effect default."""

    enabled: bool = False
    type: Optional[str] = "fade-in"
    duration: Optional[float] = None
    delay: float = 0.0


@dataclass(frozen=True)
class TextElement:
    """Word-level override placed on ``line`` of its parent overlay.

    Scalar fields left as ``None`` inherit from the parent. Nested overrides
    are partial mappings keyed by the dataclass field names of
    :class:`TextOutline`, :class:`TextShadow`, :class:`TextBox` and
    :class:`Animation`.
    """

    text: str
    line: int = 0
    font_size: Optional[float] = None
    font_family: Optional[str] = None
    font_color: Optional[str] = None
    text_align: Optional[str] = None
    start_time: Optional[float] = None
    end_time: Optional[float] = None
    text_outline: Optional[Dict[str, Any]] = None
    text_shadow: Optional[Dict[str, Any]] = None
    text_box: Optional[Dict[str, Any]] = None
    animation: Optional[Dict[str, Any]] = None


@dataclass(frozen=True)
class TextOverlay:
    text: str
    start_time: float
    end_time: float
    font_size: float = 5
    font_family: str = "dm-serif-display-regular"
    font_color: str = "white"
    position: PositionValue = field(default_factory=Position)
    text_align: str = "center"
    text_outline: TextOutline = field(default_factory=TextOutline)
    text_shadow: TextShadow = field(default_factory=TextShadow)
    text_box: TextBox = field(default_factory=TextBox)
    animation: Animation = field(default_factory=Animation)
    text_elements: List[TextElement] = field(default_factory=list)


@dataclass(frozen=True)
class Provenance:
    """Where an atomic overlay came from. Used for reporting only."""

    overlay_index: int
    kind: str = "single"  # single | multiline | element
    line_index: int = 0
    element_index: Optional[int] = None
    total: int = 1
    original_text: str = ""


@dataclass(frozen=True)
class AtomicOverlay:
    """Single-line overlay ready for the style chain."""

    text: str
    start_time: float
    end_time: float
    font_size: float
    font_family: str
    font_color: str
    position: PositionValue
    text_align: str
    text_outline: TextOutline
    text_shadow: TextShadow
    text_box: TextBox
    animation: Animation
    provenance: Provenance
    font_path: Optional[str] = None
    font_name: Optional[str] = None


@dataclass(frozen=True)
class VideoDimensions:
    width: int
    height: int


@dataclass(frozen=True)
class ResolvedFont:
    font_id: str
    path: str
    name: str
