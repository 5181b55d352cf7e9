"""Time-gated drawtext fragments for overlay animations.

Every fragment starts with the visibility gate ``enable='between(t,start,end)'``.
Opacity effects add an ``alpha`` ramp; slide effects override ``x`` or ``y``
with a ramp from off-screen to the static coordinate.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Optional, Union

from ..exceptions import UnknownEffectError
from ..models import AtomicOverlay
from ..utils.expressions import format_number, wrap
from ..utils.logger import logger
from .layout.coordinates import Coordinates


class EffectType(str, Enum):
    FADE_IN = "fade-in"
    FADE_OUT = "fade-out"
    SLIDE_UP = "slide-up"
    SLIDE_DOWN = "slide-down"
    SLIDE_LEFT = "slide-left"
    SLIDE_RIGHT = "slide-right"
    ZOOM_IN = "zoom-in"
    ZOOM_OUT = "zoom-out"


@dataclass(frozen=True)
class EffectContext:
    """Timing and geometry handed to an effect builder."""

    start_time: float
    end_time: float
    delay: float
    duration: float
    coordinates: Coordinates
    video_height: int

    @property
    def entry_start(self) -> float:
        return self.start_time + self.delay

    @property
    def exit_start(self) -> float:
        return self.end_time - self.duration - self.delay


EffectBuilder = Callable[[EffectContext], str]


@dataclass(frozen=True)
class EffectSpec:
    effect_type: EffectType
    name: str
    default_duration: float
    description: str
    builder: EffectBuilder


@dataclass(frozen=True)
class AnimationFragment:
    """Gate plus optional effect expression appended to a drawtext filter."""

    expression: str
    effect: Optional[str] = None
    warning: Optional[str] = None


def visibility_gate(start_time: float, end_time: float) -> str:
    return f":enable='between(t,{format_number(start_time)},{format_number(end_time)})'"


def _ramp_up(start: float, duration: float) -> str:
    s = format_number(start)
    e = format_number(start + duration)
    d = format_number(duration)
    return f"if(lt(t,{s}),0,if(lt(t,{e}),(t-{s})/{d},1))"


def _ramp_down(start: float, duration: float) -> str:
    s = format_number(start)
    e = format_number(start + duration)
    d = format_number(duration)
    return f"if(lt(t,{s}),1,if(lt(t,{e}),({e}-t)/{d},0))"


def _slide(static: str, offscreen: str, start: float, duration: float) -> str:
    s = format_number(start)
    e = format_number(start + duration)
    d = format_number(duration)
    target = wrap(static)
    origin = wrap(offscreen)
    return (
        f"if(lt(t,{s}),{origin},"
        f"if(lt(t,{e}),{origin}+(t-{s})/{d}*({target}-{origin}),{target}))"
    )


def _fade_in(ctx: EffectContext) -> str:
    return f":alpha='{_ramp_up(ctx.entry_start, ctx.duration)}'"


def _fade_out(ctx: EffectContext) -> str:
    return f":alpha='{_ramp_down(ctx.exit_start, ctx.duration)}'"


def _slide_up(ctx: EffectContext) -> str:
    return f":y='{_slide(ctx.coordinates.y, 'h', ctx.entry_start, ctx.duration)}'"


def _slide_down(ctx: EffectContext) -> str:
    return f":y='{_slide(ctx.coordinates.y, '-text_h', ctx.entry_start, ctx.duration)}'"


def _slide_left(ctx: EffectContext) -> str:
    return f":x='{_slide(ctx.coordinates.x, 'w', ctx.entry_start, ctx.duration)}'"


def _slide_right(ctx: EffectContext) -> str:
    return f":x='{_slide(ctx.coordinates.x, '-text_w', ctx.entry_start, ctx.duration)}'"


# drawtext has no scale option, so zoom is rendered as an opacity ramp
_zoom_in = _fade_in
_zoom_out = _fade_out


EFFECTS: Dict[EffectType, EffectSpec] = {
    spec.effect_type: spec
    for spec in (
        EffectSpec(EffectType.FADE_IN, "Fade In", 0.5,
                   "Smooth fade in transition from transparent to opaque", _fade_in),
        EffectSpec(EffectType.FADE_OUT, "Fade Out", 0.5,
                   "Smooth fade out transition from opaque to transparent", _fade_out),
        EffectSpec(EffectType.SLIDE_UP, "Slide Up", 0.8,
                   "Text slides up from the bottom of the screen", _slide_up),
        EffectSpec(EffectType.SLIDE_DOWN, "Slide Down", 0.8,
                   "Text slides down from the top of the screen", _slide_down),
        EffectSpec(EffectType.SLIDE_LEFT, "Slide Left", 0.8,
                   "Text slides in from the right side of the screen", _slide_left),
        EffectSpec(EffectType.SLIDE_RIGHT, "Slide Right", 0.8,
                   "Text slides in from the left side of the screen", _slide_right),
        EffectSpec(EffectType.ZOOM_IN, "Zoom In", 0.6,
                   "Text zooms in (rendered as a fade)", _zoom_in),
        EffectSpec(EffectType.ZOOM_OUT, "Zoom Out", 0.6,
                   "Text zooms out (rendered as a fade)", _zoom_out),
    )
}


def get_effect(effect_type: Union[str, EffectType]) -> EffectSpec:
    """Look up an effect by identifier, e.g. ``"slide-up"``."""
    key = effect_type.value if isinstance(effect_type, EffectType) else str(effect_type).strip().lower()
    try:
        return EFFECTS[EffectType(key)]
    except ValueError:
        raise UnknownEffectError(str(effect_type), [e.value for e in EffectType]) from None


def list_effects() -> List[EffectSpec]:
    return [EFFECTS[effect_type] for effect_type in EffectType]


def effect_display_name(effect_type: Optional[str]) -> str:
    if not effect_type:
        return "Unknown Effect"
    try:
        return get_effect(effect_type).name
    except UnknownEffectError:
        return "Unknown Effect"


def generate_animation(
    overlay: AtomicOverlay, coordinates: Coordinates, video_height: int
) -> AnimationFragment:
    """Build the gate and, when enabled, the effect fragment for ``overlay``.

    Unknown effect identifiers degrade to the gate alone and carry a warning.
    """
    gate = visibility_gate(overlay.start_time, overlay.end_time)
    animation = overlay.animation
    if animation is None or not animation.enabled or not animation.type:
        return AnimationFragment(expression=gate)

    try:
        spec = get_effect(animation.type)
    except UnknownEffectError as exc:
        message = f"{exc}. Using default timing."
        logger.kv_warning(
            message,
            kv_pairs={"Event": "UnknownEffect", "Effect": animation.type, "Text": overlay.text},
        )
        return AnimationFragment(expression=gate, warning=message)

    duration = animation.duration if animation.duration and animation.duration > 0 else spec.default_duration
    context = EffectContext(
        start_time=overlay.start_time,
        end_time=overlay.end_time,
        delay=animation.delay or 0.0,
        duration=duration,
        coordinates=coordinates,
        video_height=video_height,
    )
    return AnimationFragment(
        expression=gate + spec.builder(context),
        effect=spec.effect_type.value,
    )


__all__ = [
    "EffectType",
    "EffectSpec",
    "EffectContext",
    "AnimationFragment",
    "EFFECTS",
    "get_effect",
    "list_effects",
    "effect_display_name",
    "generate_animation",
    "visibility_gate",
]
