from pathlib import Path
import sys

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from textoverlay.components import effects
from textoverlay.components.effects import (
    EffectType,
    generate_animation,
    get_effect,
    visibility_gate,
)
from textoverlay.components.layout.coordinates import Coordinates
from textoverlay.exceptions import UnknownEffectError
from textoverlay.models import (
    Animation,
    AtomicOverlay,
    Position,
    Provenance,
    TextBox,
    TextOutline,
    TextShadow,
)

COORDS = Coordinates(x="w*0.5-text_w/2", y="h*0.5-text_h/2")


def _atomic(animation, start=2, end=7):
    return AtomicOverlay(
        text="Hi",
        start_time=start,
        end_time=end,
        font_size=6,
        font_family="cookie",
        font_color="white",
        position=Position(),
        text_align="center",
        text_outline=TextOutline(),
        text_shadow=TextShadow(),
        text_box=TextBox(),
        animation=animation,
        provenance=Provenance(overlay_index=0),
    )


@pytest.mark.parametrize("effect_type", [e.value for e in EffectType])
def test_disabled_animation_emits_gate_only(effect_type):
    fragment = generate_animation(_atomic(Animation(enabled=False, type=effect_type)), COORDS, 1080)
    assert fragment.expression == ":enable='between(t,2,7)'"
    assert fragment.warning is None


def test_fade_in_ramps_from_start_plus_delay():
    overlay = _atomic(Animation(enabled=True, type="fade-in", duration=0.5, delay=1))
    fragment = generate_animation(overlay, COORDS, 1080)
    assert fragment.expression == (
        ":enable='between(t,2,7)'"
        ":alpha='if(lt(t,3),0,if(lt(t,3.5),(t-3)/0.5,1))'"
    )
    assert fragment.effect == "fade-in"


def test_fade_out_ramps_before_end():
    overlay = _atomic(Animation(enabled=True, type="fade-out", duration=1))
    fragment = generate_animation(overlay, COORDS, 1080)
    assert fragment.expression.endswith(":alpha='if(lt(t,6),1,if(lt(t,7),(7-t)/1,0))'")


def test_zoom_uses_opacity_with_its_own_default_duration():
    overlay = _atomic(Animation(enabled=True, type="zoom-in"))
    fragment = generate_animation(overlay, COORDS, 1080)
    assert ":alpha='if(lt(t,2),0,if(lt(t,2.6),(t-2)/0.6,1))'" in fragment.expression
    out = generate_animation(_atomic(Animation(enabled=True, type="zoom-out")), COORDS, 1080)
    assert ":alpha='if(lt(t,6.4),1,if(lt(t,7),(7-t)/0.6,0))'" in out.expression


def test_slide_down_enters_from_above_and_settles_on_static_y():
    overlay = _atomic(Animation(enabled=True, type="slide-down", duration=0.8))
    fragment = generate_animation(overlay, COORDS, 1080)
    assert fragment.expression == (
        ":enable='between(t,2,7)'"
        ":y='if(lt(t,2),(-text_h),if(lt(t,2.8),(-text_h)+(t-2)/0.8*((h*0.5-text_h/2)-(-text_h)),"
        "(h*0.5-text_h/2)))'"
    )


@pytest.mark.parametrize(
    "effect_type, axis, origin",
    [
        ("slide-up", "y", "h"),
        ("slide-left", "x", "w"),
        ("slide-right", "x", "(-text_w)"),
    ],
)
def test_slides_override_one_axis(effect_type, axis, origin):
    fragment = generate_animation(_atomic(Animation(enabled=True, type=effect_type)), COORDS, 1080)
    assert f":{axis}='if(lt(t,2),{origin}," in fragment.expression
    assert "if(lt(t,2.8)," in fragment.expression


def test_unknown_effect_degrades_to_gate_with_warning():
    fragment = generate_animation(_atomic(Animation(enabled=True, type="spin")), COORDS, 1080)
    assert fragment.expression == visibility_gate(2, 7)
    assert fragment.warning is not None
    assert '"spin"' in fragment.warning


def test_unknown_effect_is_logged_as_warning(monkeypatch):
    seen = []
    monkeypatch.setattr(effects.logger, "kv_warning", lambda msg, **kw: seen.append(msg))
    generate_animation(_atomic(Animation(enabled=True, type="spin")), COORDS, 1080)
    assert len(seen) == 1


def test_zero_duration_falls_back_to_effect_default():
    overlay = _atomic(Animation(enabled=True, type="slide-up", duration=0))
    assert "if(lt(t,2.8)," in generate_animation(overlay, COORDS, 1080).expression


def test_get_effect_lookup():
    assert get_effect("Fade-In").default_duration == 0.5
    assert get_effect(EffectType.SLIDE_UP).name == "Slide Up"
    with pytest.raises(UnknownEffectError):
        get_effect("spin")
