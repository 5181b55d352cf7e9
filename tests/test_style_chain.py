from dataclasses import replace
from pathlib import Path
import sys

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from textoverlay.components.styles import (
    STYLE_APPLIERS,
    StyleContext,
    apply_box,
    apply_color,
    apply_font,
    apply_outline,
    apply_shadow,
    build_drawtext_filter,
)
from textoverlay.models import (
    Animation,
    AtomicOverlay,
    Position,
    Provenance,
    TextBox,
    TextOutline,
    TextShadow,
)


def _atomic(**kwargs):
    base = dict(
        text="Hi",
        start_time=0,
        end_time=2,
        font_size=10,
        font_family="cookie",
        font_color="white",
        position=Position(x="50%", y="50%"),
        text_align="center",
        text_outline=TextOutline(),
        text_shadow=TextShadow(),
        text_box=TextBox(),
        animation=Animation(),
        provenance=Provenance(overlay_index=0),
    )
    base.update(kwargs)
    return AtomicOverlay(**base)


def _ctx():
    return StyleContext(video_width=1920, video_height=1080)


def test_minimal_overlay_filter():
    assert build_drawtext_filter(_atomic(), _ctx()) == (
        "drawtext=text='Hi':fontsize=108:fontcolor=white"
        ":x=w*0.5-text_w/2:y=h*0.5-text_h/2"
        ":enable='between(t,0,2)'"
    )


def test_full_chain_order():
    overlay = _atomic(
        font_path="C:\\fonts\\Cookie-Regular.ttf",
        text_outline=TextOutline(enabled=True, color="black", width=3),
        text_shadow=TextShadow(enabled=True, color="purple", offset_x=3, offset_y=2),
        text_box=TextBox(enabled=True, color="black@0.5", padding=10),
        animation=Animation(enabled=True, type="fade-in", duration=0.5),
    )
    result = build_drawtext_filter(overlay, _ctx())
    order = [
        ":fontfile='C:/fonts/Cookie-Regular.ttf'",
        ":fontsize=108",
        ":fontcolor=white",
        ":borderw=3:bordercolor=black",
        ":shadowx=3:shadowy=2:shadowcolor=purple",
        ":box=1:boxcolor=black@0.5:boxborderw=10",
        ":x=w*0.5-text_w/2:y=h*0.5-text_h/2",
        ":enable='between(t,0,2)'",
        ":alpha='if(lt(t,0),0,if(lt(t,0.5),(t-0)/0.5,1))'",
    ]
    positions = [result.index(part) for part in order]
    assert positions == sorted(positions)


def test_text_is_escaped():
    result = build_drawtext_filter(_atomic(text="It's 5:30"), _ctx())
    assert result.startswith("drawtext=text='It\\'s 5\\:30'")


def test_disabled_appliers_return_input_unchanged():
    overlay = _atomic()
    ctx = _ctx()
    for applier in (apply_outline, apply_shadow, apply_box):
        assert applier("drawtext=text='x'", overlay, ctx) == "drawtext=text='x'"
    assert apply_color("f", replace(overlay, font_color=""), ctx) == "f"


def test_font_applier_resolves_fixed_pixels():
    assert apply_font("f", _atomic(font_size=64), _ctx()) == "f:fontsize=64"


def test_unknown_effect_warning_is_collected():
    ctx = _ctx()
    result = build_drawtext_filter(
        _atomic(animation=Animation(enabled=True, type="spin")), ctx
    )
    assert result.endswith(":enable='between(t,0,2)'")
    assert len(ctx.warnings) == 1


def test_applier_order_is_fixed():
    names = [applier.__name__ for applier in STYLE_APPLIERS]
    assert names == [
        "apply_font",
        "apply_color",
        "apply_outline",
        "apply_shadow",
        "apply_box",
        "apply_position",
        "apply_animation",
    ]
