from pathlib import Path
import sys

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from textoverlay.components.layout.font_size import resolve_font_size


@pytest.mark.parametrize(
    "size, height, expected",
    [
        (10, 1080, 108),
        (6, 1000, 60),
        (2.5, 1080, 27),
        (20, 1920, 384),
        (4.5, 1000, 45),
    ],
)
def test_small_values_are_percent_of_height(size, height, expected):
    assert resolve_font_size(size, height) == expected


def test_half_pixels_round_up():
    # 12.5% of 324 is exactly 40.5
    assert resolve_font_size(12.5, 324) == 41


def test_values_above_threshold_are_pixels():
    assert resolve_font_size(48, 1080) == 48
    assert resolve_font_size(20.5, 1080) == 20.5


def test_resolution_is_monotonic():
    sizes = [0.5, 1, 5, 10, 15, 20]
    resolved = [resolve_font_size(s, 1080) for s in sizes]
    assert resolved == sorted(resolved)


def test_non_positive_values_pass_through_the_formula():
    assert resolve_font_size(0, 1080) == 0
    assert resolve_font_size(-5, 1000) == -50
