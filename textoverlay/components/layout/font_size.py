"""Responsive font sizes.

Values up to ``PERCENT_THRESHOLD`` (decimals included) are a percentage of the
video height; larger values are already pixels.
"""

from __future__ import annotations

import math
from typing import Union

PERCENT_THRESHOLD = 20

Number = Union[int, float]


def is_percentage_size(font_size: Number) -> bool:
    return font_size <= PERCENT_THRESHOLD


def resolve_font_size(font_size: Number, video_height: int) -> Number:
    """Return the drawtext ``fontsize`` for ``font_size`` on a video ``video_height`` tall.

    >>> resolve_font_size(10, 1080)
    108
    >>> resolve_font_size(48, 1080)
    48
    """
    if is_percentage_size(font_size):
        # half-up: 40.5 becomes 41 where round() would give 40
        return int(math.floor(font_size / 100 * video_height + 0.5))
    return font_size
