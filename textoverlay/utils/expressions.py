"""Number formatting shared by every stage that writes ffmpeg expressions."""

from __future__ import annotations

from typing import Union

Number = Union[int, float]


def format_number(value: Number) -> str:
    """Render ``value`` without float noise: ``2.0`` -> ``2``, ``0.1+0.2`` -> ``0.3``."""
    rounded = round(float(value), 6)
    if rounded == 0:
        return "0"
    if rounded.is_integer():
        return str(int(rounded))
    return repr(rounded)


def wrap(expr: str) -> str:
    """Parenthesize a sub-expression unless it is a bare number or symbol."""
    if all(ch.isalnum() or ch in "._" for ch in expr):
        return expr
    return f"({expr})"
