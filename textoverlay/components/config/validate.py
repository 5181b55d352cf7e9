from typing import Sequence

from ...exceptions import (
    InvalidFontSizeError,
    InvalidTimingError,
    UnresolvableFontError,
    ValidationError,
)
from ...models import TextOverlay
from ...utils.overlay_text import is_effective_overlay_text
from ..fonts import FontResolver


def _validate_font(font_id: str, font_resolver: FontResolver, index: int) -> None:
    try:
        font_resolver.resolve(font_id)
    except UnresolvableFontError as e:
        raise UnresolvableFontError(
            e.message, available=e.available, overlay_index=index
        ) from e


def _validate_timing(start: float, end: float, index: int, label: str) -> None:
    if start >= end:
        raise InvalidTimingError(
            f"{label} has invalid timing. start_time ({start}) must be less than end_time ({end})",
            overlay_index=index,
        )


def _validate_font_size(font_size: float, index: int, label: str) -> None:
    if font_size <= 0:
        raise InvalidFontSizeError(
            f"{label} has invalid font_size ({font_size}). Must be greater than 0",
            overlay_index=index,
        )


def validate_overlay(
    overlay: TextOverlay, font_resolver: FontResolver, index: int = 0
) -> None:
    """Validate one overlay and each of its text elements.

    Raises
    ------
    ValidationError
        For empty text.
    UnresolvableFontError, InvalidTimingError, InvalidFontSizeError
        For the first offending field, checked in that order.
    """
    label = f"Text overlay {index + 1}"
    if not is_effective_overlay_text(overlay.text) and not overlay.text_elements:
        raise ValidationError(f"{label} has empty text.", overlay_index=index)

    _validate_font(overlay.font_family, font_resolver, index)
    _validate_timing(overlay.start_time, overlay.end_time, index, label)
    _validate_font_size(overlay.font_size, index, label)

    for el_idx, element in enumerate(overlay.text_elements):
        el_label = f"{label}, element {el_idx + 1}"
        if element.line < 0:
            raise ValidationError(f"{el_label} has a negative line number.", overlay_index=index)
        if "\n" in element.text:
            raise ValidationError(
                f"{el_label} text must be a single line; use the element's line number instead.",
                overlay_index=index,
            )
        if element.font_family is not None:
            _validate_font(element.font_family, font_resolver, index)
        start = overlay.start_time if element.start_time is None else element.start_time
        end = overlay.end_time if element.end_time is None else element.end_time
        _validate_timing(start, end, index, el_label)
        if element.font_size is not None:
            _validate_font_size(element.font_size, index, el_label)


def validate_overlays(
    overlays: Sequence[TextOverlay], font_resolver: FontResolver
) -> None:
    """Fail fast on the first invalid overlay."""
    if not overlays:
        raise ValidationError("No text overlays configured in text_overlays.")
    for index, overlay in enumerate(overlays):
        validate_overlay(overlay, font_resolver, index)
