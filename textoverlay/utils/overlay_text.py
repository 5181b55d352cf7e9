"""Helper utilities for normalizing overlay strings and escaping them for drawtext."""
from __future__ import annotations

import re
from typing import Optional

_BR_TAG_PATTERN = re.compile(r"<br\s*/?>", re.IGNORECASE)


def normalize_overlay_text(text: str | None) -> str:
    """Normalize overlay text so that line breaks are real newline characters.

    Supported markers are:

    - literal ``\\n`` sequences inside YAML/JSON strings
    - Windows style newlines (``\\r\\n``) and bare ``\\r``
    - HTML style ``<br>`` tags (case insensitive, optional slash)

    ``None`` becomes an empty string.
    """

    if text is None:
        return ""

    value = str(text)
    if not value:
        return ""

    value = value.replace("\r\n", "\n").replace("\r", "\n")
    value = value.replace("\\n", "\n")
    value = _BR_TAG_PATTERN.sub("\n", value)
    return value


def is_effective_overlay_text(text: Optional[str]) -> bool:
    """Return True if the given text would draw at least one visible character."""
    if text is None:
        return False
    return bool(normalize_overlay_text(text).strip())


def escape_drawtext_text(text: str) -> str:
    """Escape single quotes and colons, both reserved in drawtext option values."""
    return text.replace("'", "\\'").replace(":", "\\:")


def normalize_font_path(path: str) -> str:
    # drawtext accepts forward slashes on every platform
    return path.replace("\\", "/")
