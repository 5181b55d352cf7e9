"""Configuration used by the CLI when no ``--config`` file is given."""

from typing import Any, Dict, List

_CAPTION_STYLE: Dict[str, Any] = {
    "font_size": 4,
    "font_family": "dm-serif-display-regular",
    "font_color": "white",
    "position": {"x": "50%", "y": "50%"},
    "text_align": "center",
    "text_outline": {"enabled": True, "color": "black", "width": 2},
    "text_shadow": {"enabled": True, "color": "black", "offset_x": 1, "offset_y": 1},
    "text_box": {"enabled": False, "color": "black@0.7", "padding": 8},
    "animation": {"enabled": True, "type": "fade-in", "duration": 0.3},
}

_CAPTIONS = [
    ("Hello World,", 0.0, 1.36),
    ("It is Sunday,", 1.36, 2.72),
    ("July 20th,", 2.72, 4.08),
    ("and I", 4.08, 5.44),
    ("am Heudi,", 5.44, 6.8),
    ("a web", 6.8, 8.16),
    ("developer.", 8.16, 9.52),
]


def default_config() -> Dict[str, Any]:
    """Return a fresh copy of the built-in caption configuration."""
    overlays: List[Dict[str, Any]] = [
        {"text": text, "start_time": start, "end_time": end}
        for text, start, end in _CAPTIONS
    ]
    return {"defaults": {k: (dict(v) if isinstance(v, dict) else v) for k, v in _CAPTION_STYLE.items()},
            "text_overlays": overlays}
