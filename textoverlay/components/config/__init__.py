from .defaults import default_config
from .io import load_config
from .merge import merge_configs
from .parse import parse_overlay, parse_overlays
from .validate import validate_overlay, validate_overlays

__all__ = [
    "default_config",
    "load_config",
    "merge_configs",
    "parse_overlay",
    "parse_overlays",
    "validate_overlay",
    "validate_overlays",
]
