from typing import Any, Dict


def merge_configs(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge two raw config mappings where ``override`` has precedence.

    Used to apply a file's top-level ``defaults`` section to every overlay
    entry before parsing. Nested mappings are merged, anything else replaced.
    """
    merged = base.copy()
    for key, value in override.items():
        if isinstance(value, dict) and key in merged and isinstance(merged[key], dict):
            merged[key] = merge_configs(merged[key], value)
        else:
            merged[key] = value
    return merged
