from typing import Any, Dict

import yaml
from yaml import YAMLError

from ...exceptions import ValidationError


def load_config(config_path: str) -> Dict[str, Any]:
    """Load an overlay configuration file with friendly validation errors.

    Parameters
    ----------
    config_path: str
        Path to a YAML or JSON file (UTF-8).

    Returns
    -------
    Dict[str, Any]

    Raises
    ------
    ValidationError
        When the file is not found, the syntax is invalid or the document is
        not a mapping.
    """
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except YAMLError as e:
        mark = getattr(e, "problem_mark", None)
        line = mark.line + 1 if mark else None
        column = mark.column + 1 if mark else None
        raise ValidationError(
            f"Invalid YAML syntax in {config_path}: {e}",
            line_number=line,
            column_number=column,
        )
    except FileNotFoundError:
        raise ValidationError(f"Configuration file not found: {config_path}")

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError(f"Configuration root in {config_path} must be a mapping.")
    return data
