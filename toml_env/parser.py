"""
Structured-text parsing and the string projection used for environment maps.

Sources are TOML unless their suffix says otherwise (.yaml/.yml, .json).
Environment maps only hold strings, so every non-string value is projected to
its JSON text; ``restore_value`` inverts that projection.
"""

import json
import tomllib
from datetime import date, datetime, time
from pathlib import Path
from typing import Any, Dict, Mapping, Union

import yaml


FORMAT_TOML = "toml"
FORMAT_YAML = "yaml"
FORMAT_JSON = "json"

_SUFFIX_FORMATS = {
    ".yaml": FORMAT_YAML,
    ".yml": FORMAT_YAML,
    ".json": FORMAT_JSON,
}


def format_for(path: Union[str, Path]) -> str:
    """Pick the parser format from a file suffix (TOML by default)."""
    return _SUFFIX_FORMATS.get(Path(path).suffix.lower(), FORMAT_TOML)


def parse(text: str, fmt: str = FORMAT_TOML) -> Dict[str, Any]:
    """
    Parse configuration text into a key -> typed value mapping.

    Args:
        text: Document content
        fmt: One of "toml", "yaml", "json"

    Returns:
        Parsed mapping

    Raises:
        ValueError: If the document is malformed or its top level is not a
            mapping (tomllib.TOMLDecodeError, yaml.YAMLError and
            json.JSONDecodeError propagate as-is).
    """
    if fmt == FORMAT_TOML:
        return tomllib.loads(text)

    if fmt == FORMAT_YAML:
        data = yaml.safe_load(text)
        if data is None:
            return {}
    elif fmt == FORMAT_JSON:
        data = json.loads(text)
    else:
        raise ValueError(f"Unsupported format: {fmt}")

    if not isinstance(data, dict):
        raise ValueError(
            f"Top level of a {fmt} source must be a mapping, got {type(data).__name__}"
        )
    return {str(k): v for k, v in data.items()}


def _json_default(value: Any) -> str:
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def stringify_value(value: Any) -> str:
    """Project a typed value to the string stored in an environment map."""
    if isinstance(value, str):
        return value
    return json.dumps(value, default=_json_default)


def stringify_values(parsed: Mapping[str, Any]) -> Dict[str, str]:
    """Project every value of a parsed mapping to its string form."""
    return {key: stringify_value(value) for key, value in parsed.items()}


def restore_value(text: str) -> Any:
    """
    Invert the string projection.

    Structured values (numbers, booleans, arrays, tables) come back as Python
    objects. Text that is not JSON is returned unchanged; timestamps stay
    ISO-8601 strings.
    """
    try:
        return json.loads(text)
    except (TypeError, ValueError):
        return text
