"""
Build ConfigOptions from environment variables and command-line arguments.

Precedence (highest to lowest):
1. Caller-supplied values
2. CLI arguments (``toml_env_config_<name>=<value>``)
3. Environment variables (``TOML_ENV_CONFIG_<NAME>``)
4. Defaults
"""

import os
import re
from typing import Any, Dict, Mapping, Optional, Sequence

from .schema import ConfigOptions

ENV_PREFIX = "TOML_ENV_CONFIG_"

OPTION_NAMES = ("encoding", "path", "debug", "override", "key", "typed_output")

ARG_PATTERN = re.compile(
    r"^toml_env_config_(" + "|".join(OPTION_NAMES) + r")=(.+)$"
)


def options_from_env(environ: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
    """
    Collect raw option values from TOML_ENV_CONFIG_* variables.

    - TOML_ENV_CONFIG_PATH -> path
    - TOML_ENV_CONFIG_DEBUG -> debug
    - TOML_ENV_CONFIG_KEY -> key
    - etc.
    """
    environ = os.environ if environ is None else environ

    options: Dict[str, Any] = {}
    for name in OPTION_NAMES:
        value = environ.get(f"{ENV_PREFIX}{name.upper()}")
        if value:
            options[name] = value
    return options


def options_from_argv(argv: Sequence[str]) -> Dict[str, Any]:
    """Collect ``toml_env_config_<name>=<value>`` arguments; empty values are ignored."""
    options: Dict[str, Any] = {}
    for arg in argv:
        match = ARG_PATTERN.match(arg)
        if match:
            options[match.group(1)] = match.group(2)
    return options


def build_options(
    caller: Optional[Dict[str, Any]] = None,
    environ: Optional[Mapping[str, str]] = None,
    argv: Optional[Sequence[str]] = None,
) -> ConfigOptions:
    """
    Merge every option source and validate the result.

    Args:
        caller: Explicit values (highest precedence)
        environ: Environment to scan (os.environ when None)
        argv: Arguments to scan (none when None)

    Returns:
        Validated ConfigOptions
    """
    merged: Dict[str, Any] = {}
    merged.update(options_from_env(environ))
    merged.update(options_from_argv(argv or []))
    merged.update({k: v for k, v in (caller or {}).items() if v is not None})
    return ConfigOptions(**merged)
