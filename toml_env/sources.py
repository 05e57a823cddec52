"""
Source Loader for toml-env

Reads one or more configuration sources and folds them into a single
mapping. Loading is best-effort: a source that cannot be read or parsed is
recorded and skipped, and the remaining sources still load. The earliest
source that defines a key wins.
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from .parser import format_for, parse, stringify_values
from .populate import populate
from .schema import ConfigOptions, LoadResult

logger = logging.getLogger(__name__)

DEFAULT_SOURCE = ".env"


def resolve_home(path: str) -> str:
    """Expand a leading ``~`` to the user's home directory."""
    if path.startswith("~"):
        return os.path.join(os.path.expanduser("~"), path[1:].lstrip("/\\"))
    return path


def default_source_path() -> str:
    return str(Path.cwd() / DEFAULT_SOURCE)


def read_sources(
    paths: List[str],
    encoding: str,
    debug: bool = False,
) -> Tuple[Dict[str, str], Dict[str, Any], Optional[Exception]]:
    """
    Read and parse sources in order without touching any target.

    Args:
        paths: Source locations, earliest wins
        encoding: Text encoding of every source
        debug: Log failed sources

    Returns:
        (stringified mapping, typed mapping, last error or None)
    """
    parsed_all: Dict[str, str] = {}
    typed_all: Dict[str, Any] = {}
    last_error: Optional[Exception] = None

    for raw_path in paths:
        path = resolve_home(raw_path)
        try:
            with open(path, "r", encoding=encoding) as f:
                parsed = parse(f.read(), format_for(path))
            projected = stringify_values(parsed)
        except Exception as e:
            if debug:
                logger.debug(f"Failed to load {path} {e}")
            last_error = e
            continue

        populate(parsed_all, projected, override=False)
        for key, value in parsed.items():
            typed_all.setdefault(key, value)

    return parsed_all, typed_all, last_error


def load_sources(options: ConfigOptions) -> LoadResult:
    """
    Load plaintext sources and populate the target mapping.

    Uses ``options.path`` (or ``./.env``), ``options.encoding``, and
    populates ``options.resolve_target()`` honoring ``options.override``.

    Returns:
        LoadResult with every parsed key and the last read/parse error
    """
    if not options.encoding and options.debug:
        logger.debug("No encoding is specified. UTF-8 is used by default")

    paths = options.path or [default_source_path()]
    parsed_all, typed_all, last_error = read_sources(
        paths, options.resolved_encoding, debug=options.debug
    )

    populate(
        options.resolve_target(),
        parsed_all,
        debug=options.debug,
        override=options.override,
    )

    return LoadResult(
        parsed=parsed_all,
        typed=typed_all if options.typed_output else None,
        error=last_error,
    )
