"""
Merge a resolved mapping into a target environment map.
"""

import logging
from typing import Dict, Mapping, MutableMapping

from .errors import NotAMappingError

logger = logging.getLogger(__name__)

WRITTEN = "written"
OVERWRITTEN = "overwritten"
PRESERVED = "preserved"


def populate(
    target: MutableMapping[str, str],
    source: Mapping[str, str],
    debug: bool = False,
    override: bool = False,
) -> Dict[str, str]:
    """
    Write ``source`` into ``target`` in place.

    Keys absent from the target are always written. Keys already present are
    replaced only when ``override`` is set, whatever their current value
    (including the empty string).

    Args:
        target: Mapping to mutate (usually os.environ)
        source: Resolved key/value pairs
        debug: Log one line per key
        override: Replace values already present in the target

    Returns:
        Decision per key: "written", "overwritten" or "preserved"

    Raises:
        NotAMappingError: If either argument is not a mapping
    """
    if not isinstance(source, Mapping) or not isinstance(target, MutableMapping):
        raise NotAMappingError(
            "OBJECT_REQUIRED: Please check the target argument being passed to populate"
        )

    decisions: Dict[str, str] = {}
    for key, value in source.items():
        if key not in target:
            target[key] = value
            decisions[key] = WRITTEN
            if debug:
                logger.debug(f'"{key}" was not defined and was written')
        elif override:
            target[key] = value
            decisions[key] = OVERWRITTEN
            if debug:
                logger.debug(f'"{key}" is already defined and WAS overwritten')
        else:
            decisions[key] = PRESERVED
            if debug:
                logger.debug(f'"{key}" is already defined and was NOT overwritten')

    return decisions
