"""
Option and result definitions for toml-env.

Uses Pydantic for option validation so that raw strings from environment
variables and CLI arguments are coerced in one place.
"""

import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, MutableMapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


DEFAULT_ENCODING = "utf-8"


class ConfigOptions(BaseModel):
    """Options recognized by config() and the loaders."""

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    path: Optional[List[str]] = Field(
        default=None,
        description="Source location(s); a single path or an ordered list"
    )
    encoding: Optional[str] = Field(
        default=None,
        description="Text encoding of the sources (utf-8 when unset)"
    )
    debug: bool = Field(
        default=False,
        description="Emit debug diagnostics"
    )
    override: bool = Field(
        default=False,
        description="Replace values already present in the target"
    )
    key: Optional[str] = Field(
        default=None,
        description="Explicit decryption key URI(s), comma-joined for rotation"
    )
    target: Optional[Any] = Field(
        default=None,
        description="Mapping to populate (os.environ when unset)"
    )
    typed_output: bool = Field(
        default=False,
        description="Also return the typed values alongside the stringified ones"
    )

    @field_validator("path", mode="before")
    @classmethod
    def normalize_path(cls, v):
        """Resolve a single path or a list of paths into a list of strings."""
        if v is None:
            return None
        if isinstance(v, (str, os.PathLike)):
            v = [v]
        paths = [os.fspath(p) for p in v if os.fspath(p)]
        return paths or None

    @property
    def resolved_encoding(self) -> str:
        return self.encoding or DEFAULT_ENCODING

    def resolve_target(self) -> MutableMapping[str, str]:
        """Return the caller's target mapping, or the process environment."""
        if self.target is not None:
            return self.target
        return os.environ


@dataclass
class LoadResult:
    """
    Outcome of a load.

    ``error`` holds the last recoverable failure (a missing or unparsable
    source); it never hides the sources that did load.
    """

    parsed: Dict[str, str] = field(default_factory=dict)
    typed: Optional[Dict[str, Any]] = None
    error: Optional[Exception] = None
