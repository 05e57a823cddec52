"""
Configuration Loader for toml-env

Decides between the plaintext sources and the encrypted vault:

1. No key (neither the ``key`` option nor TOML_ENV_KEY): load plaintext
   sources.
2. Key set but no vault file: warn and load plaintext sources.
3. Key set and vault present: decrypt the vault.
"""

import logging
import os
from typing import Any, Mapping, Optional

from .schema import ConfigOptions, LoadResult
from .sources import load_sources
from .vault import DEFAULT_VAULT, KEY_ENV_VAR, load_vault, locate_vault, resolve_key_string

logger = logging.getLogger(__name__)


class ConfigLoader:
    """
    Loads configuration into a target mapping.

    The target is mutated in place; values already present are kept unless
    ``override`` is set.
    """

    def __init__(
        self,
        options: Optional[ConfigOptions] = None,
        environ: Optional[Mapping[str, str]] = None,
    ):
        """
        Initialize configuration loader.

        Args:
            options: Validated options (defaults when None)
            environ: Where TOML_ENV_KEY is looked up (os.environ when None)
        """
        self.options = options or ConfigOptions()
        self.environ = os.environ if environ is None else environ

    def load(self) -> LoadResult:
        """
        Load configuration from the vault or the plaintext sources.

        Returns:
            LoadResult of whichever path ran
        """
        if not resolve_key_string(self.options, self.environ):
            return load_sources(self.options)

        vault_path = locate_vault(self.options)
        if vault_path is None:
            logger.warning(
                f"You set {KEY_ENV_VAR} but you are missing a {DEFAULT_VAULT} file "
                f"for {self.options.path or DEFAULT_VAULT}. Did you forget to build it?"
            )
            return load_sources(self.options)

        return load_vault(self.options, self.environ)


def config(options: Optional[ConfigOptions] = None, **kwargs: Any) -> LoadResult:
    """
    Convenience function to load configuration.

    Args:
        options: Prebuilt options; keyword arguments are applied on top
        **kwargs: ConfigOptions fields (path, encoding, debug, override,
            key, target, typed_output)

    Returns:
        LoadResult

    Example:
        >>> result = config(path=[".env.local", ".env"], override=True)
        >>> result.parsed["DATABASE_URL"]
    """
    if options is None:
        options = ConfigOptions(**kwargs)
    elif kwargs:
        options = ConfigOptions(**{**dict(options), **kwargs})

    return ConfigLoader(options).load()
