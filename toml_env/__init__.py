"""
toml-env: TOML configuration loading for process environments

Provides:
- Loading one or more TOML/YAML/JSON sources into os.environ (or any mapping)
- First-file-wins layering across sources
- Override / no-override population policy
- Encrypted vaults (AES-256-GCM) with multi-key rotation
- Typed access to the values behind their string projection
"""

from .encryption import VaultCipher, decrypt, encrypt
from .errors import (
    DecryptionFailedError,
    EnvironmentNotFoundError,
    InvalidKeyError,
    InvalidKeyFormatError,
    InvalidKeyLengthError,
    MissingKeyEnvironmentError,
    MissingKeySecretError,
    MissingVaultDataError,
    NotAMappingError,
    TomlEnvError,
)
from .keys import KeyDescriptor, resolve_key
from .loader import ConfigLoader, config
from .options import build_options
from .parser import parse, restore_value, stringify_values
from .populate import populate
from .schema import ConfigOptions, LoadResult
from .sources import load_sources
from .vault import load_vault, locate_vault

__all__ = [
    # Loading
    "config",
    "ConfigLoader",
    "ConfigOptions",
    "LoadResult",
    "build_options",
    "load_sources",
    "load_vault",
    "locate_vault",
    "populate",

    # Parsing
    "parse",
    "stringify_values",
    "restore_value",

    # Vault crypto
    "decrypt",
    "encrypt",
    "VaultCipher",
    "KeyDescriptor",
    "resolve_key",

    # Errors
    "TomlEnvError",
    "MissingVaultDataError",
    "InvalidKeyError",
    "InvalidKeyFormatError",
    "MissingKeySecretError",
    "MissingKeyEnvironmentError",
    "InvalidKeyLengthError",
    "EnvironmentNotFoundError",
    "DecryptionFailedError",
    "NotAMappingError",
]

__version__ = "1.0.0"
