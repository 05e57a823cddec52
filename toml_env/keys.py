"""
Key URI resolution.

A key is a URI whose password carries the raw key material and whose
``environment`` query parameter selects the vault field::

    toml-env://:key_<64 hex chars>@host/vault/.env.vault?environment=production

Scheme, host, username and path are ignored.
"""

from dataclasses import dataclass
from typing import List
from urllib.parse import parse_qs, urlsplit

from .errors import (
    InvalidKeyFormatError,
    MissingKeyEnvironmentError,
    MissingKeySecretError,
)

VAULT_FIELD_PREFIX = "VAULT_"


@dataclass(frozen=True)
class KeyDescriptor:
    """Secret and environment label extracted from a key URI."""

    secret: str
    environment: str

    @property
    def vault_field(self) -> str:
        """Vault field holding this environment's ciphertext."""
        return f"{VAULT_FIELD_PREFIX}{self.environment.upper()}"


def resolve_key(key_uri: str) -> KeyDescriptor:
    """
    Parse a key URI into a KeyDescriptor.

    Raises:
        InvalidKeyFormatError: Not a well-formed URI
        MissingKeySecretError: No password component
        MissingKeyEnvironmentError: No environment query parameter
    """
    try:
        uri = urlsplit(key_uri)
    except ValueError:
        uri = None

    if uri is None or not uri.scheme:
        raise InvalidKeyFormatError(
            "INVALID_KEY: Wrong format. Must be in valid uri format like "
            "toml-env://:key_1234@example.com/vault/.env.vault?environment=development"
        )

    if not uri.password:
        raise MissingKeySecretError("INVALID_KEY: Missing key part")

    environment = parse_qs(uri.query).get("environment", [""])[0]
    if not environment:
        raise MissingKeyEnvironmentError("INVALID_KEY: Missing environment part")

    return KeyDescriptor(secret=uri.password, environment=environment)


def split_keys(key_string: str) -> List[str]:
    """
    Split a comma-joined key string into candidate keys.

    Supports rotation: an old and a new key may both be supplied, e.g.
    ``"toml-env://:key_old@host?environment=prod,toml-env://:key_new@host?environment=prod"``.
    """
    return [key.strip() for key in key_string.split(",")]
