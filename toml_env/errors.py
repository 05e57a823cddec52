"""
Exception hierarchy for toml-env.

Every error raised by the package carries a stable ``code`` so callers can
branch on the failure kind without matching message text.
"""

from typing import Optional


class TomlEnvError(Exception):
    """Base exception for all toml-env errors."""
    code = "TOML_ENV_ERROR"

    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(message)
        if code is not None:
            self.code = code


class MissingVaultDataError(TomlEnvError):
    """Vault file was located but yielded no parsed content."""
    code = "MISSING_DATA"


# ============================================================================
# KEY ERRORS
# ============================================================================

class InvalidKeyError(TomlEnvError):
    """Key material could not be used."""
    code = "INVALID_KEY"


class InvalidKeyFormatError(InvalidKeyError):
    """Key string is not a well-formed URI."""


class MissingKeySecretError(InvalidKeyError):
    """Key URI has no password component."""


class MissingKeyEnvironmentError(InvalidKeyError):
    """Key URI has no environment query parameter."""


class InvalidKeyLengthError(InvalidKeyError):
    """Key does not end in 64 hex characters (32 bytes)."""


# ============================================================================
# VAULT ERRORS
# ============================================================================

class EnvironmentNotFoundError(TomlEnvError):
    """Vault has no field for the requested environment."""
    code = "NOT_FOUND_ENVIRONMENT"


class DecryptionFailedError(TomlEnvError):
    """Authentication tag did not verify."""
    code = "DECRYPTION_FAILED"


class NotAMappingError(TomlEnvError, TypeError):
    """populate() was handed something that is not a key/value mapping."""
    code = "OBJECT_REQUIRED"
