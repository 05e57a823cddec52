"""
Encrypted vault pipeline.

A vault is a TOML file with one ``VAULT_<ENVIRONMENT>`` field per deployment
environment, each holding an AES-256-GCM blob of that environment's
plaintext configuration. It is safe to commit; the key is supplied at load
time through the ``key`` option or the ``TOML_ENV_KEY`` variable.
"""

import json
import logging
import os
from pathlib import Path
from typing import Dict, Iterable, Mapping, Optional, Tuple

from .encryption import decrypt, encrypt
from .errors import EnvironmentNotFoundError, MissingVaultDataError
from .keys import resolve_key, split_keys
from .parser import parse, stringify_values
from .populate import populate
from .schema import ConfigOptions, LoadResult
from .sources import DEFAULT_SOURCE, read_sources, resolve_home

logger = logging.getLogger(__name__)

VAULT_SUFFIX = ".vault"
DEFAULT_VAULT = DEFAULT_SOURCE + VAULT_SUFFIX
KEY_ENV_VAR = "TOML_ENV_KEY"


def ensure_vault_suffix(path: str) -> str:
    """Append the vault suffix unless the path already ends with it."""
    return path if path.endswith(VAULT_SUFFIX) else f"{path}{VAULT_SUFFIX}"


def locate_vault(options: ConfigOptions) -> Optional[Path]:
    """
    Find the vault file for the given options.

    Without a path the default ``./.env.vault`` is used. Otherwise every
    path is normalized to its vault name and the first one that exists wins.

    Returns:
        Path of an existing vault, or None when there is none
    """
    if not options.path:
        candidates = [str(Path.cwd() / DEFAULT_VAULT)]
    else:
        candidates = [ensure_vault_suffix(resolve_home(p)) for p in options.path]

    for candidate in candidates:
        if os.path.exists(candidate):
            return Path(candidate)
    return None


def resolve_key_string(
    options: ConfigOptions,
    environ: Optional[Mapping[str, str]] = None,
) -> str:
    """Explicit key option first, then TOML_ENV_KEY, else empty."""
    if options.key:
        return options.key

    environ = os.environ if environ is None else environ
    return environ.get(KEY_ENV_VAR) or ""


def _decrypt_with(key_uri: str, record: Mapping[str, str]) -> str:
    descriptor = resolve_key(key_uri)

    ciphertext = record.get(descriptor.vault_field)
    if ciphertext is None:
        raise EnvironmentNotFoundError(
            f"NOT_FOUND_ENVIRONMENT: Cannot locate environment "
            f"{descriptor.vault_field} in your {DEFAULT_VAULT} file."
        )

    return decrypt(ciphertext, descriptor.secret)


def decrypt_vault(
    record: Mapping[str, str],
    key_string: str,
    debug: bool = False,
) -> str:
    """
    Decrypt a vault record with the first candidate key that works.

    Candidates are tried in order. If every candidate fails, the error from
    the last attempt is raised.
    """
    candidates = split_keys(key_string)
    last_error: Optional[Exception] = None

    for index, candidate in enumerate(candidates, start=1):
        try:
            return _decrypt_with(candidate, record)
        except Exception as e:
            last_error = e
            if debug:
                logger.debug(
                    f"Key {index} of {len(candidates)} failed: "
                    f"{getattr(e, 'code', type(e).__name__)}"
                )

    raise last_error


def load_vault(
    options: ConfigOptions,
    environ: Optional[Mapping[str, str]] = None,
) -> LoadResult:
    """
    Decrypt the vault and populate the target mapping.

    Raises:
        MissingVaultDataError: No vault file, or it parsed to nothing
        TomlEnvError: The last candidate key's failure
    """
    vault_path = locate_vault(options)
    if vault_path is None:
        raise MissingVaultDataError(
            f"MISSING_DATA: Cannot locate a vault file for {options.path or DEFAULT_VAULT}"
        )

    logger.info(f"Loading env from encrypted {vault_path.name}")

    record, _, error = read_sources(
        [str(vault_path)], options.resolved_encoding, debug=options.debug
    )
    if not record:
        raise MissingVaultDataError(
            f"MISSING_DATA: Cannot parse {vault_path} for an unknown reason"
        ) from error

    plaintext = decrypt_vault(
        record, resolve_key_string(options, environ), debug=options.debug
    )

    typed = parse(plaintext)
    parsed = stringify_values(typed)
    populate(
        options.resolve_target(),
        parsed,
        debug=options.debug,
        override=options.override,
    )

    return LoadResult(
        parsed=parsed,
        typed=typed if options.typed_output else None,
    )


def build_vault_entry(plaintext: str, key_uri: str) -> Tuple[str, str]:
    """
    Encrypt plaintext for the environment named by ``key_uri``.

    Returns:
        (vault field name, base64 blob)
    """
    descriptor = resolve_key(key_uri)
    return descriptor.vault_field, encrypt(plaintext, descriptor.secret)


def write_vault(path: Path, entries: Iterable[Tuple[str, str]]) -> Dict[str, str]:
    """
    Write vault fields to ``path``, keeping fields for other environments.

    Returns:
        All fields now in the vault
    """
    fields: Dict[str, str] = {}
    if path.exists():
        fields, _, error = read_sources([str(path)], "utf-8")
        if error is not None:
            raise error

    fields.update(entries)

    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        for name in sorted(fields):
            f.write(f"{json.dumps(name)} = {json.dumps(fields[name])}\n")

    return fields
