#!/usr/bin/env python3
"""
toml-env command line.

Usage:
    toml-env run [toml_env_config_<name>=<value> ...] [--path P] -- COMMAND ...
    toml-env encrypt --key KEY_URI [--source .env] [--vault .env.vault]

Exit Codes:
    0   Success (``run`` exits with the command's own status)
    1   toml-env error (bad key, undecryptable vault, ...)
    2   Usage error
    127 Command not found
"""

import argparse
import logging
import os
import subprocess
import sys
from pathlib import Path
from typing import List, Optional

from .errors import MissingKeySecretError, TomlEnvError
from .keys import split_keys
from .loader import ConfigLoader
from .options import ARG_PATTERN, build_options
from .parser import FORMAT_TOML, format_for, parse
from .schema import DEFAULT_ENCODING
from .sources import DEFAULT_SOURCE, resolve_home
from .vault import KEY_ENV_VAR, build_vault_entry, ensure_vault_suffix, write_vault

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="toml-env",
        description="Load TOML configuration (plain or vault-encrypted) into the environment",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="cmd", required=True)

    # run
    p_run = sub.add_parser("run", help="Run a command with the loaded configuration")
    p_run.add_argument("--path", action="append", default=None,
                       help="Source path (repeatable; first file wins)")
    p_run.add_argument("--encoding", default=None, help="Source encoding (default: utf-8)")
    p_run.add_argument("--key", default=None,
                       help=f"Decryption key URI(s) (default: ${KEY_ENV_VAR})")
    p_run.add_argument("--override", action="store_true",
                       help="Replace variables already set in the environment")
    p_run.add_argument("--debug", action="store_true", help="Log per-key decisions")
    p_run.add_argument("command", nargs=argparse.REMAINDER, help="Command to run (after --)")

    # encrypt
    p_enc = sub.add_parser("encrypt", help="Encrypt a source into its vault field")
    p_enc.add_argument("--key", default=None,
                       help=f"Key URI naming the environment (default: ${KEY_ENV_VAR})")
    p_enc.add_argument("--source", default=DEFAULT_SOURCE,
                       help="Plaintext source, TOML only (default: .env)")
    p_enc.add_argument("--vault", default=None, help="Vault file (default: <source>.vault)")
    p_enc.add_argument("--encoding", default=DEFAULT_ENCODING, help="Source encoding")

    return parser


def _run(args: argparse.Namespace, config_args: List[str]) -> int:
    command = list(args.command)
    if command and command[0] == "--":
        command = command[1:]
    if not command:
        raise SystemExit("toml-env run: missing command")

    env = dict(os.environ)
    options = build_options(
        caller={
            "path": args.path,
            "encoding": args.encoding,
            "key": args.key,
            "override": args.override or None,
            "debug": args.debug or None,
            "target": env,
        },
        environ=os.environ,
        argv=config_args,
    )
    if options.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    result = ConfigLoader(options).load()
    if result.error is not None:
        logger.warning(f"Some sources could not be loaded: {result.error}")

    try:
        proc = subprocess.run(command, env=env)
    except FileNotFoundError:
        print(f"toml-env: command not found: {command[0]}", file=sys.stderr)
        return 127
    return proc.returncode


def _encrypt(args: argparse.Namespace) -> int:
    key_string = args.key or os.environ.get(KEY_ENV_VAR) or ""
    key_uri = split_keys(key_string)[0]
    if not key_uri:
        raise MissingKeySecretError(f"INVALID_KEY: Pass --key or set {KEY_ENV_VAR}")

    source = resolve_home(args.source)
    if format_for(source) != FORMAT_TOML:
        raise ValueError(f"Vault plaintext must be TOML, got {source}")

    with open(source, "r", encoding=args.encoding) as f:
        plaintext = f.read()

    # Refuse to encrypt something the loader could not parse back
    parse(plaintext)

    vault = Path(args.vault) if args.vault else Path(ensure_vault_suffix(source))
    field, blob = build_vault_entry(plaintext, key_uri)
    write_vault(vault, [(field, blob)])

    print(f"Wrote {field} to {vault}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)

    # toml_env_config_<name>=<value> arguments may appear anywhere before "--"
    split_at = argv.index("--") if "--" in argv else len(argv)
    config_args = [a for a in argv[:split_at] if ARG_PATTERN.match(a)]
    argv = [a for a in argv[:split_at] if a not in config_args] + argv[split_at:]

    parser = _build_parser()
    args = parser.parse_args(argv)

    debug = args.verbose or getattr(args, "debug", False)
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    try:
        if args.cmd == "run":
            return _run(args, config_args)
        return _encrypt(args)
    except (TomlEnvError, OSError, ValueError) as e:
        print(f"toml-env: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
