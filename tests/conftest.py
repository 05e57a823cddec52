"""
Shared pytest fixtures for toml-env.

Provides:
- Isolated working directories with sample sources
  (.env, .env.local, .env.vault)
- Isolation from TOML_ENV_KEY / TOML_ENV_CONFIG_* in the real environment
"""

import os

import pytest

from _fixtures import ENV_LOCAL_SOURCE, ENV_SOURCE, VAULT_SOURCE


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep ambient keys and option variables out of every test."""
    for name in list(os.environ):
        if name == "TOML_ENV_KEY" or name.startswith("TOML_ENV_CONFIG_"):
            monkeypatch.delenv(name, raising=False)


@pytest.fixture
def project_dir(tmp_path, monkeypatch):
    """Working directory holding .env, .env.local and .env.vault."""
    (tmp_path / ".env").write_text(ENV_SOURCE, encoding="utf-8")
    (tmp_path / ".env.local").write_text(ENV_LOCAL_SOURCE, encoding="utf-8")
    (tmp_path / ".env.vault").write_text(VAULT_SOURCE, encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def fresh_key():
    """A random 32-byte key in hex."""
    return os.urandom(32).hex()
