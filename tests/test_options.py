"""
Tests for option scanning and validation.
"""

import os

import pytest
from pydantic import ValidationError

from toml_env import ConfigOptions, build_options
from toml_env.options import options_from_argv, options_from_env

ARGV_PREFIX = ["python", "-m", "app"]


class TestOptionsFromArgv:
    """Test toml_env_config_<name>=<value> arguments."""

    @pytest.mark.parametrize("arg,expected", [
        ("toml_env_config_encoding=utf8", {"encoding": "utf8"}),
        ("toml_env_config_path=/custom/path/to/your/env/vars", {"path": "/custom/path/to/your/env/vars"}),
        ("toml_env_config_debug=true", {"debug": "true"}),
        ("toml_env_config_override=true", {"override": "true"}),
        ("toml_env_config_key=toml-env://:k@h?environment=dev", {"key": "toml-env://:k@h?environment=dev"}),
        ("toml_env_config_typed_output=1", {"typed_output": "1"}),
    ])
    def test_matches_option(self, arg, expected):
        assert options_from_argv(ARGV_PREFIX + [arg]) == expected

    def test_ignores_empty_values(self):
        assert options_from_argv(ARGV_PREFIX + ["toml_env_config_path="]) == {}

    def test_ignores_unsupported_options(self):
        assert options_from_argv(ARGV_PREFIX + ["toml_env_config_foo=bar"]) == {}


class TestOptionsFromEnv:
    """Test TOML_ENV_CONFIG_* variables."""

    def test_sets_nothing(self):
        assert options_from_env({}) == {}

    @pytest.mark.parametrize("var,value,expected", [
        ("TOML_ENV_CONFIG_ENCODING", "latin1", {"encoding": "latin1"}),
        ("TOML_ENV_CONFIG_PATH", "~/.env.test", {"path": "~/.env.test"}),
        ("TOML_ENV_CONFIG_DEBUG", "true", {"debug": "true"}),
        ("TOML_ENV_CONFIG_OVERRIDE", "true", {"override": "true"}),
        ("TOML_ENV_CONFIG_KEY", "toml-env://:k@h?environment=dev", {"key": "toml-env://:k@h?environment=dev"}),
    ])
    def test_sets_option(self, var, value, expected):
        assert options_from_env({var: value}) == expected

    def test_ignores_empty_values(self):
        assert options_from_env({"TOML_ENV_CONFIG_DEBUG": ""}) == {}

    def test_reads_os_environ_by_default(self, monkeypatch):
        monkeypatch.setenv("TOML_ENV_CONFIG_OVERRIDE", "yes")
        assert options_from_env() == {"override": "yes"}


class TestBuildOptions:
    """Test merging and validating option sources."""

    def test_defaults(self):
        options = build_options(environ={})
        assert options.path is None
        assert options.resolved_encoding == "utf-8"
        assert options.debug is False
        assert options.override is False
        assert options.typed_output is False

    def test_cli_wins_over_environment(self):
        options = build_options(
            environ={"TOML_ENV_CONFIG_PATH": "/tmp/dne/path/.env.should.break"},
            argv=["toml_env_config_path=./test/.env.toml"],
        )
        assert options.path == ["./test/.env.toml"]

    def test_caller_wins_over_cli(self):
        options = build_options(
            caller={"path": "caller.toml", "override": None},
            environ={"TOML_ENV_CONFIG_OVERRIDE": "true"},
            argv=["toml_env_config_path=cli.toml"],
        )
        assert options.path == ["caller.toml"]
        assert options.override is True

    def test_boolean_strings_are_coerced(self):
        options = build_options(environ={"TOML_ENV_CONFIG_DEBUG": "false",
                                         "TOML_ENV_CONFIG_OVERRIDE": "1"})
        assert options.debug is False
        assert options.override is True

    def test_invalid_boolean_is_rejected(self):
        with pytest.raises(ValidationError):
            build_options(environ={"TOML_ENV_CONFIG_DEBUG": "maybe"})


class TestConfigOptions:
    """Test option normalization."""

    def test_single_path_becomes_list(self):
        assert ConfigOptions(path="a.toml").path == ["a.toml"]

    def test_list_is_kept_in_order(self):
        assert ConfigOptions(path=["b", "a"]).path == ["b", "a"]

    def test_empty_path_means_default(self):
        assert ConfigOptions(path="").path is None
        assert ConfigOptions(path=[]).path is None

    def test_unknown_fields_are_rejected(self):
        with pytest.raises(ValidationError):
            ConfigOptions(colour="blue")

    def test_target_is_kept_by_identity(self):
        target = {}
        assert ConfigOptions(target=target).resolve_target() is target

    def test_default_target_is_os_environ(self):
        assert ConfigOptions().resolve_target() is os.environ
