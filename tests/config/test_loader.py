"""Tests for config/loader.py module.

Covers:
- _load_yaml() function
- _deep_merge() function
- load_config() precedence and error reporting
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any
from unittest.mock import patch

import pytest

from sanelint.config.loader import (
    GLOBAL_CONFIG_PATH,
    REPO_CONFIG_NAME,
    _deep_merge,
    _load_yaml,
    load_config,
)
from sanelint.config.models import LoggingConfig
from sanelint.core.errors import ConfigError, ErrorCode

NO_GLOBAL = "sanelint.config.loader.GLOBAL_CONFIG_PATH"


class TestLoadYaml:
    """Tests for _load_yaml function."""

    def test_returns_empty_dict_for_missing_file(self, tmp_path: Path) -> None:
        """Returns empty dict when file doesn't exist."""
        assert _load_yaml(tmp_path / "nonexistent.yml") == {}

    def test_loads_valid_yaml(self, tmp_path: Path) -> None:
        """Loads valid YAML content."""
        yaml_file = tmp_path / "config.yml"
        yaml_file.write_text("logging:\n  level: DEBUG\n")
        assert _load_yaml(yaml_file) == {"logging": {"level": "DEBUG"}}

    def test_returns_empty_for_empty_file(self, tmp_path: Path) -> None:
        """Returns empty dict for empty file."""
        yaml_file = tmp_path / "empty.yml"
        yaml_file.write_text("")
        assert _load_yaml(yaml_file) == {}

    def test_raises_config_error_for_invalid_yaml(self, tmp_path: Path) -> None:
        """Raises ConfigError for invalid YAML syntax."""
        yaml_file = tmp_path / "invalid.yml"
        yaml_file.write_text("rules:\n  disallow_methods:\n    - invalid: [unclosed")

        with pytest.raises(ConfigError) as exc_info:
            _load_yaml(yaml_file)
        assert exc_info.value.code == ErrorCode.CONFIG_PARSE_ERROR

    def test_raises_config_error_for_non_mapping(self, tmp_path: Path) -> None:
        """A top-level list is not a configuration."""
        yaml_file = tmp_path / "list.yml"
        yaml_file.write_text("- a\n- b\n")

        with pytest.raises(ConfigError):
            _load_yaml(yaml_file)


class TestDeepMerge:
    """Tests for _deep_merge function."""

    def test_override_wins(self) -> None:
        """Override values replace base values."""
        assert _deep_merge({"a": 1, "b": 2}, {"b": 3}) == {"a": 1, "b": 3}

    def test_nested_merge(self) -> None:
        """Nested dicts are merged recursively."""
        base = {"rules": {"outdated_comments": {"enabled": True}, "x": {"enabled": True}}}
        override = {"rules": {"outdated_comments": {"enabled": False}}}
        assert _deep_merge(base, override) == {
            "rules": {"outdated_comments": {"enabled": False}, "x": {"enabled": True}}
        }

    def test_override_replaces_non_dict(self) -> None:
        """Non-dict override replaces dict base."""
        base: dict[str, Any] = {"a": {"nested": 1}}
        override: dict[str, Any] = {"a": "simple"}
        assert _deep_merge(base, override) == {"a": "simple"}

    def test_does_not_mutate_base(self) -> None:
        """Base dict is not mutated."""
        base = {"a": 1}
        _deep_merge(base, {"b": 2})
        assert base == {"a": 1}


class TestLoadConfig:
    """Tests for load_config function."""

    def test_returns_default_config_when_no_files(self, tmp_path: Path) -> None:
        """Returns default config when no config files exist."""
        with patch(NO_GLOBAL, tmp_path / "none.yml"):
            config = load_config(tmp_path)
        assert config.logging.level == "WARNING"
        assert config.runner.max_fix_iterations == 5
        assert config.rules.empty_lines_around_multiline_block.enabled

    def test_loads_repo_config(self, tmp_path: Path) -> None:
        """Loads config from the repo's .sanelint.yml."""
        (tmp_path / REPO_CONFIG_NAME).write_text(
            "rules:\n  outdated_comments:\n    enabled: false\n"
        )

        with patch(NO_GLOBAL, tmp_path / "none.yml"):
            config = load_config(tmp_path)
        assert config.rules.outdated_comments.enabled is False
        assert config.rules.no_method_call_after_end.enabled is True

    def test_repo_config_overrides_global(self, tmp_path: Path) -> None:
        """Repo settings win over the global file, other keys survive."""
        global_file = tmp_path / "global.yml"
        global_file.write_text("logging:\n  level: INFO\nrunner:\n  max_fix_iterations: 2\n")
        (tmp_path / REPO_CONFIG_NAME).write_text("logging:\n  level: DEBUG\n")

        with patch(NO_GLOBAL, global_file):
            config = load_config(tmp_path)
        assert config.logging.level == "DEBUG"
        assert config.runner.max_fix_iterations == 2

    def test_explicit_config_file(self, tmp_path: Path) -> None:
        """An explicit file replaces the repo lookup."""
        (tmp_path / REPO_CONFIG_NAME).write_text("logging:\n  level: DEBUG\n")
        explicit = tmp_path / "custom.yml"
        explicit.write_text("logging:\n  level: ERROR\n")

        with patch(NO_GLOBAL, tmp_path / "none.yml"):
            config = load_config(tmp_path, config_file=explicit)
        assert config.logging.level == "ERROR"

    def test_missing_explicit_config_file(self, tmp_path: Path) -> None:
        """A named config file must exist."""
        with patch(NO_GLOBAL, tmp_path / "none.yml"), pytest.raises(ConfigError) as exc_info:
            load_config(tmp_path, config_file=tmp_path / "absent.yml")
        assert exc_info.value.code == ErrorCode.CONFIG_FILE_NOT_FOUND

    def test_disallow_methods_config(self, tmp_path: Path) -> None:
        """Replacement entries accept the ``with`` key."""
        (tmp_path / REPO_CONFIG_NAME).write_text(
            "rules:\n"
            "  disallow_methods:\n"
            "    replace_methods:\n"
            "      deliver_now:\n"
            "        with: deliver_later\n"
            "        reason: it is async\n"
            "    prohibited_methods:\n"
            "      dangerous_method:\n"
            "        reason: it is unsafe\n"
        )

        with patch(NO_GLOBAL, tmp_path / "none.yml"):
            config = load_config(tmp_path)
        rule = config.rules.disallow_methods
        assert rule.replace_methods["deliver_now"].with_ == "deliver_later"
        assert rule.prohibited_methods["dangerous_method"].reason == "it is unsafe"

    def test_env_vars_override_yaml(self, tmp_path: Path) -> None:
        """Environment variables override YAML config."""
        (tmp_path / REPO_CONFIG_NAME).write_text("logging:\n  level: INFO\n")

        with (
            patch(NO_GLOBAL, tmp_path / "none.yml"),
            patch.dict(os.environ, {"SANELINT__LOGGING__LEVEL": "ERROR"}),
        ):
            config = load_config(tmp_path)
        assert config.logging.level == "ERROR"

    def test_kwargs_override_all(self, tmp_path: Path) -> None:
        """Keyword arguments override everything."""
        (tmp_path / REPO_CONFIG_NAME).write_text("logging:\n  level: INFO\n")

        with patch(NO_GLOBAL, tmp_path / "none.yml"):
            config = load_config(tmp_path, logging=LoggingConfig(level="CRITICAL"))
        assert config.logging.level == "CRITICAL"

    def test_raises_config_error_for_invalid_value(self, tmp_path: Path) -> None:
        """Raises ConfigError for invalid config values."""
        (tmp_path / REPO_CONFIG_NAME).write_text("runner:\n  max_fix_iterations: 0\n")

        with patch(NO_GLOBAL, tmp_path / "none.yml"), pytest.raises(ConfigError) as exc_info:
            load_config(tmp_path)
        assert exc_info.value.code == ErrorCode.CONFIG_INVALID_VALUE
        assert "max_fix_iterations" in exc_info.value.details["field"]


class TestGlobalConfigPath:
    """Tests for GLOBAL_CONFIG_PATH constant."""

    def test_is_in_user_config(self) -> None:
        """Path is in the user config directory."""
        assert isinstance(GLOBAL_CONFIG_PATH, Path)
        assert "sanelint" in str(GLOBAL_CONFIG_PATH)
