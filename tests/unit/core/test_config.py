"""Unit tests for tool configuration.

Tests for ToolConfig, HTTPConfig and config file I/O.
"""

import tomllib
from pathlib import Path

import pytest
from pkgcollection.core.config import (
    ConfigError,
    ConfigParseError,
    HTTPConfig,
    ToolConfig,
    load_config,
    save_config,
)
from pydantic import ValidationError


class TestHTTPConfig:
    """Tests for HTTPConfig model."""

    def test_defaults(self) -> None:
        """Defaults match the documented request policy."""
        config = HTTPConfig()

        assert config.timeout_seconds == 2.0
        assert config.max_attempts == 3
        assert config.base_delay_seconds == 0.05
        assert config.circuit_breaker_max_errors == 50
        assert config.circuit_breaker_age_seconds == 30.0

    def test_rejects_zero_attempts(self) -> None:
        """At least one attempt is required."""
        with pytest.raises(ValidationError):
            HTTPConfig(max_attempts=0)

    def test_rejects_unknown_fields(self) -> None:
        """Unknown fields are rejected."""
        with pytest.raises(ValidationError):
            HTTPConfig.model_validate({"retries": 5})


class TestToolConfig:
    """Tests for ToolConfig model."""

    def test_defaults(self) -> None:
        """Defaults leave everything off."""
        config = ToolConfig()

        assert config.working_directory is None
        assert config.pretty_printed is False
        assert config.auth_tokens == []
        assert config.http == HTTPConfig()


class TestLoadConfig:
    """Tests for load_config."""

    def test_missing_file_returns_defaults(self, tmp_path: Path) -> None:
        """A missing config file yields the defaults."""
        assert load_config(tmp_path / "config.toml") == ToolConfig()

    def test_loads_values(self, tmp_path: Path) -> None:
        """Values from the file are loaded."""
        path = tmp_path / "config.toml"
        path.write_text(
            'working_directory = "/srv/clones"\n'
            "pretty_printed = true\n"
            'auth_tokens = ["github:github.com:abc"]\n'
            "\n[http]\nmax_attempts = 5\n"
        )

        config = load_config(path)

        assert config.working_directory == Path("/srv/clones")
        assert config.pretty_printed is True
        assert config.auth_tokens == ["github:github.com:abc"]
        assert config.http.max_attempts == 5
        assert config.http.timeout_seconds == 2.0

    def test_invalid_toml(self, tmp_path: Path) -> None:
        """Invalid TOML raises ConfigParseError."""
        path = tmp_path / "config.toml"
        path.write_text("pretty_printed = \n")

        with pytest.raises(ConfigParseError, match="Invalid TOML syntax"):
            load_config(path)

    def test_invalid_content(self, tmp_path: Path) -> None:
        """Unknown keys raise ConfigError."""
        path = tmp_path / "config.toml"
        path.write_text("colour = true\n")

        with pytest.raises(ConfigError, match="Invalid config content"):
            load_config(path)


class TestSaveConfig:
    """Tests for save_config."""

    def test_round_trip(self, tmp_path: Path) -> None:
        """A saved config loads back unchanged."""
        path = tmp_path / "nested" / "config.toml"
        config = ToolConfig(
            working_directory=Path("/srv/clones"),
            pretty_printed=True,
            auth_tokens=["gitlab:gitlab.example.com:xyz"],
            http=HTTPConfig(max_attempts=4),
        )

        saved = save_config(config, path)

        assert saved == path
        assert load_config(path) == config

    def test_omits_unset_working_directory(self, tmp_path: Path) -> None:
        """TOML has no null, so an unset working directory is left out."""
        path = save_config(ToolConfig(), tmp_path / "config.toml")

        with open(path, "rb") as f:
            data = tomllib.load(f)

        assert "working_directory" not in data
        assert data["http"]["timeout_seconds"] == 2.0

    def test_no_temp_files_left(self, tmp_path: Path) -> None:
        """The atomic write leaves no temporary file behind."""
        save_config(ToolConfig(), tmp_path / "config.toml")

        assert [p.name for p in tmp_path.iterdir()] == ["config.toml"]
