"""Tool configuration and settings.

This module provides the configuration model and I/O functions for the
generator defaults: working directory, output formatting, hosting-service
auth tokens and the HTTP request policy used by the metadata providers.

Configuration is stored in ~/.config/pkgcollection/config.toml
"""

import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from pkgcollection.core.paths import get_config_path


class HTTPConfig(BaseModel):
    """Request policy for hosting-service API calls.

    Attributes:
        timeout_seconds: Per-request timeout.
        max_attempts: Attempts per request, including the first one.
        base_delay_seconds: Backoff before the second attempt; doubles after.
        circuit_breaker_max_errors: Errors within the window that open the
            circuit for a host.
        circuit_breaker_age_seconds: Length of the error window.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    timeout_seconds: Annotated[
        float,
        Field(gt=0, le=300, description="Per-request timeout in seconds"),
    ] = 2.0
    max_attempts: Annotated[
        int,
        Field(ge=1, le=10, description="Attempts per request"),
    ] = 3
    base_delay_seconds: Annotated[
        float,
        Field(ge=0, le=60, description="Initial retry backoff in seconds"),
    ] = 0.05
    circuit_breaker_max_errors: Annotated[
        int,
        Field(ge=1, description="Errors within the window that open the circuit"),
    ] = 50
    circuit_breaker_age_seconds: Annotated[
        float,
        Field(gt=0, description="Error window in seconds"),
    ] = 30.0


class ToolConfig(BaseModel):
    """Defaults for the package-collection commands.

    Command-line flags take precedence over these values.

    Attributes:
        working_directory: Directory for persistent repository clones. If
            None, each package is cloned into a temporary directory.
        pretty_printed: Write indented JSON by default.
        auth_tokens: Auth tokens in "type:host:token" form.
        http: Request policy for hosting-service API calls.
    """

    model_config = ConfigDict(extra="forbid")

    working_directory: Annotated[
        Path | None,
        Field(description="Directory for persistent repository clones"),
    ] = None
    pretty_printed: Annotated[
        bool,
        Field(description="Write indented JSON by default"),
    ] = False
    auth_tokens: list[str] = Field(
        default_factory=list,
        description="Auth tokens as type:host:token",
    )
    http: HTTPConfig = Field(default_factory=HTTPConfig, description="HTTP request policy")


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigParseError(ConfigError):
    """Raised when the config file cannot be parsed."""


def load_config(path: Path | None = None) -> ToolConfig:
    """Load tool configuration from a TOML file.

    A missing file is not an error: the defaults are returned.

    Args:
        path: Path to the config file. If None, uses the default config path.

    Returns:
        Validated ToolConfig object.

    Raises:
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the file cannot be read or its content is invalid.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        return ToolConfig()

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config: {e}") from e

    try:
        return ToolConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config content: {e}") from e


def save_config(config: ToolConfig, path: Path | None = None) -> Path:
    """Save tool configuration to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Args:
        config: The ToolConfig object to save.
        path: Path to save the config. If None, uses the default config path.

    Returns:
        Path where the config was saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    config_path = path or get_config_path()

    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ConfigError(f"Failed to create config directory: {e}") from e

    data = _config_to_dict(config)

    tmp_path: Path | None = None
    try:
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write config: {e}") from e

    return config_path


def _config_to_dict(config: ToolConfig) -> dict[str, object]:
    """Convert ToolConfig to a dictionary for TOML serialization.

    TOML has no null, so unset optional values are left out.

    Args:
        config: The ToolConfig to convert.

    Returns:
        Dictionary ready for TOML serialization.
    """
    result: dict[str, object] = {
        "pretty_printed": config.pretty_printed,
        "auth_tokens": list(config.auth_tokens),
    }
    if config.working_directory is not None:
        result["working_directory"] = str(config.working_directory)
    result["http"] = config.http.model_dump()
    return result
