"""XDG-compliant path management for pkgcollection.

This module provides standardized paths following the XDG Base Directory
Specification for configuration storage, plus the naming rule for
repository working copies.

XDG defaults:
- Config: ~/.config/pkgcollection/
"""

import os
import re
from pathlib import Path

# Application identifier for directory naming
APP_NAME = "pkgcollection"

# Last path segment of a repository URL, without a trailing ".git" or "/"
_REPOSITORY_NAME_PATTERN = re.compile(r"([^/:]+?)(?:\.git)?/*$", re.IGNORECASE)


def _get_xdg_dir(env_var: str, default_subdir: str) -> Path:
    """Get XDG directory respecting environment variable override.

    Args:
        env_var: XDG environment variable name (e.g., "XDG_CONFIG_HOME").
        default_subdir: Default subdirectory under home (e.g., ".config").

    Returns:
        Path to the application-specific directory.
    """
    base = os.environ.get(env_var)
    if base:
        return Path(base) / APP_NAME
    return Path.home() / default_subdir / APP_NAME


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Returns:
        Path to ~/.config/pkgcollection/ (or XDG_CONFIG_HOME/pkgcollection/).
    """
    return _get_xdg_dir("XDG_CONFIG_HOME", ".config")


def get_config_path() -> Path:
    """Get the tool configuration file path.

    Returns:
        Path to ~/.config/pkgcollection/config.toml.
    """
    return get_config_dir() / "config.toml"


def get_user_theme_path() -> Path:
    """Get the user theme configuration path.

    Returns:
        Path to ~/.config/pkgcollection/theme.toml.
    """
    return get_config_dir() / "theme.toml"


def repository_name(url: str) -> str | None:
    """Extract the repository name (last path segment) from a repository URL.

    Working copies are keyed by this name only, so two different URLs that
    end in the same name share one working copy.

    Args:
        url: Repository URL in SSH or HTTP(S) form.

    Returns:
        Repository name, or None if the URL has no usable last segment.

    Example:
        >>> repository_name("https://github.com/apple/swift-nio.git")
        'swift-nio'
    """
    match = _REPOSITORY_NAME_PATTERN.search(url.strip())
    if match is None:
        return None
    name = match.group(1)
    if name in (".", ".."):
        return None
    return name


def get_working_copy_path(working_directory: Path, url: str) -> Path | None:
    """Get the working copy location for a repository.

    Args:
        working_directory: Directory holding previously cloned repositories.
        url: Repository URL.

    Returns:
        Path to <working_directory>/<repository name>, or None if no name
        can be derived from the URL.
    """
    name = repository_name(url)
    if name is None:
        return None
    return working_directory / name
