"""Unit tests for XDG path management and working copy naming."""

import os
from pathlib import Path
from unittest.mock import patch

import pytest
from pkgcollection.core.paths import (
    APP_NAME,
    get_config_dir,
    get_config_path,
    get_user_theme_path,
    get_working_copy_path,
    repository_name,
)


class TestXdgDirs:
    """Tests for XDG directory resolution."""

    def test_default_config_dir(self) -> None:
        """get_config_dir returns default path when XDG_CONFIG_HOME not set."""
        with patch.dict(os.environ, {}, clear=True):
            result = get_config_dir()
            expected = Path.home() / ".config" / APP_NAME

        assert result == expected

    def test_respects_xdg_config_home(self, tmp_path: Path) -> None:
        """get_config_dir respects XDG_CONFIG_HOME environment variable."""
        with patch.dict(os.environ, {"XDG_CONFIG_HOME": str(tmp_path)}):
            assert get_config_dir() == tmp_path / APP_NAME
            assert get_config_path() == tmp_path / APP_NAME / "config.toml"
            assert get_user_theme_path() == tmp_path / APP_NAME / "theme.toml"


class TestRepositoryName:
    """Tests for repository_name."""

    @pytest.mark.parametrize(
        ("url", "expected"),
        [
            ("https://github.com/apple/swift-nio.git", "swift-nio"),
            ("https://github.com/apple/swift-nio", "swift-nio"),
            ("https://github.com/apple/swift-nio/", "swift-nio"),
            ("git@github.com:apple/swift-nio.git", "swift-nio"),
            ("https://gitlab.com/group/sub/project.GIT", "project"),
            ("/local/path/repo", "repo"),
        ],
    )
    def test_name(self, url: str, expected: str) -> None:
        """The last path segment without .git is the name."""
        assert repository_name(url) == expected

    @pytest.mark.parametrize("url", ["", "/", "https://host/.."])
    def test_no_name(self, url: str) -> None:
        """URLs without a usable last segment have no name."""
        assert repository_name(url) is None


class TestGetWorkingCopyPath:
    """Tests for get_working_copy_path."""

    def test_keyed_by_name(self, tmp_path: Path) -> None:
        """Working copies are named after the repository."""
        path = get_working_copy_path(tmp_path, "https://github.com/a/foo.git")

        assert path == tmp_path / "foo"

    def test_same_name_shares_path(self, tmp_path: Path) -> None:
        """Different URLs with the same repository name share a working copy."""
        one = get_working_copy_path(tmp_path, "https://github.com/a/foo.git")
        two = get_working_copy_path(tmp_path, "https://gitlab.com/b/foo")

        assert one == two

    def test_no_name(self, tmp_path: Path) -> None:
        """No path without a repository name."""
        assert get_working_copy_path(tmp_path, "") is None
