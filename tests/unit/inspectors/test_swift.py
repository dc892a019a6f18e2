"""Unit tests for SwiftPackageInspector."""

import json
import subprocess
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from pkgcollection.inspectors.base import PackageInspectionError
from pkgcollection.inspectors.swift import SwiftPackageInspector
from pkgcollection.utils.shell import CommandResult

PACKAGE = Path("/work/foo")

DUMP = json.dumps(
    {
        "name": "Foo",
        "toolsVersion": {"_version": "5.2.0"},
        "products": [{"name": "Foo", "type": {"library": ["automatic"]}, "targets": ["Foo"]}],
        "targets": [{"name": "Foo"}, {"name": "Foo-Core"}],
    }
)
DESCRIBE = json.dumps(
    {
        "name": "Foo",
        "targets": [
            {"name": "Foo", "c99name": "Foo"},
            {"name": "Foo-Core", "c99name": "Foo_Core"},
        ],
    }
)


def ok(stdout: str) -> CommandResult:
    return CommandResult(stdout=stdout, stderr="", returncode=0)


def failed(stderr: str) -> CommandResult:
    return CommandResult(stdout="", stderr=stderr, returncode=1)


class TestInspect:
    """Tests for SwiftPackageInspector.inspect."""

    @patch("pkgcollection.inspectors.swift.run_command")
    def test_manifest_and_module_names(self, mock_run: MagicMock) -> None:
        """Dumped manifest is combined with described module names."""
        mock_run.side_effect = [ok(DUMP), ok(DESCRIBE)]

        inspected = SwiftPackageInspector().inspect(PACKAGE)

        assert inspected.manifest.name == "Foo"
        assert inspected.module_names == {"Foo": "Foo", "Foo-Core": "Foo_Core"}

    @patch("pkgcollection.inspectors.swift.run_command")
    def test_commands_run_in_package(self, mock_run: MagicMock) -> None:
        """Both commands run inside the package directory."""
        mock_run.side_effect = [ok(DUMP), ok(DESCRIBE)]

        SwiftPackageInspector().inspect(PACKAGE)

        first, second = mock_run.call_args_list
        assert first.args[0] == ["swift", "package", "dump-package"]
        assert second.args[0] == ["swift", "package", "describe", "--type", "json"]
        assert first.kwargs["cwd"] == PACKAGE
        assert second.kwargs["cwd"] == PACKAGE

    @patch("pkgcollection.inspectors.swift.run_command")
    def test_dump_failure(self, mock_run: MagicMock) -> None:
        """A failing dump raises PackageInspectionError."""
        mock_run.return_value = failed("error: manifest parse error")

        with pytest.raises(PackageInspectionError, match="manifest parse error"):
            SwiftPackageInspector().inspect(PACKAGE)

    @patch("pkgcollection.inspectors.swift.run_command")
    def test_invalid_dump_output(self, mock_run: MagicMock) -> None:
        """Unparseable dump output raises PackageInspectionError."""
        mock_run.return_value = ok("not json")

        with pytest.raises(PackageInspectionError, match="Invalid package manifest"):
            SwiftPackageInspector().inspect(PACKAGE)

    @patch("pkgcollection.inspectors.swift.run_command")
    def test_missing_executable(self, mock_run: MagicMock) -> None:
        """A missing swift executable raises PackageInspectionError."""
        mock_run.side_effect = FileNotFoundError("swift")

        with pytest.raises(PackageInspectionError, match="not found"):
            SwiftPackageInspector().inspect(PACKAGE)

    @patch("pkgcollection.inspectors.swift.run_command")
    def test_dump_timeout(self, mock_run: MagicMock) -> None:
        """A dump timeout raises PackageInspectionError."""
        mock_run.side_effect = subprocess.TimeoutExpired(cmd=["swift"], timeout=1.0)

        with pytest.raises(PackageInspectionError, match="timed out"):
            SwiftPackageInspector(timeout=1.0).inspect(PACKAGE)


class TestModuleNames:
    """Tests for tolerated describe failures."""

    @patch("pkgcollection.inspectors.swift.run_command")
    def test_describe_failure(self, mock_run: MagicMock) -> None:
        """A failing describe leaves module names empty."""
        mock_run.side_effect = [ok(DUMP), failed("error: unsupported")]

        inspected = SwiftPackageInspector().inspect(PACKAGE)

        assert inspected.manifest.name == "Foo"
        assert inspected.module_names == {}

    @patch("pkgcollection.inspectors.swift.run_command")
    def test_describe_invalid_output(self, mock_run: MagicMock) -> None:
        """Unparseable describe output leaves module names empty."""
        mock_run.side_effect = [ok(DUMP), ok("{")]

        assert SwiftPackageInspector().inspect(PACKAGE).module_names == {}

    @patch("pkgcollection.inspectors.swift.run_command")
    def test_describe_timeout(self, mock_run: MagicMock) -> None:
        """A describe timeout leaves module names empty."""
        mock_run.side_effect = [
            ok(DUMP),
            subprocess.TimeoutExpired(cmd=["swift"], timeout=1.0),
        ]

        assert SwiftPackageInspector().inspect(PACKAGE).module_names == {}


class TestAvailability:
    """Tests for executable detection."""

    @patch("pkgcollection.inspectors.swift.command_exists")
    def test_custom_executable(self, mock_exists: MagicMock) -> None:
        """Availability checks the configured executable."""
        mock_exists.return_value = True

        assert SwiftPackageInspector(executable="/usr/local/bin/swift").is_available()
        mock_exists.assert_called_once_with("/usr/local/bin/swift")
