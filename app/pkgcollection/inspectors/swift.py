"""Swift package inspector.

Uses ``swift package dump-package`` for the manifest and
``swift package describe --type json`` for target module names.
"""

import logging
import subprocess
from pathlib import Path

from pydantic import ValidationError

from pkgcollection.inspectors.base import PackageInspectionError, PackageInspector
from pkgcollection.models.manifest import PackageDescription, PackageManifest
from pkgcollection.models.metadata import InspectedPackage
from pkgcollection.utils.shell import CommandResult, command_exists, run_command

logger = logging.getLogger(__name__)


class SwiftPackageInspector(PackageInspector):
    """Package inspector backed by the swift command line.

    Args:
        executable: Name or path of the swift executable.
        timeout: Timeout in seconds per command. Manifest evaluation may
            resolve dependencies, so the default is generous.
    """

    def __init__(self, executable: str = "swift", timeout: float | None = 300.0) -> None:
        self._swift = executable
        self._timeout = timeout

    def is_available(self) -> bool:
        """Check if the swift executable is available."""
        return command_exists(self._swift)

    def inspect(self, package_path: Path) -> InspectedPackage:
        """Dump the manifest and describe the package at a path.

        A failing ``describe`` is not fatal: module names are then unknown.
        """
        result = self._run(["package", "dump-package"], package_path)
        if not result.success:
            msg = f"swift package dump-package failed: {result.error_output}"
            raise PackageInspectionError(msg)

        try:
            manifest = PackageManifest.model_validate_json(result.stdout)
        except ValidationError as e:
            raise PackageInspectionError(f"Invalid package manifest: {e}") from e

        return InspectedPackage(manifest=manifest, module_names=self._module_names(package_path))

    def _module_names(self, package_path: Path) -> dict[str, str]:
        """Return target module names, or an empty mapping if unavailable."""
        try:
            result = self._run(["package", "describe", "--type", "json"], package_path)
        except PackageInspectionError as e:
            logger.warning("Cannot describe package at %s: %s", package_path, e)
            return {}

        if not result.success:
            logger.warning(
                "swift package describe failed at %s: %s",
                package_path,
                result.error_output,
            )
            return {}

        try:
            description = PackageDescription.model_validate_json(result.stdout)
        except ValidationError as e:
            logger.warning("Invalid package description at %s: %s", package_path, e)
            return {}
        return description.module_names()

    def _run(self, args: list[str], package_path: Path) -> CommandResult:
        try:
            return run_command([self._swift, *args], timeout=self._timeout, cwd=package_path)
        except FileNotFoundError as e:
            msg = f"swift executable not found: {self._swift}"
            raise PackageInspectionError(msg) from e
        except subprocess.TimeoutExpired as e:
            msg = f"swift {' '.join(args)} timed out after {self._timeout}s"
            raise PackageInspectionError(msg) from e
