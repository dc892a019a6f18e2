"""Abstract base class for package inspectors.

An inspector reads the manifest of a checked-out package.
"""

from abc import ABC, abstractmethod
from pathlib import Path

from pkgcollection.models.metadata import InspectedPackage


class PackageInspectionError(Exception):
    """Raised when a package manifest cannot be read."""


class PackageInspector(ABC):
    """Abstract base class for package inspectors."""

    @abstractmethod
    def inspect(self, package_path: Path) -> InspectedPackage:
        """Inspect the package checked out at a path.

        Args:
            package_path: Root directory of the package.

        Returns:
            InspectedPackage with the dumped manifest and target module names.

        Raises:
            PackageInspectionError: If the manifest cannot be dumped or parsed.
        """
