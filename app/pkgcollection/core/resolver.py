"""Resolution of a single package version.

Checks out a tag, inspects the package at that tag and turns the manifest
into a collection Version record: excluded products are removed, the
remaining products are sorted by name, and only public targets (targets
used by a remaining product and not excluded) are kept, sorted by name.
"""

import logging
from pathlib import Path

from pkgcollection.inspectors.base import PackageInspectionError, PackageInspector
from pkgcollection.models.collection import Manifest, PlatformVersion, Product, Target, Version
from pkgcollection.models.manifest import normalize_tools_version
from pkgcollection.models.metadata import TagInfo
from pkgcollection.vcs.base import VersionControlError, VersionControlProvider


class VersionResolutionError(Exception):
    """Raised when a version cannot be resolved."""


class InvalidVersionError(VersionResolutionError):
    """Raised when a version resolves to a manifest without products or targets."""


class PackageVersionResolver:
    """Builds Version records from a working copy.

    Args:
        vcs: Version control provider used for checkout and tag lookup.
        inspector: Package inspector reading the manifest.
        logger: Logger for progress messages. Defaults to this module's logger.

    Example:
        >>> resolver = PackageVersionResolver(GitVersionControl(), SwiftPackageInspector())
        >>> version = resolver.resolve("2.0.0", set(), set(), Path("/tmp/nio"))
        >>> version.default_tools_version
        '5.2'
    """

    def __init__(
        self,
        vcs: VersionControlProvider,
        inspector: PackageInspector,
        logger: logging.Logger | None = None,
    ) -> None:
        self._vcs = vcs
        self._inspector = inspector
        self._logger = logger or logging.getLogger(__name__)

    def resolve(
        self,
        version: str,
        excluded_products: set[str],
        excluded_targets: set[str],
        checkout_path: Path,
    ) -> Version:
        """Resolve one version of the package checked out at a path.

        Args:
            version: Tag to resolve.
            excluded_products: Product names to leave out.
            excluded_targets: Target names to leave out.
            checkout_path: Working copy of the package repository.

        Returns:
            Version with exactly one manifest, keyed by its tools version.

        Raises:
            VersionResolutionError: If the tag cannot be checked out or the
                package cannot be inspected.
            InvalidVersionError: If no product or no target remains.
        """
        self._logger.debug("Resolving version %s in %s", version, checkout_path)

        try:
            self._vcs.checkout(version, checkout_path)
        except VersionControlError as e:
            raise VersionResolutionError(f"Cannot check out {version}: {e}") from e

        tag = self._tag_info(version, checkout_path)

        try:
            inspected = self._inspector.inspect(checkout_path)
        except PackageInspectionError as e:
            raise VersionResolutionError(f"Cannot inspect {version}: {e}") from e

        dumped = inspected.manifest

        products = sorted(
            (
                Product(name=product.name, type=product.type, targets=list(product.targets))
                for product in dumped.products
                if product.name not in excluded_products
            ),
            key=lambda product: product.name,
        )
        if not products:
            raise InvalidVersionError(f"Version {version} has no products")

        public_targets = {
            target
            for product in products
            for target in product.targets
            if target not in excluded_targets
        }
        targets = sorted(
            (
                Target(name=target.name, module_name=inspected.module_names.get(target.name))
                for target in dumped.targets
                if target.name in public_targets
            ),
            key=lambda target: target.name,
        )
        if not targets:
            raise InvalidVersionError(f"Version {version} has no targets")

        # An empty platform list is treated like no declaration at all
        minimum_platform_versions: list[PlatformVersion] | None = None
        if dumped.platforms:
            minimum_platform_versions = [
                PlatformVersion(name=platform.platform_name, version=platform.version)
                for platform in dumped.platforms
            ]

        tools_version = normalize_tools_version(dumped.tools_version.version)
        manifest = Manifest(
            tools_version=tools_version,
            package_name=dumped.name,
            targets=targets,
            products=products,
            minimum_platform_versions=minimum_platform_versions,
        )

        return Version(
            version=version,
            summary=tag.summary,
            manifests={tools_version: manifest},
            default_tools_version=tools_version,
            created_at=tag.created_at,
        )

    def _tag_info(self, version: str, checkout_path: Path) -> TagInfo:
        """Read the tag annotation; an unreadable annotation yields an empty TagInfo."""
        try:
            return self._vcs.tag_info(version, checkout_path)
        except VersionControlError as e:
            self._logger.debug("No annotation for tag %s: %s", version, e)
            return TagInfo()
