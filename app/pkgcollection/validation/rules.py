"""Rule-based collection validator.

Structural and business rules for published collections: a collection has
packages, every package has semantic versions within the recommended
limits, and every version has a default manifest with products and targets.
"""

from collections import Counter

from pkgcollection.core.versions import (
    MAX_MAJOR_VERSIONS,
    MAX_VERSIONS_PER_MAJOR,
    SemanticVersion,
)
from pkgcollection.models.collection import Collection, Package, Version
from pkgcollection.validation.base import CollectionValidator, ValidationMessage

# Recommended maximum number of packages in a collection
MAX_PACKAGES = 50


class RuleBasedCollectionValidator(CollectionValidator):
    """Validates collections against the publishing rules.

    Args:
        max_packages: Package count above which a warning is reported.
        max_major_versions: Major versions per package above which a warning
            is reported.
        max_versions_per_major: Versions per major version above which a
            warning is reported.
    """

    def __init__(
        self,
        max_packages: int = MAX_PACKAGES,
        max_major_versions: int = MAX_MAJOR_VERSIONS,
        max_versions_per_major: int = MAX_VERSIONS_PER_MAJOR,
    ) -> None:
        self._max_packages = max_packages
        self._max_major_versions = max_major_versions
        self._max_versions_per_major = max_versions_per_major

    def validate(self, collection: Collection) -> list[ValidationMessage]:
        """Validate a collection against all rules."""
        messages: list[ValidationMessage] = []

        if not collection.packages:
            messages.append(
                ValidationMessage.error(
                    "A collection must contain at least one package.", property="packages"
                )
            )
        elif len(collection.packages) > self._max_packages:
            messages.append(
                ValidationMessage.warning(
                    f"The collection has {len(collection.packages)} packages, which is more "
                    f"than the recommended maximum ({self._max_packages}).",
                    property="packages",
                )
            )

        for package in collection.packages:
            messages.extend(self._validate_package(package))

        return messages

    def _validate_package(self, package: Package) -> list[ValidationMessage]:
        messages: list[ValidationMessage] = []

        if not package.versions:
            messages.append(
                ValidationMessage.error(
                    f"Package {package.url} does not have any versions.",
                    property="package.versions",
                )
            )
            return messages

        parsed: list[SemanticVersion] = []
        non_semantic: list[str] = []
        for version in package.versions:
            semantic_version = SemanticVersion.parse(version.version)
            if semantic_version is None:
                non_semantic.append(version.version)
            else:
                parsed.append(semantic_version)

        if non_semantic:
            messages.append(
                ValidationMessage.error(
                    f"Non semantic version(s) found in package {package.url}: "
                    f"{', '.join(non_semantic)}.",
                    property="package.versions",
                )
            )

        per_major = Counter(version.major for version in parsed)
        if len(per_major) > self._max_major_versions:
            messages.append(
                ValidationMessage.warning(
                    f"Package {package.url} includes too many major versions. Only "
                    f"{self._max_major_versions} is allowed and the rest will be ignored.",
                    property="package.versions",
                )
            )
        for major in sorted(per_major, reverse=True):
            if per_major[major] > self._max_versions_per_major:
                messages.append(
                    ValidationMessage.warning(
                        f"Package {package.url} includes too many versions for major version "
                        f"{major}. Only {self._max_versions_per_major} is allowed and the rest "
                        "will be ignored.",
                        property="package.versions",
                    )
                )

        for version in package.versions:
            messages.extend(self._validate_version(package, version))

        return messages

    def _validate_version(self, package: Package, version: Version) -> list[ValidationMessage]:
        messages: list[ValidationMessage] = []
        label = f"Package {package.url} version {version.version}"

        if not version.manifests:
            messages.append(
                ValidationMessage.error(
                    f"{label} does not have any manifests.", property="version.manifests"
                )
            )
            return messages

        if version.default_manifest is None:
            messages.append(
                ValidationMessage.error(
                    f"{label} does not have the default manifest "
                    f"{version.default_tools_version}.",
                    property="version.defaultToolsVersion",
                )
            )

        for tools_version in sorted(version.manifests):
            manifest = version.manifests[tools_version]
            if not manifest.products:
                messages.append(
                    ValidationMessage.error(
                        f"{label} (tools version {tools_version}) does not contain any products.",
                        property="version.products",
                    )
                )
            for product in manifest.products:
                if not product.targets:
                    messages.append(
                        ValidationMessage.error(
                            f"Product {product.name} of package {package.url} version "
                            f"{version.version} does not contain any targets.",
                            property="product.targets",
                        )
                    )
            if not manifest.targets:
                messages.append(
                    ValidationMessage.error(
                        f"{label} (tools version {tools_version}) does not contain any targets.",
                        property="version.targets",
                    )
                )

        return messages
