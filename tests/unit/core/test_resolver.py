"""Unit tests for PackageVersionResolver.

Uses in-memory fakes for the version control provider and the inspector.
"""

from datetime import UTC, datetime
from pathlib import Path

import pytest
from pkgcollection.core.resolver import (
    InvalidVersionError,
    PackageVersionResolver,
    VersionResolutionError,
)
from pkgcollection.inspectors.base import PackageInspectionError, PackageInspector
from pkgcollection.models.collection import PlatformVersion, ProductType
from pkgcollection.models.manifest import PackageManifest
from pkgcollection.models.metadata import InspectedPackage, TagInfo
from pkgcollection.vcs.base import VersionControlError, VersionControlProvider

CHECKOUT = Path("/work/foo")


class FakeVCS(VersionControlProvider):
    """Version control fake recording checkouts."""

    def __init__(self, tags: dict[str, TagInfo] | None = None, fail_checkout: bool = False):
        self.tags = tags or {}
        self.fail_checkout = fail_checkout
        self.checked_out: list[str] = []

    def clone(self, url: str, destination: Path) -> None:
        raise AssertionError("not used")

    def fetch(self, repository_path: Path) -> None:
        raise AssertionError("not used")

    def checkout(self, reference: str, repository_path: Path) -> None:
        if self.fail_checkout:
            raise VersionControlError(f"unknown revision {reference}")
        self.checked_out.append(reference)

    def list_tags(self, repository_path: Path) -> list[str]:
        return list(self.tags)

    def tag_info(self, tag: str, repository_path: Path) -> TagInfo:
        if tag not in self.tags:
            raise VersionControlError(f"no tag {tag}")
        return self.tags[tag]


class FakeInspector(PackageInspector):
    """Inspector fake returning a fixed manifest."""

    def __init__(self, manifest: dict | None, module_names: dict[str, str] | None = None):
        self.manifest = manifest
        self.module_names = module_names or {}

    def inspect(self, package_path: Path) -> InspectedPackage:
        if self.manifest is None:
            raise PackageInspectionError("manifest is broken")
        return InspectedPackage(
            manifest=PackageManifest.model_validate(self.manifest),
            module_names=self.module_names,
        )


def dumped_manifest(
    products: list[tuple[str, list[str]]],
    targets: list[str],
    platforms: list[tuple[str, str]] | None = None,
    tools_version: str = "5.2.0",
) -> dict:
    """Build dump-package style output."""
    manifest: dict = {
        "name": "Foo",
        "toolsVersion": {"_version": tools_version},
        "products": [
            {"name": name, "type": {"library": ["automatic"]}, "targets": product_targets}
            for name, product_targets in products
        ],
        "targets": [{"name": name, "type": "regular"} for name in targets],
    }
    if platforms is not None:
        manifest["platforms"] = [
            {"platformName": name, "version": version} for name, version in platforms
        ]
    return manifest


class TestResolve:
    """Tests for PackageVersionResolver.resolve."""

    def test_builds_version(self) -> None:
        """Manifest, tag annotation and tools version end up in the Version."""
        created = datetime(2023, 6, 1, 12, 0, tzinfo=UTC)
        vcs = FakeVCS({"1.0.0": TagInfo(summary="First release", created_at=created)})
        inspector = FakeInspector(
            dumped_manifest([("Foo", ["Foo"])], ["Foo"], platforms=[("macos", "10.15")]),
            module_names={"Foo": "Foo"},
        )
        resolver = PackageVersionResolver(vcs, inspector)

        version = resolver.resolve("1.0.0", set(), set(), CHECKOUT)

        assert vcs.checked_out == ["1.0.0"]
        assert version.version == "1.0.0"
        assert version.summary == "First release"
        assert version.created_at == created
        assert version.default_tools_version == "5.2"
        assert list(version.manifests) == ["5.2"]
        manifest = version.manifests["5.2"]
        assert manifest.package_name == "Foo"
        assert manifest.minimum_platform_versions == [
            PlatformVersion(name="macos", version="10.15")
        ]
        assert manifest.targets[0].module_name == "Foo"
        assert manifest.products[0].type == ProductType.library()

    def test_excluded_target_pruned_but_product_targets_kept(self) -> None:
        """Excluded targets leave the target list but not the product's own list."""
        inspector = FakeInspector(
            dumped_manifest([("A", ["t1"]), ("B", ["t2", "t3"])], ["t1", "t2", "t3"])
        )
        resolver = PackageVersionResolver(FakeVCS(), inspector)

        version = resolver.resolve("1.0.0", set(), {"t2"}, CHECKOUT)

        manifest = version.manifests["5.2"]
        assert [t.name for t in manifest.targets] == ["t1", "t3"]
        assert [p.name for p in manifest.products] == ["A", "B"]
        assert manifest.products[1].targets == ["t2", "t3"]

    def test_excluded_products_removed_and_sorted(self) -> None:
        """Excluded products are removed and the rest sorted by name."""
        inspector = FakeInspector(
            dumped_manifest(
                [("Zeta", ["Z"]), ("Tool", ["T"]), ("Alpha", ["A"])],
                ["Z", "T", "A"],
            )
        )
        resolver = PackageVersionResolver(FakeVCS(), inspector)

        version = resolver.resolve("1.0.0", {"Tool"}, set(), CHECKOUT)

        manifest = version.manifests["5.2"]
        assert [p.name for p in manifest.products] == ["Alpha", "Zeta"]
        assert [t.name for t in manifest.targets] == ["A", "Z"]

    def test_unknown_exclusions_ignored(self) -> None:
        """Excluding names the package does not have changes nothing."""
        inspector = FakeInspector(dumped_manifest([("A", ["t1"]), ("B", ["t2"])], ["t1", "t2"]))
        resolver = PackageVersionResolver(FakeVCS(), inspector)

        plain = resolver.resolve("1.0.0", set(), set(), CHECKOUT)
        excluded = resolver.resolve("1.0.0", {"Nope"}, {"Nope"}, CHECKOUT)

        assert excluded == plain
        assert [p.name for p in excluded.manifests["5.2"].products] == ["A", "B"]
        assert [t.name for t in excluded.manifests["5.2"].targets] == ["t1", "t2"]

    def test_non_public_targets_dropped(self) -> None:
        """Targets used by no product are not listed."""
        inspector = FakeInspector(dumped_manifest([("Foo", ["Foo"])], ["FooTests", "Foo"]))
        resolver = PackageVersionResolver(FakeVCS(), inspector)

        version = resolver.resolve("1.0.0", set(), set(), CHECKOUT)

        assert [t.name for t in version.manifests["5.2"].targets] == ["Foo"]

    def test_platforms_absent(self) -> None:
        """No declared platforms means no minimum platform versions."""
        inspector = FakeInspector(dumped_manifest([("Foo", ["Foo"])], ["Foo"]))
        resolver = PackageVersionResolver(FakeVCS(), inspector)

        version = resolver.resolve("1.0.0", set(), set(), CHECKOUT)

        assert version.manifests["5.2"].minimum_platform_versions is None

    def test_lightweight_tag(self) -> None:
        """A tag without annotation leaves summary and date empty."""
        inspector = FakeInspector(dumped_manifest([("Foo", ["Foo"])], ["Foo"]))
        resolver = PackageVersionResolver(FakeVCS(), inspector)

        version = resolver.resolve("1.0.0", set(), set(), CHECKOUT)

        assert version.summary is None
        assert version.created_at is None

    def test_non_zero_patch_tools_version(self) -> None:
        """A tools version with a patch component is kept as is."""
        inspector = FakeInspector(
            dumped_manifest([("Foo", ["Foo"])], ["Foo"], tools_version="5.3.1")
        )
        resolver = PackageVersionResolver(FakeVCS(), inspector)

        version = resolver.resolve("1.0.0", set(), set(), CHECKOUT)

        assert version.default_tools_version == "5.3.1"


class TestResolveErrors:
    """Tests for resolution failures."""

    def test_checkout_failure(self) -> None:
        """A failed checkout fails the version."""
        resolver = PackageVersionResolver(FakeVCS(fail_checkout=True), FakeInspector(None))

        with pytest.raises(VersionResolutionError, match="Cannot check out 9.9.9"):
            resolver.resolve("9.9.9", set(), set(), CHECKOUT)

    def test_inspection_failure(self) -> None:
        """A broken manifest fails the version."""
        resolver = PackageVersionResolver(FakeVCS(), FakeInspector(None))

        with pytest.raises(VersionResolutionError, match="Cannot inspect"):
            resolver.resolve("1.0.0", set(), set(), CHECKOUT)

    def test_all_products_excluded(self) -> None:
        """A version without products is invalid."""
        inspector = FakeInspector(dumped_manifest([("Foo", ["Foo"])], ["Foo"]))
        resolver = PackageVersionResolver(FakeVCS(), inspector)

        with pytest.raises(InvalidVersionError, match="no products"):
            resolver.resolve("1.0.0", {"Foo"}, set(), CHECKOUT)

    def test_all_targets_excluded(self) -> None:
        """A version without targets is invalid."""
        inspector = FakeInspector(dumped_manifest([("Foo", ["Foo"])], ["Foo"]))
        resolver = PackageVersionResolver(FakeVCS(), inspector)

        with pytest.raises(InvalidVersionError, match="no targets"):
            resolver.resolve("1.0.0", set(), {"Foo"}, CHECKOUT)

    def test_invalid_version_is_resolution_error(self) -> None:
        """InvalidVersionError is a VersionResolutionError."""
        assert issubclass(InvalidVersionError, VersionResolutionError)
