"""Models for package tool output.

``PackageManifest`` mirrors the JSON printed by ``swift package dump-package``
and ``PackageDescription`` the JSON printed by
``swift package describe --type json``. Only the fields the generator reads
are declared; everything else in the tool output is ignored.
"""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

from pkgcollection.models.collection import ProductType


class _ToolOutputModel(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)


class ManifestTarget(_ToolOutputModel):
    """Target declared in the manifest."""

    name: str


class ManifestProduct(_ToolOutputModel):
    """Product declared in the manifest."""

    name: str
    type: ProductType
    targets: list[str]


class ManifestToolsVersion(_ToolOutputModel):
    """Tools version block, e.g. ``{"_version": "5.2.0"}``."""

    version: Annotated[str, Field(alias="_version")]


class ManifestPlatform(_ToolOutputModel):
    """Platform requirement declared in the manifest."""

    platform_name: Annotated[str, Field(alias="platformName")]
    version: str


class PackageManifest(_ToolOutputModel):
    """Dumped package manifest.

    Attributes:
        name: Package name.
        targets: All declared targets, in declaration order.
        products: All declared products, in declaration order.
        tools_version: Tools version the manifest was written for.
        platforms: Declared minimum platforms, or None if not declared.
    """

    name: str
    targets: list[ManifestTarget]
    products: list[ManifestProduct]
    tools_version: Annotated[ManifestToolsVersion, Field(alias="toolsVersion")]
    platforms: list[ManifestPlatform] | None = None


class DescribedTarget(_ToolOutputModel):
    """Target as reported by the package description."""

    name: str
    c99name: str


class PackageDescription(_ToolOutputModel):
    """Described package, used for target module names."""

    name: str | None = None
    targets: list[DescribedTarget] = Field(default_factory=list)

    def module_names(self) -> dict[str, str]:
        """Map target names to their module (c99) names."""
        return {target.name: target.c99name for target in self.targets}


def normalize_tools_version(version: str) -> str:
    """Drop a zero patch component from a tools version.

    Args:
        version: Raw tools version (e.g. "5.2.0").

    Returns:
        "major.minor" when the patch is zero, the input unchanged otherwise.

    Example:
        >>> normalize_tools_version("5.2.0")
        '5.2'
        >>> normalize_tools_version("5.3.1")
        '5.3.1'
    """
    parts = version.split(".")
    if len(parts) == 3 and parts[2] == "0":
        return ".".join(parts[:2])
    return version
