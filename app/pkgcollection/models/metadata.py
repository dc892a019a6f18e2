"""Intermediate results passed between the pipeline collaborators.

These are plain immutable records; they never appear in a written document.
"""

from dataclasses import dataclass, field
from datetime import datetime

from pkgcollection.models.collection import License
from pkgcollection.models.manifest import PackageManifest


@dataclass(frozen=True, slots=True)
class PackageBasicMetadata:
    """Supplementary metadata fetched from a source-hosting service.

    Attributes:
        summary: Repository description.
        keywords: Repository topics.
        readme_url: URL of the README file.
        license: License detected by the hosting service.
    """

    summary: str | None = field(default=None)
    keywords: list[str] | None = field(default=None)
    readme_url: str | None = field(default=None)
    license: License | None = field(default=None)


@dataclass(frozen=True, slots=True)
class TagInfo:
    """Annotation data of a git tag.

    Both fields are None for lightweight tags.
    """

    summary: str | None = field(default=None)
    created_at: datetime | None = field(default=None)


@dataclass(frozen=True, slots=True)
class InspectedPackage:
    """Result of inspecting a checked-out package.

    Attributes:
        manifest: Dumped package manifest.
        module_names: Target name to module name mapping. Empty when the
            package description was unavailable.
    """

    manifest: PackageManifest
    module_names: dict[str, str] = field(default_factory=dict)
