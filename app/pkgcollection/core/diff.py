"""Semantic comparison of two collection documents.

Two collections are the same when every field except the generation
timestamp is equal. The differences are listed by field, and packages
are matched by URL.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from pkgcollection.models.collection import Collection

# Fields that never count as a difference
IGNORED_FIELDS = frozenset({"generatedAt"})


class DiffType(Enum):
    """Type of difference between two collections.

    Attributes:
        ADDED: Present only in the second collection.
        REMOVED: Present only in the first collection.
        CHANGED: Present in both with different values.
    """

    ADDED = "added"
    REMOVED = "removed"
    CHANGED = "changed"


@dataclass(frozen=True, slots=True)
class DiffEntry:
    """A single difference.

    Attributes:
        field: Wire name of the field, or "packages[<url>]" for a package.
        diff_type: Type of difference.
    """

    field: str
    diff_type: DiffType


@dataclass(frozen=True, slots=True)
class CollectionDiff:
    """Result of comparing two collections."""

    differences: tuple[DiffEntry, ...]

    @property
    def is_same(self) -> bool:
        """Check if the collections are the same."""
        return not self.differences


def _comparable(collection: Collection) -> dict[str, Any]:
    data = collection.model_dump(mode="json", by_alias=True)
    return {key: value for key, value in data.items() if key not in IGNORED_FIELDS}


def _diff_packages(left: list[dict[str, Any]], right: list[dict[str, Any]]) -> list[DiffEntry]:
    left_by_url = {package["url"]: package for package in left}
    right_by_url = {package["url"]: package for package in right}
    if len(left_by_url) != len(left) or len(right_by_url) != len(right):
        # Duplicate URLs cannot be matched one to one
        return [DiffEntry("packages", DiffType.CHANGED)]

    entries: list[DiffEntry] = []
    for url, package in left_by_url.items():
        if url not in right_by_url:
            entries.append(DiffEntry(f"packages[{url}]", DiffType.REMOVED))
        elif right_by_url[url] != package:
            entries.append(DiffEntry(f"packages[{url}]", DiffType.CHANGED))
    for url in right_by_url:
        if url not in left_by_url:
            entries.append(DiffEntry(f"packages[{url}]", DiffType.ADDED))

    if not entries:
        # Same packages in a different order
        entries.append(DiffEntry("packages", DiffType.CHANGED))
    return entries


def compare_collections(one: Collection, two: Collection) -> CollectionDiff:
    """Compare two collections, ignoring the generation timestamp.

    Args:
        one: First collection.
        two: Second collection.

    Returns:
        CollectionDiff listing the differing fields.

    Example:
        >>> compare_collections(collection, collection).is_same
        True
    """
    left = _comparable(one)
    right = _comparable(two)
    if left == right:
        return CollectionDiff(differences=())

    entries: list[DiffEntry] = []
    for key in sorted(set(left) | set(right)):
        if key == "packages":
            continue
        if key not in right:
            entries.append(DiffEntry(key, DiffType.REMOVED))
        elif key not in left:
            entries.append(DiffEntry(key, DiffType.ADDED))
        elif left[key] != right[key]:
            entries.append(DiffEntry(key, DiffType.CHANGED))

    if left["packages"] != right["packages"]:
        entries.extend(_diff_packages(left["packages"], right["packages"]))

    return CollectionDiff(differences=tuple(entries))
