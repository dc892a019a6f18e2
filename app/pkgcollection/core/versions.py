"""Semantic version parsing and default version selection.

When a package does not list its versions explicitly, the most recent
semantic-version tags are picked: at most 3 versions per major version and
at most 2 major versions.
"""

import re
from dataclasses import dataclass, field
from functools import total_ordering

# Maximum number of versions selected within one major version
MAX_VERSIONS_PER_MAJOR = 3

# Maximum number of distinct major versions selected
MAX_MAJOR_VERSIONS = 2

_IDENTIFIERS = r"[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*"
_SEMVER_PATTERN = re.compile(
    rf"^v?(?P<major>\d+)\.(?P<minor>\d+)\.(?P<patch>\d+)"
    rf"(?:-(?P<prerelease>{_IDENTIFIERS}))?"
    rf"(?:\+(?P<build>{_IDENTIFIERS}))?$"
)


def _identifier_key(identifier: str) -> tuple[int, int | str]:
    # Numeric identifiers sort before alphanumeric ones
    if identifier.isdigit():
        return (0, int(identifier))
    return (1, identifier)


@total_ordering
@dataclass(frozen=True, slots=True)
class SemanticVersion:
    """A parsed semantic version.

    Ordering follows semver precedence: build metadata is ignored and a
    pre-release sorts before the corresponding release.

    Attributes:
        major: Major version.
        minor: Minor version.
        patch: Patch version.
        prerelease: Dot-separated pre-release identifiers.
        build: Dot-separated build metadata identifiers.
    """

    major: int
    minor: int
    patch: int
    prerelease: tuple[str, ...] = field(default=())
    build: tuple[str, ...] = field(default=())

    @classmethod
    def parse(cls, text: str) -> "SemanticVersion | None":
        """Parse a version string, tolerating a leading "v".

        Args:
            text: Version or tag string (e.g. "1.2.3", "v2.0.0-beta.1").

        Returns:
            SemanticVersion, or None if the string is not a semantic version.
        """
        match = _SEMVER_PATTERN.match(text.strip())
        if match is None:
            return None
        prerelease = match.group("prerelease")
        build = match.group("build")
        return cls(
            major=int(match.group("major")),
            minor=int(match.group("minor")),
            patch=int(match.group("patch")),
            prerelease=tuple(prerelease.split(".")) if prerelease else (),
            build=tuple(build.split(".")) if build else (),
        )

    @property
    def _precedence(self) -> tuple[int, int, int, tuple[int, tuple[tuple[int, int | str], ...]]]:
        if not self.prerelease:
            return (self.major, self.minor, self.patch, (1, ()))
        identifiers = tuple(_identifier_key(part) for part in self.prerelease)
        return (self.major, self.minor, self.patch, (0, identifiers))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SemanticVersion):
            return NotImplemented
        return self._precedence == other._precedence

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, SemanticVersion):
            return NotImplemented
        return self._precedence < other._precedence

    def __hash__(self) -> int:
        return hash(self._precedence)

    def __str__(self) -> str:
        text = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            text += "-" + ".".join(self.prerelease)
        if self.build:
            text += "+" + ".".join(self.build)
        return text


def select_default_versions(tags: list[str]) -> list[str]:
    """Select the most recent versions from a list of tags.

    Non-semver tags are dropped. The rest are sorted by descending semver
    precedence (ties keep their input order) and walked while keeping at
    most 3 versions per major and stopping before a third major.

    Args:
        tags: Tag names in any order.

    Returns:
        Selected tag names, unmodified, newest first.

    Example:
        >>> select_default_versions(["1.0.0", "v2.1.0", "2.0.0", "notes"])
        ['v2.1.0', '2.0.0', '1.0.0']
    """
    parsed: list[tuple[SemanticVersion, str]] = []
    for tag in tags:
        version = SemanticVersion.parse(tag)
        if version is not None:
            parsed.append((version, tag))

    parsed.sort(key=lambda item: item[0], reverse=True)

    selected: list[str] = []
    current_major: int | None = None
    major_count = 0
    per_major_count = 0
    for version, tag in parsed:
        if version.major != current_major:
            current_major = version.major
            major_count += 1
            per_major_count = 0
        if major_count > MAX_MAJOR_VERSIONS:
            break
        if per_major_count >= MAX_VERSIONS_PER_MAJOR:
            continue
        selected.append(tag)
        per_major_count += 1
    return selected
