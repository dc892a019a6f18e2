"""Abstract base class for version control providers.

This module defines the VersionControlProvider interface used to obtain a
working copy of a package repository and read its tags.
"""

from abc import ABC, abstractmethod
from pathlib import Path

from pkgcollection.models.metadata import TagInfo


class VersionControlError(Exception):
    """Raised when a version control operation fails."""


class VersionControlProvider(ABC):
    """Abstract base class for version control providers.

    Example:
        >>> vcs = GitVersionControl()
        >>> vcs.clone("https://github.com/apple/swift-nio.git", Path("/tmp/nio"))
        >>> vcs.list_tags(Path("/tmp/nio"))
        ['2.0.0', '2.1.0', ...]
    """

    @abstractmethod
    def clone(self, url: str, destination: Path) -> None:
        """Clone a repository into a directory.

        Raises:
            VersionControlError: If the clone fails.
        """

    @abstractmethod
    def fetch(self, repository_path: Path) -> None:
        """Update an existing working copy, including its tags.

        Raises:
            VersionControlError: If the fetch fails.
        """

    @abstractmethod
    def checkout(self, reference: str, repository_path: Path) -> None:
        """Check out a tag, branch or commit.

        Raises:
            VersionControlError: If the reference cannot be checked out.
        """

    @abstractmethod
    def list_tags(self, repository_path: Path) -> list[str]:
        """List the tag names of a working copy.

        Raises:
            VersionControlError: If the tags cannot be listed.
        """

    @abstractmethod
    def tag_info(self, tag: str, repository_path: Path) -> TagInfo:
        """Read the annotation of a tag.

        Lightweight or unknown tags yield an empty TagInfo.

        Raises:
            VersionControlError: If the repository cannot be queried.
        """
