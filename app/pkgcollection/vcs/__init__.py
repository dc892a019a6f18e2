"""Version control providers."""

from pkgcollection.vcs.base import VersionControlError, VersionControlProvider
from pkgcollection.vcs.git import GitVersionControl

__all__ = ["GitVersionControl", "VersionControlError", "VersionControlProvider"]
