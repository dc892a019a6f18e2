"""Git implementation of the version control provider.

Runs the ``git`` executable through the shell helpers.
"""

import logging
import subprocess
from datetime import UTC, datetime
from pathlib import Path

from pkgcollection.models.metadata import TagInfo
from pkgcollection.utils.shell import CommandResult, command_exists, run_command
from pkgcollection.vcs.base import VersionControlError, VersionControlProvider

logger = logging.getLogger(__name__)

# Object type, tagger date and subject, NUL-separated
_TAG_FORMAT = "%(objecttype)%00%(taggerdate:iso-strict)%00%(contents:subject)"


class GitVersionControl(VersionControlProvider):
    """Version control provider backed by the git command line.

    Args:
        executable: Name or path of the git executable.
        timeout: Timeout in seconds for local commands. Clone and fetch run
            without a timeout.
    """

    def __init__(self, executable: str = "git", timeout: float | None = 60.0) -> None:
        self._git = executable
        self._timeout = timeout

    def is_available(self) -> bool:
        """Check if the git executable is available."""
        return command_exists(self._git)

    def clone(self, url: str, destination: Path) -> None:
        """Clone a repository into a directory."""
        logger.debug("Cloning %s into %s", url, destination)
        self._run(["clone", url, str(destination)], network=True)

    def fetch(self, repository_path: Path) -> None:
        """Fetch new commits and tags into an existing working copy."""
        logger.debug("Fetching %s", repository_path)
        self._run(["-C", str(repository_path), "fetch", "--tags", "--force"], network=True)

    def checkout(self, reference: str, repository_path: Path) -> None:
        """Check out a reference in detached HEAD state."""
        logger.debug("Checking out %s in %s", reference, repository_path)
        self._run(["-C", str(repository_path), "checkout", "--quiet", reference])

    def list_tags(self, repository_path: Path) -> list[str]:
        """List the tag names of a working copy."""
        result = self._run(["-C", str(repository_path), "tag", "--list"])
        return [line.strip() for line in result.stdout.splitlines() if line.strip()]

    def tag_info(self, tag: str, repository_path: Path) -> TagInfo:
        """Read the subject and date of an annotated tag."""
        result = self._run(
            [
                "-C",
                str(repository_path),
                "for-each-ref",
                f"refs/tags/{tag}",
                f"--format={_TAG_FORMAT}",
            ]
        )
        return _parse_tag_info(result.stdout)

    def _run(self, args: list[str], *, network: bool = False) -> CommandResult:
        """Run a git command, raising VersionControlError on failure.

        Args:
            args: Arguments after the git executable.
            network: Run without a timeout.
        """
        effective_timeout = None if network else self._timeout
        command = [self._git, *args]
        try:
            result = run_command(command, timeout=effective_timeout)
        except FileNotFoundError as e:
            msg = f"git executable not found: {self._git}"
            raise VersionControlError(msg) from e
        except subprocess.TimeoutExpired as e:
            msg = f"git {' '.join(args)} timed out after {effective_timeout}s"
            raise VersionControlError(msg) from e

        if not result.success:
            msg = f"git {' '.join(args)} failed: {result.error_output}"
            raise VersionControlError(msg)
        return result


def _parse_tag_info(output: str) -> TagInfo:
    """Parse for-each-ref output produced with _TAG_FORMAT.

    Args:
        output: Command output; empty when the tag does not exist.

    Returns:
        TagInfo with summary and creation date for annotated tags, an empty
        TagInfo otherwise.
    """
    line = output.strip("\n")
    if not line:
        return TagInfo()

    parts = line.split("\0")
    if len(parts) < 3 or parts[0] != "tag":
        return TagInfo()

    _, date_text, subject = parts[0], parts[1], parts[2]
    created_at: datetime | None = None
    if date_text:
        try:
            created_at = datetime.fromisoformat(date_text).astimezone(UTC)
        except ValueError:
            logger.debug("Ignoring unparseable tag date: %r", date_text)

    return TagInfo(summary=subject.strip() or None, created_at=created_at)
