"""Subprocess helpers for the external tools (git, swift).

Commands never read from the terminal: stdin is closed and git credential
prompts are disabled, so a private repository fails instead of hanging.
"""

import os
import shutil
import subprocess
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path

# Environment overrides applied to every command
NON_INTERACTIVE_ENV: Mapping[str, str] = {"GIT_TERMINAL_PROMPT": "0"}


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Captured outcome of a finished command.

    Attributes:
        stdout: Standard output.
        stderr: Standard error.
        returncode: Exit code.
        args: Command line that was run.
    """

    stdout: str
    stderr: str
    returncode: int
    args: tuple[str, ...] = field(default=())

    @property
    def success(self) -> bool:
        """Check if the command exited with status 0."""
        return self.returncode == 0

    @property
    def error_output(self) -> str:
        """Stripped stderr, or the exit code if the command printed nothing."""
        return self.stderr.strip() or f"exit code {self.returncode}"


def run_command(
    args: Sequence[str],
    *,
    timeout: float | None = 60.0,
    cwd: Path | None = None,
) -> CommandResult:
    """Run a command to completion and capture its output.

    A non-zero exit is returned, not raised. Output that is not valid UTF-8
    (a Latin-1 tag message, for instance) is decoded with replacement
    characters.

    Args:
        args: Executable and arguments.
        timeout: Seconds to wait before killing the command. None waits forever.
        cwd: Working directory. If None, the current directory.

    Raises:
        subprocess.TimeoutExpired: If the command exceeds the timeout.
        FileNotFoundError: If the executable is not found.
    """
    completed = subprocess.run(
        list(args),
        stdin=subprocess.DEVNULL,
        capture_output=True,
        encoding="utf-8",
        errors="replace",
        timeout=timeout,
        cwd=cwd,
        env={**os.environ, **NON_INTERACTIVE_ENV},
    )
    return CommandResult(
        stdout=completed.stdout,
        stderr=completed.stderr,
        returncode=completed.returncode,
        args=tuple(args),
    )


def command_exists(name: str) -> bool:
    """Check if an executable is on PATH, or exists when given as a path."""
    return shutil.which(name) is not None
