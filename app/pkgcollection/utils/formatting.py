"""Rich console output for the CLI.

Results go to stdout; warnings, errors and hints go to stderr so that
command output stays clean when redirected.
"""

import sys

from rich.console import Console

from pkgcollection.core.theme import get_theme


def _make_console(stderr: bool = False) -> Console:
    # Interactive terminals get full hex colors; otherwise Rich decides
    stream = sys.stderr if stderr else sys.stdout
    color_system = "truecolor" if stream.isatty() else "auto"
    return Console(theme=get_theme(), stderr=stderr, color_system=color_system)


console = _make_console()
err_console = _make_console(stderr=True)


def print_info(message: str) -> None:
    """Print an informational line to stdout."""
    console.print(f"[info]{message}[/]")


def print_success(message: str) -> None:
    """Print a success line to stdout."""
    console.print(f"[success]{message}[/]")


def print_warning(message: str) -> None:
    """Print a warning to stderr."""
    err_console.print(f"[warning]Warning:[/] {message}")


def print_error(message: str) -> None:
    """Print an error to stderr."""
    err_console.print(f"[error]Error:[/] {message}")


def print_hint(message: str) -> None:
    """Print a follow-up suggestion for the previous error to stderr."""
    err_console.print(f"[muted]Hint: {message}[/]")
