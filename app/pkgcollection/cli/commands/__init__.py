"""CLI commands for package-collection.

This package contains all subcommand implementations.
"""

from pkgcollection.cli.commands import config, diff, generate, sign, validate

__all__ = ["config", "diff", "generate", "sign", "validate"]
