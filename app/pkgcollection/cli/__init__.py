"""CLI package for package-collection.

This package contains the Typer application and all subcommands.
"""

from pkgcollection.cli.main import app

__all__ = ["app"]
