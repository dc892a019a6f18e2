"""Diff command implementation."""

from pathlib import Path
from typing import Annotated

import typer

from pkgcollection.cli.display import create_diff_table
from pkgcollection.core.diff import compare_collections
from pkgcollection.core.document import DocumentError, load_collection
from pkgcollection.utils.formatting import console, print_error, print_info
from pkgcollection.utils.log import configure_logging


def diff_collections(
    collection_one_path: Annotated[
        Path,
        typer.Argument(help="First collection document."),
    ],
    collection_two_path: Annotated[
        Path,
        typer.Argument(help="Second collection document."),
    ],
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="List the differing fields."),
    ] = False,
) -> None:
    """Compare two package collections, ignoring when they were generated.

    Examples:
        package-collection diff old.json new.json
        package-collection diff old.json new.json --verbose
    """
    configure_logging(verbose)

    try:
        one = load_collection(collection_one_path)
        two = load_collection(collection_two_path)
    except DocumentError as e:
        print_error(f"Failed to load collection: {e}")
        raise typer.Exit(code=1) from e

    result = compare_collections(one, two)
    if result.is_same:
        print_info("The package collections are the same.")
        return

    print_info("The package collections are different.")
    if verbose:
        console.print(create_diff_table(result))
