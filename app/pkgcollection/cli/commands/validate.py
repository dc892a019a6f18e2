"""Validate command implementation."""

from pathlib import Path
from typing import Annotated

import typer

from pkgcollection.core.document import DocumentError, load_collection
from pkgcollection.utils.formatting import print_error, print_info, print_success, print_warning
from pkgcollection.utils.log import configure_logging
from pkgcollection.validation.base import ValidationLevel
from pkgcollection.validation.rules import RuleBasedCollectionValidator


def validate_collection(
    input_path: Annotated[
        Path,
        typer.Argument(help="Collection document to validate."),
    ],
    warnings_as_errors: Annotated[
        bool,
        typer.Option("--warnings-as-errors", help="Treat warnings as errors."),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show extra logging."),
    ] = False,
) -> None:
    """Validate a package collection.

    Every finding is reported. The command fails if any error is found,
    or any warning when --warnings-as-errors is given.

    Examples:
        package-collection validate collection.json
        package-collection validate collection.json --warnings-as-errors
    """
    configure_logging(verbose)

    try:
        collection = load_collection(input_path)
    except DocumentError as e:
        print_error(f"Failed to load collection: {e}")
        raise typer.Exit(code=1) from e

    if verbose:
        print_info(f"Validating {len(collection.packages)} package(s) in {input_path}")

    messages = RuleBasedCollectionValidator().validate(collection)
    if not messages:
        print_success("The package collection is valid.")
        return

    errors = [m for m in messages if m.level is ValidationLevel.ERROR]
    warnings = [m for m in messages if m.level is ValidationLevel.WARNING]

    for message in warnings:
        print_warning(str(message))
    for message in errors:
        print_error(str(message))

    if errors or warnings_as_errors:
        raise typer.Exit(code=1)

    print_success(f"The package collection is valid with {len(warnings)} warning(s).")
