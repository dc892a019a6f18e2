"""Generate command implementation.

Builds a package collection from an input document by cloning each
package repository, inspecting the selected versions and merging metadata
from the hosting service.
"""

import asyncio
import logging
from pathlib import Path
from typing import Annotated

import typer

from pkgcollection.cli.display import create_collection_table
from pkgcollection.core.aggregator import PackageAggregator
from pkgcollection.core.assembler import CollectionAssembler, EmptyCollectionError
from pkgcollection.core.config import ConfigError, HTTPConfig, load_config
from pkgcollection.core.document import DocumentError, load_collection_input, save_document
from pkgcollection.core.resolver import PackageVersionResolver
from pkgcollection.inspectors.swift import SwiftPackageInspector
from pkgcollection.models.collection import Collection
from pkgcollection.models.input import CollectionInput
from pkgcollection.providers.base import AuthTokenKey, parse_auth_tokens
from pkgcollection.providers.http import HTTPClient
from pkgcollection.providers.registry import MetadataProviderRegistry
from pkgcollection.utils.formatting import (
    console,
    print_error,
    print_hint,
    print_info,
    print_success,
)
from pkgcollection.utils.log import configure_logging
from pkgcollection.vcs.git import GitVersionControl


class MissingToolError(Exception):
    """Raised when a required executable is not installed."""


async def build_collection(
    collection_input: CollectionInput,
    *,
    revision: int | None,
    working_directory: Path | None,
    auth_tokens: dict[AuthTokenKey, str],
    http_config: HTTPConfig,
    logger: logging.Logger,
) -> Collection:
    """Wire the default collaborators and assemble the collection.

    Raises:
        MissingToolError: If git or swift is not installed.
        EmptyCollectionError: If no package could be aggregated.
    """
    vcs = GitVersionControl()
    inspector = SwiftPackageInspector()
    if not vcs.is_available():
        raise MissingToolError("git is not installed or not in PATH")
    if not inspector.is_available():
        raise MissingToolError("swift is not installed or not in PATH")

    async with HTTPClient(http_config) as client:
        aggregator = PackageAggregator(
            vcs,
            PackageVersionResolver(vcs, inspector, logger=logger),
            metadata_provider=MetadataProviderRegistry(client, auth_tokens),
            working_directory=working_directory,
            logger=logger,
        )
        assembler = CollectionAssembler(aggregator, logger=logger)
        return await assembler.assemble(collection_input, revision=revision)


def generate_collection(
    input_path: Annotated[
        Path,
        typer.Argument(help="JSON document listing the packages to include."),
    ],
    output_path: Annotated[
        Path,
        typer.Argument(help="Where to write the generated collection."),
    ],
    working_directory_path: Annotated[
        Path | None,
        typer.Option(
            "--working-directory-path",
            help=(
                "Directory for persistent repository clones. Clones are keyed by "
                "repository name, so two URLs ending in the same name share one clone."
            ),
        ),
    ] = None,
    revision: Annotated[
        int | None,
        typer.Option("--revision", help="Revision number of the collection."),
    ] = None,
    auth_token: Annotated[
        list[str] | None,
        typer.Option(
            "--auth-token",
            help="Hosting service token as type:host:token (type: github, gitlab).",
        ),
    ] = None,
    pretty_printed: Annotated[
        bool,
        typer.Option("--pretty-printed", help="Write indented JSON."),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show extra logging."),
    ] = False,
) -> None:
    """Generate a package collection from an input document.

    Packages that cannot be processed are skipped with a warning. The
    command fails only if no package could be processed.

    Examples:
        package-collection generate input.json collection.json
        package-collection generate input.json out.json --revision 3 --pretty-printed
        package-collection generate input.json out.json --auth-token github:github.com:TOKEN
    """
    logger = configure_logging(verbose)

    try:
        config = load_config()
    except ConfigError as e:
        print_error(f"Failed to load config: {e}")
        raise typer.Exit(code=1) from e

    try:
        collection_input = load_collection_input(input_path)
    except DocumentError as e:
        print_error(f"Failed to load input: {e}")
        raise typer.Exit(code=1) from e

    if verbose:
        print_info(f"Using input file located at {input_path}")

    # Command-line tokens come last so they win over configured ones
    tokens = parse_auth_tokens([*config.auth_tokens, *(auth_token or [])])

    try:
        collection = asyncio.run(
            build_collection(
                collection_input,
                revision=revision,
                working_directory=working_directory_path or config.working_directory,
                auth_tokens=tokens,
                http_config=config.http,
                logger=logger,
            )
        )
    except MissingToolError as e:
        print_error(str(e))
        print_hint("Install git and the Swift toolchain, or add them to PATH.")
        raise typer.Exit(code=1) from e
    except EmptyCollectionError as e:
        print_error(f"Failed to generate package collection: {e}")
        raise typer.Exit(code=1) from e

    try:
        save_document(collection, output_path, pretty=pretty_printed or config.pretty_printed)
    except DocumentError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if verbose:
        console.print(create_collection_table(collection))
    print_success(f"Package collection saved to {output_path}")
