"""Main CLI application entry point.

Defines the Typer application and global options.
"""

from typing import Annotated

import typer

from pkgcollection import __version__
from pkgcollection.cli.commands import config, diff, generate, sign, validate

# Create main Typer app
app = typer.Typer(
    name="package-collection",
    help="Generate, sign, validate and compare package collections.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"package-collection version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
) -> None:
    """package-collection - Curated lists of packages with per-version metadata.

    Build a collection from a list of repositories, sign it with a
    certificate chain, validate it before publishing and compare revisions.
    """


# Register commands
app.command("generate")(generate.generate_collection)
app.command("sign")(sign.sign_collection)
app.command("validate")(validate.validate_collection)
app.command("diff")(diff.diff_collections)
app.add_typer(config.app, name="config")


if __name__ == "__main__":
    app()
