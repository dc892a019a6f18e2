"""Configuration commands.

Shows the effective tool configuration and writes a default config file.
"""

from typing import Annotated

import typer
from rich.table import Table

from pkgcollection.core.config import ConfigError, ToolConfig, load_config, save_config
from pkgcollection.core.paths import get_config_path
from pkgcollection.utils.formatting import (
    console,
    print_error,
    print_hint,
    print_info,
    print_success,
)

app = typer.Typer(
    help="Show or initialize the tool configuration.",
    no_args_is_help=True,
)


def _mask_token(token: str) -> str:
    """Hide the secret part of a type:host:token string."""
    parts = token.split(":", 2)
    if len(parts) != 3:
        return "****"
    return f"{parts[0]}:{parts[1]}:****"


@app.command()
def show() -> None:
    """Show the effective configuration. Auth tokens are masked."""
    config_path = get_config_path()
    try:
        config = load_config(config_path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if not config_path.exists():
        print_info(f"No config file at {config_path}, showing defaults.")

    table = Table(show_header=True, header_style="bold_header", border_style="border")
    table.add_column("Setting", style="package.url")
    table.add_column("Value")

    table.add_row("working_directory", str(config.working_directory or "(temporary)"))
    table.add_row("pretty_printed", str(config.pretty_printed))
    table.add_row(
        "auth_tokens",
        "\n".join(_mask_token(token) for token in config.auth_tokens) or "(none)",
    )
    for key, value in config.http.model_dump().items():
        table.add_row(f"http.{key}", str(value))

    console.print(table)


@app.command()
def init(
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite an existing config file."),
    ] = False,
) -> None:
    """Write a config file with the default settings.

    Examples:
        package-collection config init
        package-collection config init --force
    """
    config_path = get_config_path()
    if config_path.exists() and not force:
        print_error(f"Config file already exists: {config_path}")
        print_hint("Use --force to overwrite.")
        raise typer.Exit(code=1)

    try:
        saved = save_config(ToolConfig(), config_path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Config written to {saved}")
