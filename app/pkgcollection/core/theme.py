"""Color theme for the package-collection CLI.

Built-in colors can be overridden per name in a ``[colors]`` table of
~/.config/pkgcollection/theme.toml. Invalid overrides are ignored with a
warning.
"""

import logging
import re
import tomllib
from functools import cache
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator
from rich.theme import Theme

from pkgcollection.core.paths import get_user_theme_path

logger = logging.getLogger(__name__)

_HEX_COLOR = re.compile(r"#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})")

# Rich style name -> style template over the ThemeColors field names
_STYLES: dict[str, str] = {
    "text": "{text}",
    "muted": "{muted}",
    "dim": "{muted}",
    "header": "{header}",
    "bold_header": "bold {header}",
    "border": "{border}",
    "success": "{success}",
    "warning": "{warning}",
    "error": "bold {error}",
    "info": "{info}",
    "added": "{added}",
    "removed": "{removed}",
    "changed": "{changed}",
    "package.url": "bold {url}",
    "package.version": "{version}",
}


class ThemeColors(BaseModel):
    """Named colors of the CLI, all as #RGB or #RRGGBB hex codes."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    text: str = "#ffffff"
    muted: str = "#b2bec3"
    header: str = "#69B9A1"
    border: str = "#29526d"

    success: str = "#03b971"
    warning: str = "#f5b332"
    error: str = "#f53263"
    info: str = "#0ec1c8"

    # Diff entries
    added: str = "#c1ff62"
    removed: str = "#f53263"
    changed: str = "#0e8ac8"

    # Collection tables
    url: str = "#ffffff"
    version: str = "#b2bec3"

    @field_validator("*", mode="before")
    @classmethod
    def _check_hex(cls, value: Any) -> str:
        if not isinstance(value, str) or not _HEX_COLOR.fullmatch(value.strip()):
            raise ValueError(f"expected a #RGB or #RRGGBB color, got {value!r}")
        return value.strip()


def _read_overrides(path: Path) -> dict[str, Any]:
    """Read the ``[colors]`` table of a theme file.

    Returns:
        The raw overrides; empty if the file is missing or unreadable.
    """
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError:
        return {}
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning("Ignoring theme file %s: %s", path, e)
        return {}

    colors = data.get("colors", {})
    if not isinstance(colors, dict):
        logger.warning("Ignoring theme file %s: [colors] must be a table", path)
        return {}
    return colors


def load_theme(path: Path | None = None) -> ThemeColors:
    """Load the theme colors with user overrides applied.

    Args:
        path: Theme file. If None, uses the default user theme path.

    Returns:
        ThemeColors; the defaults if the overrides are invalid.
    """
    overrides = _read_overrides(path or get_user_theme_path())
    if not overrides:
        return ThemeColors()
    try:
        return ThemeColors.model_validate(overrides)
    except ValidationError as e:
        logger.warning("Invalid theme colors, using defaults: %s", e)
        return ThemeColors()


def get_rich_theme(colors: ThemeColors | None = None) -> Theme:
    """Build the Rich theme for a set of colors.

    Args:
        colors: Colors to use. If None, loads them with load_theme().
    """
    values = (colors or load_theme()).model_dump()
    return Theme({name: template.format(**values) for name, template in _STYLES.items()})


@cache
def get_theme() -> Theme:
    """Get the Rich theme of the CLI, loaded once per process."""
    return get_rich_theme()
