"""Shared Rich display functions for collections and diffs.

Provides reusable table builders used by the generate and diff commands.
"""

from rich.markup import escape
from rich.table import Table

from pkgcollection.core.diff import CollectionDiff, DiffType
from pkgcollection.models.collection import Collection


def create_collection_table(collection: Collection) -> Table:
    """Create a Rich table summarizing the packages of a collection.

    Args:
        collection: Collection to summarize.

    Returns:
        Rich Table with Package, Versions and Summary columns.
    """
    table = Table(
        title=collection.name,
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Package", style="package.url", no_wrap=True)
    table.add_column("Versions", style="package.version")
    table.add_column("Summary")

    for package in collection.packages:
        table.add_row(
            package.url,
            ", ".join(version.version for version in package.versions),
            f"[muted]{escape(package.summary or '')}[/muted]",
        )

    return table


def _get_diff_display(diff_type: DiffType) -> tuple[str, str]:
    """Get status icon and style for a diff type."""
    if diff_type == DiffType.ADDED:
        return "[+]", "added"
    if diff_type == DiffType.REMOVED:
        return "[-]", "removed"
    return "[~]", "changed"


def create_diff_table(result: CollectionDiff) -> Table:
    """Create a Rich table listing the differences between two collections.

    Args:
        result: Comparison result.

    Returns:
        Rich Table with Status and Field columns.
    """
    table = Table(
        title="Collection Differences",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Status", width=6, justify="center")
    table.add_column("Field")

    for entry in result.differences:
        icon, style = _get_diff_display(entry.diff_type)
        table.add_row(
            f"[{style}]{icon}[/{style}]",
            f"[{style}]{escape(entry.field)}[/{style}]",
        )

    return table
