"""Assembly of the collection document.

Packages are aggregated one at a time in input order. A package that fails
is logged and left out; the run only fails when no package is left.
"""

import logging
from collections.abc import Callable
from datetime import UTC, datetime

from pkgcollection.core.aggregator import PackageAggregationError, PackageAggregator
from pkgcollection.models.collection import FORMAT_VERSION, Collection, Package
from pkgcollection.models.input import CollectionInput


class EmptyCollectionError(Exception):
    """Raised when no package of the input could be aggregated."""


def utc_now() -> datetime:
    """Return the current UTC time truncated to whole seconds."""
    return datetime.now(UTC).replace(microsecond=0)


class CollectionAssembler:
    """Builds a Collection from a CollectionInput.

    Args:
        aggregator: Aggregator for individual packages.
        clock: Source of the generation timestamp. Defaults to utc_now.
        logger: Logger for progress messages. Defaults to this module's logger.

    Example:
        >>> assembler = CollectionAssembler(aggregator)
        >>> collection = await assembler.assemble(collection_input, revision=3)
        >>> collection.format_version
        '1.0'
    """

    def __init__(
        self,
        aggregator: PackageAggregator,
        clock: Callable[[], datetime] = utc_now,
        logger: logging.Logger | None = None,
    ) -> None:
        self._aggregator = aggregator
        self._clock = clock
        self._logger = logger or logging.getLogger(__name__)

    async def assemble(
        self, collection_input: CollectionInput, revision: int | None = None
    ) -> Collection:
        """Aggregate all packages and build the collection.

        Args:
            collection_input: Parsed input document.
            revision: Revision number written to the document.

        Returns:
            Collection with at least one package, in input order.

        Raises:
            EmptyCollectionError: If every package failed.
        """
        packages: list[Package] = []
        for package_input in collection_input.packages:
            try:
                package = await self._aggregator.aggregate(package_input)
            except PackageAggregationError as e:
                self._logger.warning("Skipping package %s: %s", package_input.url, e)
                continue
            self._logger.debug(
                "Package %s: %d version(s)", package.url, len(package.versions)
            )
            packages.append(package)

        if not packages:
            raise EmptyCollectionError("No valid packages found, collection would be empty")

        return Collection(
            name=collection_input.name,
            overview=collection_input.overview,
            keywords=collection_input.keywords,
            packages=packages,
            format_version=FORMAT_VERSION,
            revision=revision,
            generated_at=self._clock(),
            generated_by=collection_input.author,
        )
