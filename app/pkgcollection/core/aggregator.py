"""Aggregation of one package across its versions.

For each package the remote metadata request runs while the repository is
cloned (or fetched) and its versions are resolved in a worker thread. Both
are joined before the results are merged, with explicit input values taking
precedence over fetched ones.
"""

import asyncio
import logging
from collections.abc import Iterator
from contextlib import contextmanager, suppress
from pathlib import Path
from tempfile import TemporaryDirectory

from pkgcollection.core.paths import get_working_copy_path, repository_name
from pkgcollection.core.resolver import PackageVersionResolver, VersionResolutionError
from pkgcollection.core.versions import select_default_versions
from pkgcollection.models.collection import Package, Version
from pkgcollection.models.input import PackageInput
from pkgcollection.models.metadata import PackageBasicMetadata
from pkgcollection.providers.base import MetadataSource
from pkgcollection.providers.errors import MetadataProviderError
from pkgcollection.vcs.base import VersionControlError, VersionControlProvider


class PackageAggregationError(Exception):
    """Raised when a package cannot be aggregated."""


class InvalidPackageError(PackageAggregationError):
    """Raised when no version of a package could be resolved."""


class PackageAggregator:
    """Builds a collection Package from a PackageInput.

    Args:
        vcs: Version control provider for the working copy.
        resolver: Resolver for individual versions.
        metadata_provider: Source of remote metadata. If None, only local
            data and explicit input values are used.
        working_directory: Directory holding persistent working copies. If
            None, each package is cloned into a temporary directory.
        logger: Logger for progress messages. Defaults to this module's logger.
    """

    def __init__(
        self,
        vcs: VersionControlProvider,
        resolver: PackageVersionResolver,
        metadata_provider: MetadataSource | None = None,
        working_directory: Path | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._vcs = vcs
        self._resolver = resolver
        self._metadata_provider = metadata_provider
        self._working_directory = working_directory
        self._logger = logger or logging.getLogger(__name__)

    async def aggregate(self, package: PackageInput) -> Package:
        """Aggregate one package.

        Args:
            package: Requested package.

        Returns:
            Package with at least one version.

        Raises:
            PackageAggregationError: If the working copy cannot be prepared.
            InvalidPackageError: If no version could be resolved.
        """
        self._logger.info("Processing package %s", package.url)

        metadata_task = asyncio.create_task(self._fetch_metadata(package.url))
        try:
            versions = await asyncio.to_thread(self._resolve_versions, package)
        except Exception:
            metadata_task.cancel()
            with suppress(asyncio.CancelledError):
                await metadata_task
            raise

        metadata = await metadata_task
        return self._merge(package, versions, metadata)

    async def _fetch_metadata(self, url: str) -> PackageBasicMetadata:
        """Fetch remote metadata; any provider failure yields empty metadata."""
        if self._metadata_provider is None:
            return PackageBasicMetadata()
        try:
            return await self._metadata_provider.fetch(url)
        except MetadataProviderError as e:
            self._logger.warning("Cannot fetch metadata for %s: %s", url, e)
            return PackageBasicMetadata()

    def _resolve_versions(self, package: PackageInput) -> list[Version]:
        """Prepare the working copy and resolve the requested versions in order.

        Runs in a worker thread.
        """
        excluded_versions = set(package.excluded_versions or [])
        excluded_products = set(package.excluded_products or [])
        excluded_targets = set(package.excluded_targets or [])

        resolved: list[Version] = []
        try:
            with self._working_copy(package.url) as checkout_path:
                if package.versions is not None:
                    candidates = list(package.versions)
                else:
                    candidates = select_default_versions(self._vcs.list_tags(checkout_path))
                    self._logger.debug("Default versions for %s: %s", package.url, candidates)

                for version in candidates:
                    if version in excluded_versions:
                        continue
                    try:
                        resolved.append(
                            self._resolver.resolve(
                                version,
                                excluded_products,
                                excluded_targets,
                                checkout_path,
                            )
                        )
                    except VersionResolutionError as e:
                        self._logger.warning(
                            "Skipping version %s of %s: %s", version, package.url, e
                        )
        except (VersionControlError, OSError) as e:
            raise PackageAggregationError(
                f"Cannot prepare working copy of {package.url}: {e}"
            ) from e

        if not resolved:
            raise InvalidPackageError(f"No valid versions found for {package.url}")
        return resolved

    @contextmanager
    def _working_copy(self, url: str) -> Iterator[Path]:
        """Yield an up-to-date working copy of a repository.

        Inside the working directory the copy is named after the repository
        and kept afterwards. Otherwise a temporary clone is used and removed.
        """
        if self._working_directory is not None:
            path = get_working_copy_path(self._working_directory, url)
            if path is not None:
                if path.exists():
                    self._logger.debug("%s exists, fetching", path)
                    self._vcs.fetch(path)
                else:
                    self._logger.debug("%s does not exist, cloning", path)
                    path.parent.mkdir(parents=True, exist_ok=True)
                    self._vcs.clone(url, path)
                yield path
                return
            self._logger.debug("No repository name in %s, using a temporary directory", url)

        with TemporaryDirectory(prefix="pkgcollection-") as tmp_dir:
            path = Path(tmp_dir) / (repository_name(url) or "repository")
            self._vcs.clone(url, path)
            yield path

    def _merge(
        self,
        package: PackageInput,
        versions: list[Version],
        metadata: PackageBasicMetadata,
    ) -> Package:
        """Combine input overrides, remote metadata and resolved versions."""
        license_ = package.license if package.license is not None else metadata.license
        readme_url = package.readme_url if package.readme_url is not None else metadata.readme_url
        versions = [
            version.model_copy(update={"license": license_, "signer": package.signer})
            for version in versions
        ]
        return Package(
            url=package.url,
            identity=package.identity,
            summary=package.summary if package.summary is not None else metadata.summary,
            keywords=package.keywords if package.keywords is not None else metadata.keywords,
            versions=versions,
            readme_url=readme_url,
            license=license_,
        )
