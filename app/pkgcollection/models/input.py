"""Generator input models.

This module defines the Pydantic models for the JSON document that lists
the packages to include in a collection.
"""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

from pkgcollection.models.collection import Author, License, Signer


class PackageInput(BaseModel):
    """One requested package.

    Explicit values override those fetched from the hosting service, and the
    excluded-* lists are subtracted from what is found in the repository.

    Attributes:
        url: Repository URL. Identifies the package within the collection.
        identity: Package identity.
        summary: Summary override.
        keywords: Keywords override.
        versions: Versions (tags) to include. If None, recent semantic
            versions are selected automatically.
        excluded_versions: Versions to leave out.
        excluded_products: Product names to leave out.
        excluded_targets: Target names to leave out.
        readme_url: README URL override.
        license: License override.
        signer: Signer identity attached to every version.
    """

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    url: Annotated[str, Field(min_length=1, description="Repository URL")]
    identity: Annotated[str | None, Field(description="Package identity")] = None
    summary: Annotated[str | None, Field(description="Package summary")] = None
    keywords: Annotated[list[str] | None, Field(description="Package keywords")] = None
    versions: Annotated[list[str] | None, Field(description="Versions to include")] = None
    excluded_versions: Annotated[
        list[str] | None,
        Field(alias="excludedVersions", description="Versions to exclude"),
    ] = None
    excluded_products: Annotated[
        list[str] | None,
        Field(alias="excludedProducts", description="Products to exclude"),
    ] = None
    excluded_targets: Annotated[
        list[str] | None,
        Field(alias="excludedTargets", description="Targets to exclude"),
    ] = None
    readme_url: Annotated[
        str | None,
        Field(alias="readmeURL", description="README URL"),
    ] = None
    license: Annotated[License | None, Field(description="Package license")] = None
    signer: Annotated[Signer | None, Field(description="Package signer")] = None


class CollectionInput(BaseModel):
    """Input document describing the collection to generate.

    Attributes:
        name: Collection name.
        overview: Collection description.
        keywords: Collection keywords, kept in order without deduplication.
        author: Collection author.
        packages: Packages to process, in output order.
    """

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    name: Annotated[str, Field(description="Collection name")]
    overview: Annotated[str | None, Field(description="Collection overview")] = None
    keywords: Annotated[list[str] | None, Field(description="Collection keywords")] = None
    author: Annotated[Author | None, Field(description="Collection author")] = None
    packages: Annotated[list[PackageInput], Field(description="Packages to process")]
