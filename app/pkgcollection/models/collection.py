"""Package collection document models.

This module defines the Pydantic models for the package collection JSON
format (format version 1.0) and its signed envelope. Python attribute names
are snake_case; the JSON wire names are camelCase aliases.
"""

from datetime import datetime
from enum import Enum
from typing import Annotated, Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    SerializerFunctionWrapHandler,
    model_serializer,
    model_validator,
)

# Current schema major version of the collection format
FORMAT_VERSION = "1.0"


class _DocumentModel(BaseModel):
    """Base for immutable document entities accepting names or aliases.

    Optional fields that are None are left out of the serialized form, so
    an absent list and an empty list stay distinguishable on the wire.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @model_serializer(mode="wrap")
    def _omit_none(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        data = handler(self)
        return {key: value for key, value in data.items() if value is not None}


class LibraryType(str, Enum):
    """Linkage of a library product."""

    STATIC = "static"
    DYNAMIC = "dynamic"
    AUTOMATIC = "automatic"


class ProductKind(str, Enum):
    """Kind of a product."""

    LIBRARY = "library"
    EXECUTABLE = "executable"
    PLUGIN = "plugin"
    SNIPPET = "snippet"
    TEST = "test"
    MACRO = "macro"


class ProductType(BaseModel):
    """Product type as encoded by the package manifest format.

    The wire form is a single-key object, e.g. ``{"library": ["automatic"]}``
    or ``{"executable": null}``.

    Attributes:
        kind: Product kind.
        library_type: Linkage, only set for library products.
    """

    model_config = ConfigDict(frozen=True)

    kind: ProductKind
    library_type: LibraryType | None = None

    @model_validator(mode="before")
    @classmethod
    def _from_wire(cls, data: Any) -> Any:
        """Accept the single-key wire object or a bare kind string."""
        if isinstance(data, str):
            data = {data: None}
        if not isinstance(data, dict) or "kind" in data:
            return data
        if len(data) != 1:
            msg = f"Product type must have exactly one key, got {sorted(data)}"
            raise ValueError(msg)
        ((kind, value),) = data.items()
        if kind != ProductKind.LIBRARY.value:
            return {"kind": kind}
        if isinstance(value, list) and value:
            return {"kind": kind, "library_type": value[0]}
        return {"kind": kind, "library_type": LibraryType.AUTOMATIC}

    @model_serializer
    def _to_wire(self) -> dict[str, list[str] | None]:
        if self.kind == ProductKind.LIBRARY:
            library_type = self.library_type or LibraryType.AUTOMATIC
            return {self.kind.value: [library_type.value]}
        return {self.kind.value: None}

    @classmethod
    def library(cls, library_type: LibraryType = LibraryType.AUTOMATIC) -> "ProductType":
        """Create a library product type."""
        return cls(kind=ProductKind.LIBRARY, library_type=library_type)

    @classmethod
    def executable(cls) -> "ProductType":
        """Create an executable product type."""
        return cls(kind=ProductKind.EXECUTABLE)

    def __str__(self) -> str:
        if self.kind == ProductKind.LIBRARY:
            return f"library({(self.library_type or LibraryType.AUTOMATIC).value})"
        return self.kind.value


class Target(_DocumentModel):
    """Package target.

    Attributes:
        name: Target name.
        module_name: Module name if this target can be imported as a module.
    """

    name: str
    module_name: Annotated[str | None, Field(alias="moduleName")] = None


class Product(_DocumentModel):
    """Package product.

    Attributes:
        name: Product name.
        type: Product type.
        targets: Names of the targets the product is built from.
    """

    name: str
    type: ProductType
    targets: list[str]


class PlatformVersion(_DocumentModel):
    """Minimum supported version of a platform (e.g. macos 10.15)."""

    name: str
    version: str


class Platform(_DocumentModel):
    """Platform name (e.g. macos, linux)."""

    name: str


class Compatibility(_DocumentModel):
    """A verified platform and language version combination."""

    platform: Platform
    swift_version: Annotated[str, Field(alias="swiftVersion")]


class License(_DocumentModel):
    """License information.

    Attributes:
        name: License name or SPDX identifier (e.g. Apache-2.0, MIT).
        url: URL of the license file.
    """

    name: str | None = None
    url: str


class Author(_DocumentModel):
    """Author of a collection or a package version."""

    name: str


class Signer(_DocumentModel):
    """Identity of the signer of a package version.

    Attributes:
        type: Signer type (e.g. ADP).
        common_name: Certificate common name.
        organizational_unit_name: Certificate organizational unit.
        organization_name: Certificate organization.
    """

    type: str
    common_name: Annotated[str, Field(alias="commonName")]
    organizational_unit_name: Annotated[str, Field(alias="organizationalUnitName")]
    organization_name: Annotated[str, Field(alias="organizationName")]


class Manifest(_DocumentModel):
    """Manifest of a package version for one tools version.

    Attributes:
        tools_version: Tools version the manifest was authored against.
        package_name: Package name declared by the manifest.
        targets: Public targets, sorted by name.
        products: Products, sorted by name.
        minimum_platform_versions: Declared platforms, or None if the manifest
            declares none.
    """

    tools_version: Annotated[str, Field(alias="toolsVersion")]
    package_name: Annotated[str, Field(alias="packageName")]
    targets: list[Target]
    products: list[Product]
    minimum_platform_versions: Annotated[
        list[PlatformVersion] | None,
        Field(alias="minimumPlatformVersions"),
    ] = None


class Version(_DocumentModel):
    """Metadata of one package version.

    Attributes:
        version: Version (tag) string.
        summary: Summary taken from the tag annotation.
        manifests: Manifests keyed by tools version.
        default_tools_version: Key of the default manifest.
        verified_compatibility: Verified platform/language pairs (populated
            externally, never by the generator).
        license: License of the version.
        author: Author of the version.
        signer: Signer of the version.
        created_at: Creation date of the annotated tag.
    """

    version: str
    summary: str | None = None
    manifests: dict[str, Manifest]
    default_tools_version: Annotated[str, Field(alias="defaultToolsVersion")]
    verified_compatibility: Annotated[
        list[Compatibility] | None,
        Field(alias="verifiedCompatibility"),
    ] = None
    license: License | None = None
    author: Author | None = None
    signer: Signer | None = None
    created_at: Annotated[datetime | None, Field(alias="createdAt")] = None

    @property
    def default_manifest(self) -> Manifest | None:
        """Manifest for the default tools version, if present."""
        return self.manifests.get(self.default_tools_version)


class Package(_DocumentModel):
    """Aggregated metadata of one package.

    Attributes:
        url: Repository URL.
        identity: Package identity.
        summary: Package summary.
        keywords: Package keywords.
        versions: Selected versions, in selection order.
        readme_url: URL of the README.
        license: Package license.
    """

    url: str
    identity: str | None = None
    summary: str | None = None
    keywords: list[str] | None = None
    versions: list[Version]
    readme_url: Annotated[str | None, Field(alias="readmeURL")] = None
    license: License | None = None


class Collection(_DocumentModel):
    """A package collection document.

    Attributes:
        name: Collection name.
        overview: Collection description.
        keywords: Collection keywords.
        packages: Packages, in input order.
        format_version: Format version of the document.
        revision: Revision number.
        generated_at: Generation timestamp.
        generated_by: Author of the collection.
    """

    name: str
    overview: str | None = None
    keywords: list[str] | None = None
    packages: list[Package]
    format_version: Annotated[str, Field(alias="formatVersion")] = FORMAT_VERSION
    revision: int | None = None
    generated_at: Annotated[datetime, Field(alias="generatedAt")]
    generated_by: Annotated[Author | None, Field(alias="generatedBy")] = None


class CertificateName(_DocumentModel):
    """Subject or issuer identity of a certificate."""

    user_id: Annotated[str | None, Field(alias="userID")] = None
    common_name: Annotated[str, Field(alias="commonName")]
    organizational_unit: Annotated[str, Field(alias="organizationalUnit")]
    organization: str


class Certificate(_DocumentModel):
    """Identity of the signing certificate."""

    subject: CertificateName
    issuer: CertificateName


class Signature(_DocumentModel):
    """Signature of a collection.

    Attributes:
        signature: Opaque signature string (compact JWS).
        certificate: Identity of the signing certificate.
    """

    signature: str
    certificate: Certificate


class SignedCollection(_DocumentModel):
    """A collection together with its signature."""

    collection: Collection
    signature: Signature
