"""Data models for pkgcollection.

This module exports the core data structures used throughout the application.
"""

from pkgcollection.models.collection import (
    FORMAT_VERSION,
    Author,
    Certificate,
    CertificateName,
    Collection,
    Compatibility,
    LibraryType,
    License,
    Manifest,
    Package,
    Platform,
    PlatformVersion,
    Product,
    ProductKind,
    ProductType,
    Signature,
    SignedCollection,
    Signer,
    Target,
    Version,
)
from pkgcollection.models.input import CollectionInput, PackageInput
from pkgcollection.models.manifest import (
    PackageDescription,
    PackageManifest,
    normalize_tools_version,
)
from pkgcollection.models.metadata import InspectedPackage, PackageBasicMetadata, TagInfo

__all__ = [
    "FORMAT_VERSION",
    "Author",
    "Certificate",
    "CertificateName",
    "Collection",
    "CollectionInput",
    "Compatibility",
    "InspectedPackage",
    "LibraryType",
    "License",
    "Manifest",
    "Package",
    "PackageBasicMetadata",
    "PackageDescription",
    "PackageInput",
    "PackageManifest",
    "Platform",
    "PlatformVersion",
    "Product",
    "ProductKind",
    "ProductType",
    "Signature",
    "SignedCollection",
    "Signer",
    "TagInfo",
    "Target",
    "Version",
    "normalize_tools_version",
]
