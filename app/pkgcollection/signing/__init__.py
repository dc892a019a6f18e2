"""Collection signers."""

from pkgcollection.signing.base import (
    CertificateChainError,
    CollectionSigner,
    EmptyCertChainError,
    PrivateKeyError,
    SigningError,
)
from pkgcollection.signing.certificate import CertificateCollectionSigner

__all__ = [
    "CertificateChainError",
    "CertificateCollectionSigner",
    "CollectionSigner",
    "EmptyCertChainError",
    "PrivateKeyError",
    "SigningError",
]
