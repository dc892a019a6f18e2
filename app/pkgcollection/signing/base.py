"""Abstract base class for collection signers."""

from abc import ABC, abstractmethod
from pathlib import Path

from pkgcollection.models.collection import Collection, SignedCollection


class SigningError(Exception):
    """Base exception for signing errors."""


class EmptyCertChainError(SigningError):
    """Raised when no certificate is given."""

    def __init__(self) -> None:
        super().__init__("Certificate chain cannot be empty")


class CertificateChainError(SigningError):
    """Raised when a certificate cannot be read or the chain is broken."""


class PrivateKeyError(SigningError):
    """Raised when the private key cannot be read or does not fit the certificate."""


class CollectionSigner(ABC):
    """Abstract base class for collection signers."""

    @abstractmethod
    def sign(
        self,
        collection: Collection,
        cert_chain_paths: list[Path],
        private_key_path: Path,
    ) -> SignedCollection:
        """Sign a collection.

        Args:
            collection: Collection to sign.
            cert_chain_paths: Certificate files, signing certificate first,
                each followed by its issuer.
            private_key_path: PEM private key of the signing certificate.

        Returns:
            SignedCollection wrapping the collection and its signature.

        Raises:
            EmptyCertChainError: If cert_chain_paths is empty.
            SigningError: If the certificates or key are unusable.
        """
