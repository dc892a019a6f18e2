"""X.509 certificate based collection signer.

The signature is a compact JWS over the canonical (sorted, compact) JSON of
the collection. The certificate chain is embedded in the ``x5c`` header.
ES256/ES384/ES512 is used for EC keys and RS256 for RSA keys.
"""

import base64
import json
import logging
from datetime import UTC, datetime
from pathlib import Path

from cryptography import x509
from cryptography.exceptions import InvalidSignature, UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec, padding, rsa
from cryptography.hazmat.primitives.asymmetric.types import PublicKeyTypes
from cryptography.hazmat.primitives.asymmetric.utils import decode_dss_signature
from cryptography.x509.oid import NameOID

from pkgcollection.core.document import document_to_json
from pkgcollection.models.collection import (
    Certificate,
    CertificateName,
    Collection,
    Signature,
    SignedCollection,
)
from pkgcollection.signing.base import (
    CertificateChainError,
    CollectionSigner,
    EmptyCertChainError,
    PrivateKeyError,
)

logger = logging.getLogger(__name__)

SigningKey = ec.EllipticCurvePrivateKey | rsa.RSAPrivateKey

# JWS algorithm and digest per EC curve size
_EC_ALGORITHMS: dict[int, tuple[str, type[hashes.HashAlgorithm]]] = {
    256: ("ES256", hashes.SHA256),
    384: ("ES384", hashes.SHA384),
    521: ("ES512", hashes.SHA512),
}


def _b64url(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def load_certificate(path: Path) -> x509.Certificate:
    """Load a PEM or DER encoded certificate.

    Raises:
        CertificateChainError: If the file cannot be read or parsed.
    """
    try:
        data = path.read_bytes()
    except OSError as e:
        raise CertificateChainError(f"Cannot read certificate {path}: {e}") from e

    try:
        if b"-----BEGIN" in data:
            return x509.load_pem_x509_certificate(data)
        return x509.load_der_x509_certificate(data)
    except ValueError as e:
        raise CertificateChainError(f"Invalid certificate {path}: {e}") from e


def load_private_key(path: Path) -> SigningKey:
    """Load an unencrypted PEM private key.

    Raises:
        PrivateKeyError: If the key cannot be read, is encrypted, or is
            neither EC nor RSA.
    """
    try:
        data = path.read_bytes()
    except OSError as e:
        raise PrivateKeyError(f"Cannot read private key {path}: {e}") from e

    try:
        key = serialization.load_pem_private_key(data, password=None)
    except (ValueError, TypeError, UnsupportedAlgorithm) as e:
        raise PrivateKeyError(f"Invalid private key {path}: {e}") from e

    if not isinstance(key, ec.EllipticCurvePrivateKey | rsa.RSAPrivateKey):
        raise PrivateKeyError(f"Unsupported private key type in {path}: {type(key).__name__}")
    return key


def certificate_name(name: x509.Name) -> CertificateName:
    """Build a CertificateName from an X.509 subject or issuer.

    Missing attributes become empty strings, except the user ID which is
    left unset.
    """

    def first(oid: x509.ObjectIdentifier) -> str | None:
        attributes = name.get_attributes_for_oid(oid)
        if not attributes:
            return None
        value = attributes[0].value
        return value if isinstance(value, str) else value.decode("utf-8", "replace")

    return CertificateName(
        user_id=first(NameOID.USER_ID),
        common_name=first(NameOID.COMMON_NAME) or "",
        organizational_unit=first(NameOID.ORGANIZATIONAL_UNIT_NAME) or "",
        organization=first(NameOID.ORGANIZATION_NAME) or "",
    )


class CertificateCollectionSigner(CollectionSigner):
    """Signs collections with an X.509 certificate chain.

    Args:
        check_validity: Reject a signing certificate that is expired or not
            yet valid.
    """

    def __init__(self, check_validity: bool = True) -> None:
        self._check_validity = check_validity

    def sign(
        self,
        collection: Collection,
        cert_chain_paths: list[Path],
        private_key_path: Path,
    ) -> SignedCollection:
        """Sign a collection with the first certificate of the chain."""
        if not cert_chain_paths:
            raise EmptyCertChainError()

        chain = [load_certificate(path) for path in cert_chain_paths]
        self._verify_chain(chain)
        leaf = chain[0]

        key = load_private_key(private_key_path)
        if _public_key_der(key.public_key()) != _public_key_der(leaf.public_key()):
            raise PrivateKeyError("Private key does not match the signing certificate")

        payload = document_to_json(collection).encode("utf-8")
        signature = self._jws(payload, key, chain)
        logger.debug("Signed collection %r with %s", collection.name, leaf.subject.rfc4514_string())

        return SignedCollection(
            collection=collection,
            signature=Signature(
                signature=signature,
                certificate=Certificate(
                    subject=certificate_name(leaf.subject),
                    issuer=certificate_name(leaf.issuer),
                ),
            ),
        )

    def _verify_chain(self, chain: list[x509.Certificate]) -> None:
        """Check that every certificate is issued by the next one.

        Raises:
            CertificateChainError: If a link is broken or the signing
                certificate is outside its validity period.
        """
        if self._check_validity:
            now = datetime.now(UTC)
            leaf = chain[0]
            not_before, not_after = leaf.not_valid_before_utc, leaf.not_valid_after_utc
            if not not_before <= now <= not_after:
                msg = f"Signing certificate is only valid from {not_before} to {not_after}"
                raise CertificateChainError(msg)

        for index, (child, parent) in enumerate(zip(chain, chain[1:])):
            try:
                child.verify_directly_issued_by(parent)
            except (ValueError, TypeError, InvalidSignature) as e:
                reason = str(e) or "invalid signature"
                msg = f"Certificate {index} is not issued by certificate {index + 1}: {reason}"
                raise CertificateChainError(msg) from e

    def _jws(self, payload: bytes, key: SigningKey, chain: list[x509.Certificate]) -> str:
        """Build a compact JWS with the chain in the x5c header."""
        if isinstance(key, ec.EllipticCurvePrivateKey):
            algorithm_name, digest = _ec_algorithm(key)
        else:
            algorithm_name, digest = "RS256", hashes.SHA256

        header = {
            "alg": algorithm_name,
            "typ": "JWT",
            "x5c": [
                base64.b64encode(cert.public_bytes(serialization.Encoding.DER)).decode("ascii")
                for cert in chain
            ],
        }
        header_json = json.dumps(header, sort_keys=True, separators=(",", ":"))
        signing_input = f"{_b64url(header_json.encode('utf-8'))}.{_b64url(payload)}".encode("ascii")

        if isinstance(key, ec.EllipticCurvePrivateKey):
            der_signature = key.sign(signing_input, ec.ECDSA(digest()))
            r, s = decode_dss_signature(der_signature)
            size = (key.curve.key_size + 7) // 8
            raw_signature = r.to_bytes(size, "big") + s.to_bytes(size, "big")
        else:
            raw_signature = key.sign(signing_input, padding.PKCS1v15(), digest())

        return f"{signing_input.decode('ascii')}.{_b64url(raw_signature)}"


def _ec_algorithm(key: ec.EllipticCurvePrivateKey) -> tuple[str, type[hashes.HashAlgorithm]]:
    try:
        return _EC_ALGORITHMS[key.curve.key_size]
    except KeyError as e:
        raise PrivateKeyError(f"Unsupported EC curve: {key.curve.name}") from e


def _public_key_der(public_key: PublicKeyTypes) -> bytes:
    return public_key.public_bytes(
        serialization.Encoding.DER,
        serialization.PublicFormat.SubjectPublicKeyInfo,
    )
