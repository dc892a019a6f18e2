"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest
from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec, rsa
from cryptography.x509.oid import NameOID
from pkgcollection.models.collection import (
    Author,
    Collection,
    License,
    Manifest,
    Package,
    Product,
    ProductType,
    Target,
    Version,
)


def make_version(
    version: str = "1.0.0",
    *,
    tools_version: str = "5.2",
    products: list[Product] | None = None,
    targets: list[Target] | None = None,
) -> Version:
    """Build a version with a single default manifest."""
    manifest = Manifest(
        tools_version=tools_version,
        package_name="Foo",
        targets=targets if targets is not None else [Target(name="Foo", module_name="Foo")],
        products=(
            products
            if products is not None
            else [Product(name="Foo", type=ProductType.library(), targets=["Foo"])]
        ),
    )
    return Version(
        version=version,
        manifests={tools_version: manifest},
        default_tools_version=tools_version,
    )


@pytest.fixture
def version_factory() -> Callable[..., Version]:
    """Factory for versions with a single default manifest."""
    return make_version


@pytest.fixture
def sample_collection() -> Collection:
    """Create a small valid collection."""
    return Collection(
        name="Test Collection",
        overview="Packages for testing",
        keywords=["test", "sample"],
        packages=[
            Package(
                url="https://github.com/octocat/foo.git",
                summary="Foo package",
                versions=[make_version("1.1.0"), make_version("1.0.0")],
                license=License(name="MIT", url="https://example.com/LICENSE"),
            ),
            Package(
                url="https://gitlab.com/group/bar.git",
                versions=[make_version("2.0.0")],
            ),
        ],
        revision=1,
        generated_at=datetime(2024, 1, 2, 3, 4, 5, tzinfo=UTC),
        generated_by=Author(name="Jane Doe"),
    )


@dataclass
class CertChain:
    """Files of a generated two-level certificate chain."""

    leaf_cert: Path
    ca_cert: Path
    leaf_key: Path
    ca_key: Path


def _name(common_name: str) -> x509.Name:
    return x509.Name(
        [
            x509.NameAttribute(NameOID.COMMON_NAME, common_name),
            x509.NameAttribute(NameOID.ORGANIZATIONAL_UNIT_NAME, "Packaging"),
            x509.NameAttribute(NameOID.ORGANIZATION_NAME, "Example Org"),
        ]
    )


def _certificate(
    subject: x509.Name,
    issuer: x509.Name,
    public_key,
    signing_key,
    *,
    not_before: datetime,
    not_after: datetime,
) -> x509.Certificate:
    return (
        x509.CertificateBuilder()
        .subject_name(subject)
        .issuer_name(issuer)
        .public_key(public_key)
        .serial_number(x509.random_serial_number())
        .not_valid_before(not_before)
        .not_valid_after(not_after)
        .sign(signing_key, hashes.SHA256())
    )


def _write_key(path: Path, key) -> Path:
    path.write_bytes(
        key.private_bytes(
            serialization.Encoding.PEM,
            serialization.PrivateFormat.PKCS8,
            serialization.NoEncryption(),
        )
    )
    return path


@pytest.fixture
def make_cert_chain(tmp_path: Path) -> Callable[..., CertChain]:
    """Factory writing a CA certificate and a leaf certificate issued by it."""

    def factory(key_type: str = "ec", expired: bool = False) -> CertChain:
        if key_type == "rsa":
            ca_key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
            leaf_key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
        else:
            ca_key = ec.generate_private_key(ec.SECP256R1())
            leaf_key = ec.generate_private_key(ec.SECP256R1())

        now = datetime.now(UTC)
        ca_name = _name("Test CA")
        ca_cert = _certificate(
            ca_name,
            ca_name,
            ca_key.public_key(),
            ca_key,
            not_before=now - timedelta(days=1),
            not_after=now + timedelta(days=365),
        )
        if expired:
            not_before, not_after = now - timedelta(days=30), now - timedelta(days=1)
        else:
            not_before, not_after = now - timedelta(days=1), now + timedelta(days=30)
        leaf_cert = _certificate(
            _name("Test Signer"),
            ca_name,
            leaf_key.public_key(),
            ca_key,
            not_before=not_before,
            not_after=not_after,
        )

        directory = tmp_path / f"certs-{key_type}"
        directory.mkdir(exist_ok=True)
        leaf_path = directory / "leaf.pem"
        leaf_path.write_bytes(leaf_cert.public_bytes(serialization.Encoding.PEM))
        ca_path = directory / "ca.der"
        ca_path.write_bytes(ca_cert.public_bytes(serialization.Encoding.DER))
        return CertChain(
            leaf_cert=leaf_path,
            ca_cert=ca_path,
            leaf_key=_write_key(directory / "leaf-key.pem", leaf_key),
            ca_key=_write_key(directory / "ca-key.pem", ca_key),
        )

    return factory
