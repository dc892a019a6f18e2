"""Sign command implementation.

Wraps a collection document in a signed envelope using a certificate
chain and the private key of the signing certificate.
"""

from pathlib import Path
from typing import Annotated

import typer

from pkgcollection.core.document import DocumentError, load_collection, save_document
from pkgcollection.signing.base import EmptyCertChainError, SigningError
from pkgcollection.signing.certificate import CertificateCollectionSigner
from pkgcollection.utils.formatting import print_error, print_info, print_success
from pkgcollection.utils.log import configure_logging


def sign_collection(
    input_path: Annotated[
        Path,
        typer.Argument(help="Collection document to sign."),
    ],
    output_path: Annotated[
        Path,
        typer.Argument(help="Where to write the signed collection."),
    ],
    private_key_path: Annotated[
        Path,
        typer.Argument(help="PEM private key of the signing certificate."),
    ],
    cert_chain_paths: Annotated[
        list[Path] | None,
        typer.Argument(
            help="Certificate chain, signing certificate first, each followed by its issuer.",
            show_default=False,
        ),
    ] = None,
    skip_validity_check: Annotated[
        bool,
        typer.Option(
            "--skip-validity-check",
            help="Accept a signing certificate outside its validity period.",
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show extra logging."),
    ] = False,
) -> None:
    """Sign a package collection.

    Examples:
        package-collection sign collection.json signed.json key.pem cert.pem ca.pem
    """
    configure_logging(verbose)

    if not cert_chain_paths:
        print_error(str(EmptyCertChainError()))
        raise typer.Exit(code=1)

    try:
        collection = load_collection(input_path)
    except DocumentError as e:
        print_error(f"Failed to load collection: {e}")
        raise typer.Exit(code=1) from e

    if verbose:
        print_info(f"Signing with {len(cert_chain_paths)} certificate(s)")

    signer = CertificateCollectionSigner(check_validity=not skip_validity_check)
    try:
        signed = signer.sign(collection, cert_chain_paths, private_key_path)
    except SigningError as e:
        print_error(f"Failed to sign package collection: {e}")
        raise typer.Exit(code=1) from e

    try:
        save_document(signed, output_path)
    except DocumentError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Signed package collection saved to {output_path}")
