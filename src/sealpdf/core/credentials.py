# pyright: reportUnknownMemberType=false, reportUnknownVariableType=false
"""
Signing credentials from PKCS#12 (.p12 / .pfx) containers.

The container's outer PFX structure is decoded with ``asn1crypto`` (this is
where the strict-parsing flag applies); the bags themselves are decrypted by
``cryptography``'s PKCS#12 loader.
"""

from __future__ import annotations

__all__ = [
    "Credential",
    "extract_credential",
    "public_key_matches",
]

import logging
from dataclasses import dataclass

from asn1crypto import pkcs12 as asn1_pkcs12
from cryptography import x509
from cryptography.hazmat.primitives.asymmetric import rsa
from cryptography.hazmat.primitives.serialization import pkcs12

from ..errors import CredentialError

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Credential:
    """A private key, its certificate, and every certificate in the container.

    Attributes:
        private_key: RSA private key from the first key bag.
        certificate: Certificate whose public key matches ``private_key``.
        chain: All certificates from the container, in container order
            (includes ``certificate``).
    """

    private_key: rsa.RSAPrivateKey
    certificate: x509.Certificate
    chain: tuple[x509.Certificate, ...]


def public_key_matches(private_key: rsa.RSAPrivateKey, certificate: x509.Certificate) -> bool:
    """Check whether *certificate* carries the public half of *private_key*.

    Compares RSA modulus and public exponent; any non-RSA certificate key is
    a mismatch.
    """
    cert_key = certificate.public_key()
    if not isinstance(cert_key, rsa.RSAPublicKey):
        return False
    ours = private_key.public_key().public_numbers()
    theirs = cert_key.public_numbers()
    return ours.n == theirs.n and ours.e == theirs.e


def _check_pfx_structure(p12_bytes: bytes, strict: bool) -> None:
    """Decode the outer PFX envelope, raising CredentialError if malformed."""
    try:
        pfx = asn1_pkcs12.Pfx.load(p12_bytes, strict=strict)
        version = pfx["version"].native
        content_type = pfx["auth_safe"]["content_type"].native
    except (ValueError, TypeError, KeyError) as e:
        raise CredentialError(f"Failed to parse PKCS#12 container: {e}") from e
    _logger.debug("PKCS#12 container: version %s, auth_safe %s", version, content_type)


def extract_credential(
    p12_bytes: bytes,
    passphrase: str = "",
    strict_asn1: bool = False,
) -> Credential:
    """
    Extract the signing key and its matching certificate from a PKCS#12 container.

    Every certificate bag is registered in the chain regardless of whether it
    matches; the first matching one (container order) becomes the signer
    certificate.

    Args:
        p12_bytes: Raw PKCS#12 container bytes.
        passphrase: Container passphrase; empty string for none.
        strict_asn1: Reject containers with trailing data after the PFX.

    Returns:
        Credential with private key, signer certificate, and chain.

    Raises:
        CredentialError: If the container cannot be opened, holds no RSA
            private key, or no certificate matches the key.
    """
    _check_pfx_structure(p12_bytes, strict_asn1)

    password = passphrase.encode("utf-8") if passphrase else None
    try:
        container = pkcs12.load_pkcs12(p12_bytes, password)
    except (ValueError, TypeError) as e:
        raise CredentialError(
            f"Failed to open PKCS#12 container (wrong passphrase?): {e}"
        ) from e

    private_key = container.key
    if private_key is None:
        raise CredentialError("No private key found in PKCS#12 container.")
    if not isinstance(private_key, rsa.RSAPrivateKey):
        raise CredentialError(
            f"Unsupported private key type: {type(private_key).__name__} (RSA required)"
        )

    bags = []
    if container.cert is not None:
        bags.append(container.cert.certificate)
    bags.extend(bag.certificate for bag in container.additional_certs)

    certificate: x509.Certificate | None = None
    for cert in bags:
        if certificate is None and public_key_matches(private_key, cert):
            certificate = cert

    if certificate is None:
        raise CredentialError("Failed to find a certificate that matches the private key.")

    _logger.debug(
        "Signer certificate: %s (%d certificate(s) in container)",
        certificate.subject.rfc4514_string(),
        len(bags),
    )
    return Credential(private_key=private_key, certificate=certificate, chain=tuple(bags))
