"""Shared test fixtures for the sealpdf test suite."""

from __future__ import annotations

import datetime
from dataclasses import dataclass

import pytest
from cryptography import x509
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import rsa
from cryptography.hazmat.primitives.serialization import (
    BestAvailableEncryption,
    NoEncryption,
    pkcs12,
)
from cryptography.x509.oid import NameOID

from sealpdf.constants import DEFAULT_BYTE_RANGE_PLACEHOLDER

# Room for a 2048-bit RSA signature plus a two-certificate chain.
LARGE_HEX_CAPACITY = 16384

P12_PASSPHRASE = "correct horse"

# Fixed signing time: its UTCTime encoding (b"240102030405Z") is searched
# for by the attribute tampering tests.
SIGNING_TIME = datetime.datetime(2024, 1, 2, 3, 4, 5, tzinfo=datetime.timezone.utc)


def build_prepared_pdf(
    hex_capacity: int = LARGE_HEX_CAPACITY,
    placeholder: str = DEFAULT_BYTE_RANGE_PLACEHOLDER,
    trailing_newline: bool = True,
) -> bytes:
    """Assemble a one-page PDF with an unsigned signature field.

    The signature dictionary carries the ByteRange placeholder token and a
    zero-filled Contents string of *hex_capacity* hex digits, the way a
    document preparer leaves it before signing.
    """
    name = f"/{placeholder}"
    objects = [
        "<< /Type /Catalog /Pages 2 0 R /AcroForm << /Fields [5 0 R] /SigFlags 3 >> >>",
        "<< /Type /Pages /Kids [3 0 R] /Count 1 >>",
        "<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] /Annots [5 0 R] >>",
        (
            "<< /Type /Sig /Filter /Adobe.PPKLite /SubFilter /adbe.pkcs7.detached "
            f"/ByteRange [0 {name} {name} {name}] "
            f"/Contents <{'0' * hex_capacity}> "
            "/Reason (Test signature) /M (D:20240102030405Z) >>"
        ),
        (
            "<< /Type /Annot /Subtype /Widget /FT /Sig /T (Signature1) "
            "/V 4 0 R /Rect [0 0 0 0] /F 132 /P 3 0 R >>"
        ),
    ]

    out = bytearray(b"%PDF-1.7\n%\xe2\xe3\xcf\xd3\n")
    offsets = []
    for num, body in enumerate(objects, start=1):
        offsets.append(len(out))
        out += f"{num} 0 obj\n{body}\nendobj\n".encode("latin-1")

    xref_pos = len(out)
    out += f"xref\n0 {len(objects) + 1}\n".encode("latin-1")
    out += b"0000000000 65535 f\r\n"
    for off in offsets:
        out += f"{off:010d} 00000 n\r\n".encode("latin-1")
    out += (
        f"trailer\n<< /Size {len(objects) + 1} /Root 1 0 R >>\nstartxref\n{xref_pos}\n%%EOF"
    ).encode("latin-1")
    if trailing_newline:
        out += b"\n"
    return bytes(out)


def _name(common_name: str) -> x509.Name:
    return x509.Name(
        [
            x509.NameAttribute(NameOID.COMMON_NAME, common_name),
            x509.NameAttribute(NameOID.ORGANIZATION_NAME, "Sealpdf Test"),
        ]
    )


def make_certificate(
    subject_key: rsa.RSAPrivateKey,
    common_name: str,
    issuer_key: rsa.RSAPrivateKey | None = None,
    issuer_name: str | None = None,
    serial: int | None = None,
) -> x509.Certificate:
    """Issue a certificate for *subject_key*, self-signed unless an issuer is given."""
    now = datetime.datetime.now(datetime.timezone.utc)
    ca = issuer_key is None
    builder = (
        x509.CertificateBuilder()
        .subject_name(_name(common_name))
        .issuer_name(_name(issuer_name or common_name))
        .public_key(subject_key.public_key())
        .serial_number(serial or x509.random_serial_number())
        .not_valid_before(now - datetime.timedelta(days=1))
        .not_valid_after(now + datetime.timedelta(days=365))
        .add_extension(x509.BasicConstraints(ca=ca, path_length=None), critical=True)
    )
    return builder.sign(issuer_key or subject_key, hashes.SHA256())


@dataclass(frozen=True)
class Pki:
    """Generated key material shared by the whole session."""

    ca_key: rsa.RSAPrivateKey
    ca_cert: x509.Certificate
    signer_key: rsa.RSAPrivateKey
    signer_cert: x509.Certificate
    other_key: rsa.RSAPrivateKey
    other_cert: x509.Certificate


@pytest.fixture(scope="session")
def pki() -> Pki:
    ca_key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    ca_cert = make_certificate(ca_key, "Sealpdf Test CA")
    signer_key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    signer_cert = make_certificate(
        signer_key, "Test Signer", issuer_key=ca_key, issuer_name="Sealpdf Test CA"
    )
    other_key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    other_cert = make_certificate(other_key, "Someone Else")
    return Pki(ca_key, ca_cert, signer_key, signer_cert, other_key, other_cert)


@pytest.fixture(scope="session")
def p12_bytes(pki: Pki) -> bytes:
    """Passphrase-protected container: signer key, signer cert, CA chain."""
    return pkcs12.serialize_key_and_certificates(
        b"test-signer",
        pki.signer_key,
        pki.signer_cert,
        [pki.ca_cert],
        BestAvailableEncryption(P12_PASSPHRASE.encode("utf-8")),
    )


@pytest.fixture(scope="session")
def p12_unprotected(pki: Pki) -> bytes:
    """Container without a passphrase, holding only the signer key and cert."""
    return pkcs12.serialize_key_and_certificates(
        b"test-signer", pki.signer_key, pki.signer_cert, None, NoEncryption()
    )


@pytest.fixture(scope="session")
def p12_mismatched(pki: Pki) -> bytes:
    """Container whose certificates belong to other keys."""
    return pkcs12.serialize_key_and_certificates(
        b"mismatch",
        pki.signer_key,
        None,
        [pki.ca_cert, pki.other_cert],
        BestAvailableEncryption(P12_PASSPHRASE.encode("utf-8")),
    )


@pytest.fixture(scope="session")
def p12_certs_only(pki: Pki) -> bytes:
    """Container with certificates but no private key."""
    return pkcs12.serialize_key_and_certificates(
        None,
        None,
        None,
        [pki.signer_cert, pki.ca_cert],
        BestAvailableEncryption(P12_PASSPHRASE.encode("utf-8")),
    )


@pytest.fixture
def prepared_pdf() -> bytes:
    return build_prepared_pdf()
