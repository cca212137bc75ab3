"""Tests for sealpdf.core.verify -- embedded signature verification."""

from __future__ import annotations

import binascii

import pytest

from sealpdf import PdfSigner, SignOptions, verify_signature
from sealpdf.core.pdf import extract_signature, find_byte_range
from sealpdf.core.verify import resolve_hash_algo, verify_cms_signature
from sealpdf.errors import InputTypeError, VerificationError

from .conftest import P12_PASSPHRASE, SIGNING_TIME, build_prepared_pdf

# DER encoding of OID 1.2.840.113549.1.7.1 (id-data)
_OID_DATA = bytes.fromhex("06092a864886f70d010701")
# DER encoding of OID 1.2.840.113549.1.7.2 (id-signedData), same length
_OID_SIGNED_DATA = bytes.fromhex("06092a864886f70d010702")


@pytest.fixture(scope="module")
def signed(p12_bytes):
    pdf = build_prepared_pdf()
    return PdfSigner().sign(pdf, p12_bytes, SignOptions(passphrase=P12_PASSPHRASE), SIGNING_TIME)


def _swap_cms(signed_pdf: bytes, old_hex: str, new_der: bytes) -> bytes:
    """Replace the embedded CMS with *new_der* of the same length."""
    new_hex = binascii.hexlify(new_der).decode("ascii")
    assert len(new_hex) == len(old_hex)
    return signed_pdf.replace(old_hex.encode("ascii"), new_hex.encode("ascii"), 1)


# ── verify_signature ──────────────────────────────────────────────


def test_verify_signed_pdf(signed):
    result = verify_signature(signed.pdf)
    assert result["verified"] is True
    assert result["message"] is None
    signer = result["signer"]
    assert signer["name"] == "Test Signer"
    assert signer["organization"] == "Sealpdf Test"
    assert "Test Signer" in signer["dn"]


def test_verify_accepts_bytearray(signed):
    assert verify_signature(bytearray(signed.pdf))["verified"] is True


def test_verify_tampered_content(signed):
    pdf = bytearray(signed.pdf)
    pos = pdf.index(b"/MediaBox [0 0 612 792]") + len(b"/MediaBox [0 0 ")
    pdf[pos : pos + 3] = b"595"
    result = verify_signature(bytes(pdf))
    assert result == {"verified": False, "message": "Wrong content digest", "signer": None}


def test_verify_tampered_tail(signed):
    """Bytes after the Contents string are covered too."""
    pdf = signed.pdf[:-5] + b"%%EOX"
    assert verify_signature(pdf)["message"] == "Wrong content digest"


def test_verify_tampered_signing_time(signed):
    der = binascii.unhexlify(signed.signature_hex)
    assert der.count(b"240102030405Z") == 1
    tampered = der.replace(b"240102030405Z", b"250102030405Z")
    pdf = _swap_cms(signed.pdf, signed.signature_hex, tampered)
    result = verify_signature(pdf)
    assert result["verified"] is False
    assert result["message"] == "Wrong authenticated attributes"


def test_verify_tampered_content_type(signed):
    der = binascii.unhexlify(signed.signature_hex)
    # The content-type attribute value is the last id-data OID in the blob
    pos = der.rfind(_OID_DATA)
    assert pos > 0
    tampered = der[:pos] + _OID_SIGNED_DATA + der[pos + len(_OID_DATA) :]
    pdf = _swap_cms(signed.pdf, signed.signature_hex, tampered)
    result = verify_signature(pdf)
    assert result["verified"] is False
    assert result["message"] == "Wrong authenticated attributes"


def test_verify_tampered_signature_value(signed):
    # Flip a byte near the end of the blob: inside the RSA signature value
    der = bytearray(binascii.unhexlify(signed.signature_hex))
    der[-10] ^= 0xFF
    pdf = _swap_cms(signed.pdf, signed.signature_hex, bytes(der))
    assert verify_signature(pdf)["message"] == "Wrong authenticated attributes"


def test_verify_unsigned_pdf():
    result = verify_signature(build_prepared_pdf())
    assert result["verified"] is False
    assert "ByteRange" in result["message"]


def test_verify_not_a_pdf():
    result = verify_signature(b"hello")
    assert result["verified"] is False
    assert result["signer"] is None


def test_verify_garbage_cms(signed):
    garbage = bytes.fromhex("3003020105")
    pdf = signed.pdf.replace(
        signed.signature_hex.encode("ascii"),
        garbage.hex().encode("ascii").ljust(len(signed.signature_hex), b"0"),
        1,
    )
    result = verify_signature(pdf)
    assert result == {
        "verified": False,
        "message": "Could not verify file signature",
        "signer": None,
    }


def test_verify_rejects_non_bytes():
    with pytest.raises(InputTypeError, match="PDF expected as bytes"):
        verify_signature("%PDF-1.7")  # type: ignore[arg-type]


def test_verify_rejects_none():
    with pytest.raises(TypeError):
        verify_signature(None)  # type: ignore[arg-type]


def test_verify_via_signer(signed):
    assert PdfSigner("ignored").verify(signed.pdf)["verified"] is True


# ── verify_cms_signature ──────────────────────────────────────────


def test_verify_cms_signature_direct(signed):
    extracted = extract_signature(signed.pdf)
    info = verify_cms_signature(extracted.signature_der, extracted.signed_data)
    assert info["name"] == "Test Signer"


def test_verify_cms_signature_wrong_data(signed):
    extracted = extract_signature(signed.pdf)
    with pytest.raises(VerificationError, match="Wrong content digest"):
        verify_cms_signature(extracted.signature_der, extracted.signed_data + b"x")


def test_extracted_signed_data_matches_byte_range(signed):
    extracted = extract_signature(signed.pdf)
    br = find_byte_range(signed.pdf)
    assert extracted.signed_data == signed.pdf[: br.length1] + signed.pdf[br.offset2 :]
    assert extracted.signature_der.hex() == signed.signature_hex


# ── resolve_hash_algo ─────────────────────────────────────────────


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("sha256", "sha256"),
        ("sha1", "sha1"),
        ("sha256_rsa", "sha256"),
        ("1.2.840.113549.1.1.11", "sha256"),
        ("1.2.840.113549.1.1.13", "sha512"),
        ("md5", None),
        ("2.16.840.1.101.3.4.2.1", None),
    ],
)
def test_resolve_hash_algo(raw, expected):
    assert resolve_hash_algo(raw) == expected
