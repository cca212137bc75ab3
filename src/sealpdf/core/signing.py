"""
Embedding a detached CMS signature into a prepared PDF.

The PDF must already contain a signature dictionary with the ByteRange
placeholder token and a zero-filled ``/Contents <...>`` hex string; this
module only fills those two fields in, without moving any other byte.
"""

from __future__ import annotations

__all__ = [
    "PdfSigner",
    "SignedDocument",
]

import logging
from typing import TYPE_CHECKING, NamedTuple

from ..config import SignOptions
from ..constants import DEFAULT_BYTE_RANGE_PLACEHOLDER, PDF_MAGIC
from ..errors import InputTypeError, PlaceholderError
from .cms import build_signed_data
from .credentials import extract_credential
from .pdf.embed import embed_signature
from .pdf.placeholder import locate_placeholder
from .pdf.splice import (
    apply_byte_range,
    excise_placeholder_region,
    reinsert_signature,
    remove_trailing_newline,
)
from .verify import verify_signature

if TYPE_CHECKING:
    import datetime

    from .verify import VerificationResult

_logger = logging.getLogger(__name__)


class SignedDocument(NamedTuple):
    """Result of a sign call.

    Attributes:
        pdf: The signed PDF, same length as the (newline-trimmed) input.
        signature_hex: Unpadded hex of the embedded CMS blob.
    """

    pdf: bytes
    signature_hex: str


def _require_bytes(value: object, what: str) -> bytes:
    if not isinstance(value, (bytes, bytearray)):
        raise InputTypeError(f"{what} expected as bytes.")
    return bytes(value)


class PdfSigner:
    """Signs prepared PDFs with a PKCS#12 credential and verifies the result.

    Holds only the ByteRange placeholder sentinel; each call is independent,
    so one instance can be shared between threads.

    Args:
        placeholder: Sentinel the document preparer wrote for the three
            unknown ByteRange numbers (default: ten asterisks).
    """

    def __init__(self, placeholder: str = DEFAULT_BYTE_RANGE_PLACEHOLDER) -> None:
        if not placeholder:
            raise ValueError("ByteRange placeholder must not be empty")
        self.placeholder = placeholder

    def __repr__(self) -> str:
        return f"{type(self).__name__}(placeholder={self.placeholder!r})"

    def sign(
        self,
        pdf_bytes: bytes,
        p12_bytes: bytes,
        options: SignOptions | None = None,
        signing_time: datetime.datetime | None = None,
    ) -> SignedDocument:
        """
        Sign a prepared PDF.

        Steps:
        1. Locate the ByteRange placeholder and the Contents hex region
        2. Extract the private key and matching certificate
        3. Write the real ByteRange over the placeholder (same width)
        4. Build a detached CMS over everything except ``<...>``
        5. Pad the hex-encoded CMS and put it back between the brackets

        Args:
            pdf_bytes: Prepared PDF. One trailing newline is removed.
            p12_bytes: PKCS#12 container with the signing key and certificates.
            options: Passphrase, ASN.1 strictness, placeholder override.
            signing_time: Signing-time attribute value (default: now, UTC).

        Returns:
            SignedDocument with the signed PDF and the unpadded signature hex.

        Raises:
            InputTypeError: If either input is not bytes.
            PlaceholderError: If the placeholder token or delimiters are missing.
            CredentialError: If the container has no usable key/certificate pair.
            CapacityError: If the signature does not fit the Contents placeholder.
        """
        pdf = _require_bytes(pdf_bytes, "PDF")
        p12 = _require_bytes(p12_bytes, "p12 certificate")
        opts = options or SignOptions()
        placeholder_text = opts.placeholder or self.placeholder

        _logger.info("Signing PDF: %d bytes", len(pdf))
        if not pdf.startswith(PDF_MAGIC):
            _logger.warning("Input does not start with %r; signing anyway", PDF_MAGIC)
        pdf = remove_trailing_newline(pdf)

        _logger.debug("Step 1: Locating placeholder")
        placeholder = locate_placeholder(pdf, placeholder_text)

        _logger.debug("Step 2: Extracting credential")
        credential = extract_credential(p12, opts.passphrase, opts.strict_asn1_parsing)

        _logger.debug("Step 3: Writing ByteRange")
        patched, byte_range = apply_byte_range(pdf, placeholder)
        signable = excise_placeholder_region(patched, byte_range)
        _logger.debug("ByteRange data: %d bytes", len(signable))

        _logger.debug("Step 4: Building CMS")
        cms_der = build_signed_data(signable, credential, signing_time)

        _logger.debug("Step 5: Embedding CMS")
        embedded = embed_signature(cms_der, placeholder)
        signed_pdf = reinsert_signature(signable, byte_range, embedded.payload)
        if len(signed_pdf) != len(pdf):
            raise PlaceholderError(f"Signing changed PDF size: {len(pdf)} -> {len(signed_pdf)}")

        _logger.info("Signed PDF complete: %d bytes, CMS %d bytes", len(signed_pdf), len(cms_der))
        return SignedDocument(pdf=signed_pdf, signature_hex=embedded.signature_hex)

    def verify(self, pdf_bytes: bytes) -> VerificationResult:
        """Verify the embedded signature. See :func:`sealpdf.core.verify.verify_signature`."""
        return verify_signature(pdf_bytes)
