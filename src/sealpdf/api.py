"""
High-level API: sign and verify prepared PDFs in one call.

Uses a module-level :class:`PdfSigner` with the default placeholder sentinel.
Create your own ``PdfSigner`` when the document preparer writes a different
sentinel.
"""

from __future__ import annotations

__all__ = ["sign_pdf", "verify_pdf"]

from typing import TYPE_CHECKING

from .config import SignOptions
from .core.signing import PdfSigner

if TYPE_CHECKING:
    import datetime

    from .core.verify import VerificationResult

_default_signer = PdfSigner()


def sign_pdf(
    pdf_bytes: bytes,
    p12_bytes: bytes,
    *,
    passphrase: str = "",
    strict_asn1_parsing: bool = False,
    placeholder: str | None = None,
    signing_time: datetime.datetime | None = None,
) -> bytes:
    """
    Sign a prepared PDF and return the signed bytes.

    Args:
        pdf_bytes: PDF with ByteRange placeholder and empty Contents field.
        p12_bytes: PKCS#12 container holding the key and certificate(s).
        passphrase: Container passphrase.
        strict_asn1_parsing: Reject non-canonical PKCS#12 encodings.
        placeholder: ByteRange sentinel override.
        signing_time: Signing-time attribute (default: now, UTC).

    Returns:
        Signed PDF bytes.

    Raises:
        SealPdfError: On any failure; see :meth:`PdfSigner.sign`.
    """
    options = SignOptions(
        strict_asn1_parsing=strict_asn1_parsing,
        passphrase=passphrase,
        placeholder=placeholder,
    )
    return _default_signer.sign(pdf_bytes, p12_bytes, options, signing_time).pdf


def verify_pdf(pdf_bytes: bytes) -> VerificationResult:
    """Verify the embedded signature of a signed PDF. Never raises on bad content."""
    return _default_signer.verify(pdf_bytes)
