"""
sealpdf — embed and verify detached CMS/PKCS#7 signatures in prepared PDFs.

Fills in the ByteRange and Contents placeholders of a signature field
without moving any other byte, and verifies the result independently.
"""

from __future__ import annotations

from .api import sign_pdf, verify_pdf
from .config import SignOptions, options_from_env
from .constants import DEFAULT_BYTE_RANGE_PLACEHOLDER, __version__
from .core.signing import PdfSigner, SignedDocument
from .core.verify import VerificationResult, verify_signature
from .errors import (
    CapacityError,
    CredentialError,
    ErrorKind,
    InputTypeError,
    PlaceholderError,
    SealPdfError,
    VerificationError,
)

__all__ = [
    "DEFAULT_BYTE_RANGE_PLACEHOLDER",
    "CapacityError",
    "CredentialError",
    "ErrorKind",
    "InputTypeError",
    "PdfSigner",
    "PlaceholderError",
    "SealPdfError",
    "SignOptions",
    "SignedDocument",
    "VerificationError",
    "VerificationResult",
    "__version__",
    "options_from_env",
    "sign_pdf",
    "verify_pdf",
    "verify_signature",
]
