"""Core signing, credential, and verification operations."""

from __future__ import annotations

from .credentials import Credential, extract_credential, public_key_matches
from .signing import PdfSigner, SignedDocument
from .verify import VerificationResult, verify_signature

__all__ = [
    "Credential",
    "PdfSigner",
    "SignedDocument",
    "VerificationResult",
    "extract_credential",
    "public_key_matches",
    "verify_signature",
]
