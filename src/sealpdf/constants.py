"""
Application-wide constants for sealpdf.

Placeholder tokens, size limits, and environment variable names are
centralized here for easy maintenance and configuration.
"""

from __future__ import annotations

import importlib.metadata

try:
    __version__ = importlib.metadata.version("sealpdf")
except importlib.metadata.PackageNotFoundError:
    __version__ = "0.1.0"

__all__ = [
    "ASN1_SEQUENCE_TAG",
    "DEFAULT_BYTE_RANGE_PLACEHOLDER",
    "ENV_PASSPHRASE",
    "ENV_PLACEHOLDER",
    "ENV_STRICT_ASN1",
    "MAX_CMS_SIZE",
    "PDF_MAGIC",
    "SIGNING_DIGEST_ALGORITHM",
    "__version__",
]

# ── Placeholder tokens ────────────────────────────────────────────────

# Sentinel written by the document preparer in place of each of the three
# unknown ByteRange numbers: /ByteRange [0 /********** /********** /**********]
DEFAULT_BYTE_RANGE_PLACEHOLDER = "**********"

# PDF file magic bytes
PDF_MAGIC = b"%PDF-"


# ── CMS ───────────────────────────────────────────────────────────────

# Digest algorithm expected by adbe.pkcs7.detached validators
SIGNING_DIGEST_ALGORITHM = "sha256"

# ASN.1 SEQUENCE tag -- first byte of any valid CMS/PKCS#7 blob
ASN1_SEQUENCE_TAG = 0x30

# Upper bound for an embedded CMS blob (16 MB DER).
# Protects against malformed length fields claiming absurd sizes.
MAX_CMS_SIZE = 16 * 1024 * 1024


# ── Environment variable names ──────────────────────────────────────

ENV_PASSPHRASE = "SEALPDF_PASSPHRASE"
ENV_STRICT_ASN1 = "SEALPDF_STRICT_ASN1"
ENV_PLACEHOLDER = "SEALPDF_PLACEHOLDER"
