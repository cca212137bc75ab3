"""ByteRange and CMS extraction from signed PDFs."""

from __future__ import annotations

import binascii
import logging
import re
from typing import NamedTuple

from ...errors import PlaceholderError
from .asn1 import strip_der_padding
from .splice import ByteRange

_logger = logging.getLogger(__name__)

# Regex pattern to find ByteRange arrays in PDF
BYTERANGE_PATTERN = rb"/ByteRange\s*\[\s*(\d+)\s+(\d+)\s+(\d+)\s+(\d+)\s*\]"


class ExtractedSignature(NamedTuple):
    """An embedded signature and the bytes it claims to cover."""

    byte_range: ByteRange
    signature_der: bytes
    signed_data: bytes


def find_byte_range(pdf_bytes: bytes) -> ByteRange:
    """
    Read the declared ByteRange of the last signature in a signed PDF.

    Raises:
        PlaceholderError: If no numeric ByteRange is present.
    """
    matches = list(re.finditer(BYTERANGE_PATTERN, pdf_bytes))
    if not matches:
        raise PlaceholderError("Failed to locate ByteRange -- not a signed PDF?")
    m = matches[-1]
    return ByteRange(*(int(m.group(i)) for i in range(1, 5)))


def extract_cms_from_byterange(pdf_bytes: bytes, byte_range: ByteRange) -> bytes:
    """
    Extract the CMS DER blob sitting in the gap between the two ByteRange chunks.

    Args:
        pdf_bytes: Complete PDF file bytes.
        byte_range: Declared ByteRange of the signature.

    Returns:
        DER-encoded CMS/PKCS#7 blob with padding removed.

    Raises:
        PlaceholderError: If the gap is not a ``<hex>`` string or holds no valid DER.
    """
    # The gap is [length1, offset2): '<' at length1, '>' at offset2 - 1
    open_pos = byte_range.length1
    close_pos = byte_range.offset2 - 1

    if pdf_bytes[open_pos : open_pos + 1] != b"<":
        raise PlaceholderError(
            f"Expected '<' at offset {open_pos}, got {pdf_bytes[open_pos : open_pos + 1]!r}"
        )
    if pdf_bytes[close_pos : close_pos + 1] != b">":
        raise PlaceholderError(
            f"Expected '>' at offset {close_pos}, got {pdf_bytes[close_pos : close_pos + 1]!r}"
        )

    hex_bytes = pdf_bytes[open_pos + 1 : close_pos].strip()
    # An odd digit count means the last byte's low nibble is an implied 0
    if len(hex_bytes) % 2:
        hex_bytes += b"0"
    try:
        padded = binascii.unhexlify(hex_bytes)
        return strip_der_padding(padded)
    except (binascii.Error, ValueError) as e:
        raise PlaceholderError(f"Invalid hex in CMS blob: {e}") from e


def extract_signature(pdf_bytes: bytes) -> ExtractedSignature:
    """
    Extract the ByteRange, the CMS blob, and the signed bytes from a signed PDF.

    For multi-signature PDFs, returns the last (most recent) signature.

    Raises:
        PlaceholderError: If the PDF has no valid embedded signature.
    """
    byte_range = find_byte_range(pdf_bytes)
    off1, len1, off2, len2 = byte_range

    if off1 != 0:
        raise PlaceholderError(f"ByteRange offset1 should be 0, got {off1}")
    if off2 <= len1:
        raise PlaceholderError(f"ByteRange offset2 ({off2}) <= length1 ({len1})")
    if off2 + len2 > len(pdf_bytes):
        raise PlaceholderError(
            f"ByteRange extends beyond EOF: {off2}+{len2} > {len(pdf_bytes)}"
        )

    signed_data = pdf_bytes[off1 : off1 + len1] + pdf_bytes[off2 : off2 + len2]
    cms_der = extract_cms_from_byterange(pdf_bytes, byte_range)
    _logger.debug(
        "Extracted signature: ByteRange %s, CMS %d bytes, signed data %d bytes",
        list(byte_range),
        len(cms_der),
        len(signed_data),
    )
    return ExtractedSignature(byte_range, cms_der, signed_data)
