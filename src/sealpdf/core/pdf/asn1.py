"""DER length handling for CMS blobs stored in zero-padded Contents strings."""

from __future__ import annotations

from ...constants import ASN1_SEQUENCE_TAG, MAX_CMS_SIZE


def der_total_length(data: bytes) -> int:
    """Return the full TLV length (header + content) of the DER value at data[0].

    Raises:
        ValueError: If the header is truncated, not a SEQUENCE, or not valid DER.
    """
    if len(data) < 2:
        raise ValueError("Data too short for ASN.1 TLV header")

    if data[0] != ASN1_SEQUENCE_TAG:
        raise ValueError(f"Expected ASN.1 SEQUENCE (0x30), got 0x{data[0]:02x}")

    length_byte = data[1]
    if length_byte < 0x80:
        return 2 + length_byte
    if length_byte == 0x80:
        raise ValueError("Indefinite length encoding is not valid in DER")

    num_len_bytes = length_byte & 0x7F
    if num_len_bytes > 4:
        raise ValueError(f"ASN.1 length field too large: {num_len_bytes} bytes")
    if len(data) < 2 + num_len_bytes:
        raise ValueError("Data too short for ASN.1 length field")
    content_len = int.from_bytes(data[2 : 2 + num_len_bytes], "big")
    return 2 + num_len_bytes + content_len


def strip_der_padding(padded: bytes) -> bytes:
    """Cut a zero-padded buffer down to the DER value it starts with.

    Uses the ASN.1 header instead of stripping trailing zeros, which would
    corrupt blobs whose last content byte is 0x00.

    Raises:
        ValueError: If the header is malformed or claims more bytes than available.
    """
    total = der_total_length(padded)
    if total > MAX_CMS_SIZE:
        raise ValueError(
            f"ASN.1 claims {total} bytes, exceeds maximum ({MAX_CMS_SIZE} bytes)"
        )
    if total > len(padded):
        raise ValueError(
            f"ASN.1 length ({total} bytes) exceeds available data ({len(padded)} bytes)"
        )
    return padded[:total]
