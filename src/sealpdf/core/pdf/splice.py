"""Length-preserving buffer edits for the ByteRange and Contents fields.

The ByteRange values are computed once from the unmodified buffer, so every
edit here either keeps the total length fixed (replace_field) or is exactly
undone by its counterpart (excise_placeholder_region / reinsert_signature).
"""

from __future__ import annotations

import logging
from typing import NamedTuple

from ...errors import PlaceholderError
from .placeholder import SignaturePlaceholder

_logger = logging.getLogger(__name__)


class ByteRange(NamedTuple):
    """The four ByteRange integers: two (offset, length) chunks of signed bytes."""

    offset1: int
    length1: int
    offset2: int
    length2: int

    def render(self) -> bytes:
        return f"/ByteRange [{self.offset1} {self.length1} {self.offset2} {self.length2}]".encode(
            "latin-1"
        )


def remove_trailing_newline(pdf_bytes: bytes) -> bytes:
    """Drop a single trailing ``\\n`` left by the document preparer, if any."""
    if pdf_bytes.endswith(b"\n"):
        return pdf_bytes[:-1]
    return pdf_bytes


def compute_byte_range(pdf_bytes: bytes, placeholder: SignaturePlaceholder) -> ByteRange:
    """Compute the ByteRange covering everything except ``<hex placeholder>``."""
    length1 = placeholder.bracket_start
    # +2 for the '<' and '>' delimiters
    offset2 = length1 + placeholder.hex_capacity + 2
    return ByteRange(0, length1, offset2, len(pdf_bytes) - offset2)


def render_byte_range_field(byte_range: ByteRange, field_width: int) -> bytes:
    """
    Format the ByteRange entry, right-padded with spaces to *field_width*.

    Raises:
        PlaceholderError: If the real values do not fit the placeholder width.
    """
    rendered = byte_range.render()
    if len(rendered) > field_width:
        raise PlaceholderError(
            f"ByteRange {rendered.decode('latin-1')} does not fit in the "
            f"{field_width}-byte placeholder"
        )
    return rendered.ljust(field_width, b" ")


def replace_field(pdf_bytes: bytes, start: int, end: int, rendered: bytes) -> bytes:
    """Substitute ``pdf_bytes[start:end]`` with *rendered* of the same length."""
    if end - start != len(rendered):
        raise ValueError(
            f"Replacement must preserve length: {end - start} bytes -> {len(rendered)} bytes"
        )
    return pdf_bytes[:start] + rendered + pdf_bytes[end:]


def excise_placeholder_region(pdf_bytes: bytes, byte_range: ByteRange) -> bytes:
    """Remove the ``<...>`` region, leaving exactly the bytes the ByteRange names."""
    chunk1 = pdf_bytes[byte_range.offset1 : byte_range.offset1 + byte_range.length1]
    chunk2 = pdf_bytes[byte_range.offset2 : byte_range.offset2 + byte_range.length2]
    return chunk1 + chunk2


def reinsert_signature(signable: bytes, byte_range: ByteRange, hex_payload: str) -> bytes:
    """Insert ``<hex_payload>`` back at the position the placeholder occupied."""
    pos = byte_range.length1
    return signable[:pos] + b"<" + hex_payload.encode("ascii") + b">" + signable[pos:]


def apply_byte_range(
    pdf_bytes: bytes, placeholder: SignaturePlaceholder
) -> tuple[bytes, ByteRange]:
    """Write the real ByteRange over the placeholder token.

    Returns:
        (pdf_bytes, byte_range) -- the patched PDF (same length) and the values written.
    """
    byte_range = compute_byte_range(pdf_bytes, placeholder)
    field = render_byte_range_field(byte_range, placeholder.token_width)
    patched = replace_field(pdf_bytes, placeholder.token_start, placeholder.token_end, field)
    _logger.debug("ByteRange set to %s", list(byte_range))
    return patched, byte_range
