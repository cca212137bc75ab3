"""Locating the ByteRange placeholder and the reserved Contents region."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ...constants import DEFAULT_BYTE_RANGE_PLACEHOLDER
from ...errors import PlaceholderError

_logger = logging.getLogger(__name__)

CONTENTS_TAG = b"/Contents "


@dataclass(frozen=True)
class SignaturePlaceholder:
    """Byte positions of an unsigned signature field.

    Attributes:
        token_start: Offset of the ``/ByteRange [0 /... /... /...]`` token.
        token_end: Offset just past the token's closing ``]``.
        bracket_start: Offset of the ``<`` opening the Contents hex string.
        bracket_end: Offset of the matching ``>``.
    """

    token_start: int
    token_end: int
    bracket_start: int
    bracket_end: int

    @property
    def token_width(self) -> int:
        """Length of the placeholder token; the rendered ByteRange must match it."""
        return self.token_end - self.token_start

    @property
    def hex_capacity(self) -> int:
        """Number of hex characters reserved between the brackets."""
        return self.bracket_end - self.bracket_start - 1


def byterange_placeholder_token(placeholder: str = DEFAULT_BYTE_RANGE_PLACEHOLDER) -> bytes:
    """Build the exact ByteRange token written by the document preparer.

    >>> byterange_placeholder_token("***")
    b'/ByteRange [0 /*** /*** /***]'
    """
    if not placeholder:
        raise ValueError("ByteRange placeholder must not be empty")
    name = f"/{placeholder}"
    return f"/ByteRange [0 {name} {name} {name}]".encode("latin-1")


def locate_placeholder(
    pdf_bytes: bytes,
    placeholder: str = DEFAULT_BYTE_RANGE_PLACEHOLDER,
) -> SignaturePlaceholder:
    """
    Find the ByteRange placeholder token and the Contents hex region after it.

    The match is strict: the document must contain the token exactly as
    produced by :func:`byterange_placeholder_token`.

    Args:
        pdf_bytes: Prepared (unsigned) PDF bytes.
        placeholder: Sentinel used for the three unknown ByteRange numbers.

    Returns:
        SignaturePlaceholder with token and bracket positions.

    Raises:
        PlaceholderError: If the token or any Contents delimiter is missing.
    """
    token = byterange_placeholder_token(placeholder)
    token_start = pdf_bytes.find(token)
    if token_start == -1:
        raise PlaceholderError(
            f"Could not find ByteRange placeholder: {token.decode('latin-1')}"
        )
    token_end = token_start + len(token)

    contents_pos = pdf_bytes.find(CONTENTS_TAG, token_end)
    if contents_pos == -1:
        raise PlaceholderError("Could not find /Contents after the ByteRange placeholder.")

    bracket_start = pdf_bytes.find(b"<", contents_pos)
    if bracket_start == -1:
        raise PlaceholderError("Could not find '<' opening the Contents placeholder.")

    bracket_end = pdf_bytes.find(b">", bracket_start)
    if bracket_end == -1:
        raise PlaceholderError("Could not find '>' closing the Contents placeholder.")

    found = SignaturePlaceholder(
        token_start=token_start,
        token_end=token_end,
        bracket_start=bracket_start,
        bracket_end=bracket_end,
    )
    _logger.debug(
        "ByteRange placeholder at %d..%d, Contents <...> at %d..%d (%d hex chars)",
        token_start,
        token_end,
        bracket_start,
        bracket_end,
        found.hex_capacity,
    )
    return found
