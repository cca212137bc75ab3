"""Byte-level PDF operations: placeholder location, splicing, embedding, extraction."""

from .embed import EmbeddedSignature, embed_signature
from .extraction import (
    BYTERANGE_PATTERN,
    ExtractedSignature,
    extract_cms_from_byterange,
    extract_signature,
    find_byte_range,
)
from .placeholder import SignaturePlaceholder, byterange_placeholder_token, locate_placeholder
from .splice import (
    ByteRange,
    apply_byte_range,
    compute_byte_range,
    excise_placeholder_region,
    reinsert_signature,
    remove_trailing_newline,
    render_byte_range_field,
    replace_field,
)

__all__ = [
    "BYTERANGE_PATTERN",
    "ByteRange",
    "EmbeddedSignature",
    "ExtractedSignature",
    "SignaturePlaceholder",
    "apply_byte_range",
    "byterange_placeholder_token",
    "compute_byte_range",
    "embed_signature",
    "excise_placeholder_region",
    "extract_cms_from_byterange",
    "extract_signature",
    "find_byte_range",
    "locate_placeholder",
    "reinsert_signature",
    "remove_trailing_newline",
    "render_byte_range_field",
    "replace_field",
]
