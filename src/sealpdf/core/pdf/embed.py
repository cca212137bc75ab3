"""Fitting a DER-encoded CMS blob into the reserved Contents placeholder."""

from __future__ import annotations

import logging
from typing import NamedTuple

from ...errors import CapacityError
from .placeholder import SignaturePlaceholder

_logger = logging.getLogger(__name__)


class EmbeddedSignature(NamedTuple):
    """Hex forms of a signature ready for splicing.

    Attributes:
        payload: Zero-padded hex, exactly ``hex_capacity`` characters long.
        signature_hex: The unpadded hex encoding of the CMS blob.
    """

    payload: str
    signature_hex: str


def embed_signature(cms_der: bytes, placeholder: SignaturePlaceholder) -> EmbeddedSignature:
    """
    Hex-encode *cms_der* and pad it to the placeholder capacity.

    Args:
        cms_der: DER-encoded CMS/PKCS#7 signature.
        placeholder: The located Contents placeholder.

    Returns:
        EmbeddedSignature with the padded payload and the raw hex.

    Raises:
        CapacityError: If the hex encoding is longer than the placeholder.
    """
    signature_hex = cms_der.hex()
    capacity = placeholder.hex_capacity
    if len(signature_hex) > capacity:
        raise CapacityError(
            f"Signature exceeds placeholder length: {len(signature_hex)} > {capacity}",
            required=len(signature_hex),
            available=capacity,
        )

    # Zero padding; readers locate the end of the blob from its ASN.1 header.
    payload = signature_hex.ljust(capacity, "0")
    _logger.debug(
        "Signature uses %d of %d reserved hex chars", len(signature_hex), capacity
    )
    return EmbeddedSignature(payload=payload, signature_hex=signature_hex)
