"""
Sign options and their environment-variable overrides.

Options are plain values passed per call; nothing is persisted.  Use
:func:`options_from_env` to pick up the passphrase and parsing flags from the
process environment (useful for CI pipelines that sign build artifacts).
"""

from __future__ import annotations

__all__ = [
    "SignOptions",
    "options_from_env",
]

import logging
import os
from dataclasses import dataclass

from .constants import ENV_PASSPHRASE, ENV_PLACEHOLDER, ENV_STRICT_ASN1

_logger = logging.getLogger(__name__)

_TRUE_VALUES = frozenset(("1", "true", "yes", "on"))
_FALSE_VALUES = frozenset(("0", "false", "no", "off"))


@dataclass(frozen=True)
class SignOptions:
    """Per-call options for :meth:`sealpdf.core.signing.PdfSigner.sign`.

    Attributes:
        strict_asn1_parsing: Reject PKCS#12 containers with trailing or
            otherwise non-canonical ASN.1 data.
        passphrase: PKCS#12 passphrase. Empty string for unprotected containers.
        placeholder: ByteRange sentinel override for this call. None uses the
            signer's configured sentinel.
    """

    strict_asn1_parsing: bool = False
    passphrase: str = ""
    placeholder: str | None = None


def _parse_bool(name: str, raw: str, default: bool) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    _logger.warning("Invalid %s value %r, using default (%s)", name, raw, default)
    return default


def options_from_env(base: SignOptions | None = None) -> SignOptions:
    """
    Build sign options from environment variables.

    Priority: env vars > *base* > built-in defaults.

    Recognized variables: ``SEALPDF_PASSPHRASE``, ``SEALPDF_STRICT_ASN1``
    (1/0, true/false, yes/no, on/off) and ``SEALPDF_PLACEHOLDER``.

    Args:
        base: Options to start from. Defaults to ``SignOptions()``.

    Returns:
        A new SignOptions instance.
    """
    options = base or SignOptions()

    passphrase = os.environ.get(ENV_PASSPHRASE)
    if passphrase is None:
        passphrase = options.passphrase

    strict = options.strict_asn1_parsing
    strict_str = os.environ.get(ENV_STRICT_ASN1, "")
    if strict_str.strip():
        strict = _parse_bool(ENV_STRICT_ASN1, strict_str, strict)

    placeholder = options.placeholder
    placeholder_str = os.environ.get(ENV_PLACEHOLDER, "").strip()
    if placeholder_str:
        if any(ch.isspace() or ch in "[]/" for ch in placeholder_str):
            _logger.warning(
                "Invalid %s value %r (must be a bare PDF name token), ignoring",
                ENV_PLACEHOLDER,
                placeholder_str,
            )
        else:
            placeholder = placeholder_str

    return SignOptions(
        strict_asn1_parsing=strict,
        passphrase=passphrase,
        placeholder=placeholder,
    )
