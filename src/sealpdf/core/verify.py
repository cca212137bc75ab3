# pyright: reportUnknownMemberType=false, reportUnknownVariableType=false, reportUnknownArgumentType=false
"""
Verification of embedded PDF signatures.

Two independent checks, both required:

1. Authenticated attributes -- the SignerInfo signature verifies over the
   signed attributes re-encoded as a DER SET, using the signer certificate.
2. Content digest -- the messageDigest attribute equals the hash of the
   bytes named by the document's ByteRange.

Verification is a boundary for untrusted input: every failure is reported
in the returned VerificationResult instead of being raised.
"""

from __future__ import annotations

__all__ = [
    "VerificationResult",
    "resolve_hash_algo",
    "verify_cms_signature",
    "verify_signature",
]

import hashlib
import logging
from typing import TypedDict

from asn1crypto import cms as asn1_cms
from cryptography import x509
from cryptography.exceptions import InvalidSignature, UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec, padding, rsa

from ..errors import InputTypeError, SealPdfError, VerificationError
from .cert_info import describe_certificate, find_signer_certificate
from .pdf.extraction import extract_signature

_logger = logging.getLogger(__name__)

_OID_MESSAGE_DIGEST = "1.2.840.113549.1.9.4"

# Some producers put the combined signature OID in digestAlgorithm instead
# of the bare hash OID.
_DIGEST_ALGO_MAP: dict[str, str] = {
    "sha1_rsa": "sha1",
    "sha256_rsa": "sha256",
    "sha384_rsa": "sha384",
    "sha512_rsa": "sha512",
    "1.2.840.113549.1.1.5": "sha1",  # sha1WithRSAEncryption OID
    "1.2.840.113549.1.1.11": "sha256",  # sha256WithRSAEncryption OID
    "1.2.840.113549.1.1.12": "sha384",  # sha384WithRSAEncryption OID
    "1.2.840.113549.1.1.13": "sha512",  # sha512WithRSAEncryption OID
}

_PYCA_HASHES: dict[str, type[hashes.HashAlgorithm]] = {
    "sha1": hashes.SHA1,
    "sha224": hashes.SHA224,
    "sha256": hashes.SHA256,
    "sha384": hashes.SHA384,
    "sha512": hashes.SHA512,
}


class VerificationResult(TypedDict):
    """Result of verifying one embedded signature."""

    verified: bool
    message: str | None  # Failure reason, None when verified
    signer: dict[str, str | None] | None  # Certificate info (name, email, org, dn)


def resolve_hash_algo(algo_raw: str) -> str | None:
    """Resolve a CMS digest algorithm identifier to a supported hash name.

    Args:
        algo_raw: Algorithm name or OID from asn1crypto (.native or .dotted).

    Returns:
        Hash name (a key of the supported set), or None if unrecognized.
    """
    name = _DIGEST_ALGO_MAP.get(algo_raw, algo_raw)
    return name if name in _PYCA_HASHES else None


def _verify_attribute_signature(
    cert_der: bytes, signature: bytes, attrs_der: bytes, hash_name: str
) -> None:
    public_key = x509.load_der_x509_certificate(cert_der).public_key()
    hash_algo = _PYCA_HASHES[hash_name]()
    try:
        if isinstance(public_key, rsa.RSAPublicKey):
            public_key.verify(signature, attrs_der, padding.PKCS1v15(), hash_algo)
        elif isinstance(public_key, ec.EllipticCurvePublicKey):
            public_key.verify(signature, attrs_der, ec.ECDSA(hash_algo))
        else:
            raise VerificationError(
                f"Unsupported signer key type: {type(public_key).__name__}"
            )
    except InvalidSignature as e:
        raise VerificationError("Wrong authenticated attributes") from e


def _find_message_digest(signed_attrs: asn1_cms.CMSAttributes) -> bytes:
    for attr in signed_attrs:
        if attr["type"].dotted == _OID_MESSAGE_DIGEST:
            values = attr["values"]
            if len(values) != 1:
                break
            return values[0].native
    raise VerificationError("Missing message digest attribute")


def verify_cms_signature(cms_der: bytes, signed_data: bytes) -> dict[str, str | None]:
    """
    Check a detached CMS signature against the data it claims to cover.

    Args:
        cms_der: DER-encoded CMS/PKCS#7 ContentInfo.
        signed_data: The bytes that were signed.

    Returns:
        Signer certificate info (name, email, organization, dn).

    Raises:
        VerificationError: On unsupported algorithms or either check failing.
        ValueError, KeyError, IndexError, TypeError: On malformed ASN.1.
    """
    content_info = asn1_cms.ContentInfo.load(cms_der)
    if content_info["content_type"].native != "signed_data":
        raise VerificationError(
            f"Expected CMS SignedData, got {content_info['content_type'].native}"
        )
    cms_signed_data = content_info["content"]
    signer_infos = cms_signed_data["signer_infos"]
    if not signer_infos:
        raise VerificationError("No SignerInfo in signature.")
    signer_info = signer_infos[0]

    algo_id = signer_info["digest_algorithm"]["algorithm"]
    hash_name = resolve_hash_algo(algo_id.native) or resolve_hash_algo(algo_id.dotted)
    if hash_name is None:
        raise VerificationError(
            f"Unsupported digest algorithm: {algo_id.native} ({algo_id.dotted})"
        )

    signed_attrs = signer_info["signed_attrs"]
    if not signed_attrs:
        raise VerificationError("Missing authenticated attributes")

    # signed_attrs arrives as [0] IMPLICIT; the signature covers the SET form.
    attrs_der = signed_attrs.untag().dump()

    cert = find_signer_certificate(cms_signed_data, signer_info)
    signature = signer_info["signature"].native
    _verify_attribute_signature(cert.dump(), signature, attrs_der, hash_name)

    attr_digest = _find_message_digest(signed_attrs)
    data_digest = hashlib.new(hash_name, signed_data).digest()
    if data_digest != attr_digest:
        _logger.debug(
            "Content digest mismatch: %s data %s, messageDigest %s",
            hash_name,
            data_digest.hex(),
            attr_digest.hex(),
        )
        raise VerificationError("Wrong content digest")

    return describe_certificate(cert)


def verify_signature(pdf_bytes: bytes) -> VerificationResult:
    """
    Verify the last embedded signature of a signed PDF.

    Never raises on verification failure -- returns verified=False with a
    message. Raises InputTypeError only when *pdf_bytes* is not bytes.
    """
    if not isinstance(pdf_bytes, (bytes, bytearray)):
        raise InputTypeError("PDF expected as bytes.")
    pdf_bytes = bytes(pdf_bytes)

    try:
        extracted = extract_signature(pdf_bytes)
        signer = verify_cms_signature(extracted.signature_der, extracted.signed_data)
    except SealPdfError as e:
        _logger.debug("Signature verification failed: %s", e)
        return {"verified": False, "message": str(e), "signer": None}
    except (ValueError, TypeError, KeyError, IndexError, AttributeError, UnsupportedAlgorithm):
        _logger.debug("Could not parse embedded signature", exc_info=True)
        return {"verified": False, "message": "Could not verify file signature", "signer": None}
    except Exception:  # noqa: BLE001 -- verify() must not raise on document content
        _logger.warning("Unexpected error verifying signature", exc_info=True)
        return {"verified": False, "message": "Could not verify file signature", "signer": None}

    if signer.get("name"):
        _logger.info("Signature verified: %s", signer["name"])
    return {"verified": True, "message": None, "signer": signer}
