# pyright: reportUnknownMemberType=false, reportUnknownVariableType=false, reportUnknownArgumentType=false
"""
Signer identity from the certificates embedded in a CMS/PKCS#7 blob.

Informational only: nothing here checks trust or validity beyond logging a
warning for certificates outside their validity period.
"""

from __future__ import annotations

__all__ = [
    "describe_certificate",
    "find_signer_certificate",
]

import datetime
import logging

from asn1crypto import cms as asn1_cms
from asn1crypto import x509 as asn1_x509

from ..errors import VerificationError

_logger = logging.getLogger(__name__)

# OIDs for common subject fields
_OID_CN = "2.5.4.3"
_OID_EMAIL = "1.2.840.113549.1.9.1"
_OID_ORG = "2.5.4.10"


def find_signer_certificate(
    signed_data: asn1_cms.SignedData, signer_info: asn1_cms.SignerInfo
) -> asn1_x509.Certificate:
    """Pick the certificate that produced *signer_info*.

    Prefers the certificate named by the SignerInfo's issuer and serial number
    (DER sorts the certificate SET, so position alone is not reliable) and
    falls back to the first embedded certificate.

    Raises:
        VerificationError: If the blob carries no X.509 certificate.
    """
    certs = [
        choice.chosen
        for choice in (signed_data["certificates"] or [])
        if choice.name == "certificate"
    ]
    if not certs:
        raise VerificationError("No certificate found in signature.")

    sid = signer_info["sid"]
    if sid.name == "issuer_and_serial_number":
        issuer = sid.chosen["issuer"]
        serial = sid.chosen["serial_number"].native
        for cert in certs:
            if cert.serial_number == serial and cert.issuer == issuer:
                return cert
        _logger.debug("No certificate matches SignerInfo sid; using the first one")
    return certs[0]


def describe_certificate(cert: asn1_x509.Certificate) -> dict[str, str | None]:
    """Extract CN, email, org, dn from an asn1crypto certificate object.

    Also logs warnings for expired or not-yet-valid certificates.
    """
    subject = cert.subject

    try:
        not_before = cert.not_valid_before
        not_after = cert.not_valid_after
        now = datetime.datetime.now(datetime.timezone.utc)
        if not_before and now < not_before:
            _logger.warning("Certificate is not yet valid (notBefore: %s)", not_before)
        elif not_after and now > not_after:
            _logger.warning("Certificate has expired (notAfter: %s)", not_after)
    except (KeyError, TypeError, ValueError) as e:
        _logger.debug("Cannot check certificate validity dates: %s", e)

    fields: dict[str, str | None] = {"name": None, "email": None, "organization": None}
    oid_map = {_OID_CN: "name", _OID_EMAIL: "email", _OID_ORG: "organization"}

    for rdn in subject.chosen:
        for attr in rdn:
            oid = attr["type"].dotted
            if oid in oid_map:
                fields[oid_map[oid]] = attr["value"].native

    fields["dn"] = subject.human_friendly
    return fields
