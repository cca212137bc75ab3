# pyright: reportUnknownMemberType=false, reportUnknownVariableType=false, reportUnknownArgumentType=false
"""
Detached CMS/PKCS#7 SignedData construction (adbe.pkcs7.detached).

The content is hashed into the messageDigest attribute but never embedded.
Validators expect exactly three signed attributes (content type, message
digest, signing time) and a SHA-256 digest.
"""

from __future__ import annotations

__all__ = [
    "build_signed_attributes",
    "build_signed_data",
]

import datetime
import hashlib
import logging
from typing import TYPE_CHECKING

from asn1crypto import algos, cms, core
from asn1crypto import x509 as asn1_x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import padding

from ..constants import SIGNING_DIGEST_ALGORITHM

if TYPE_CHECKING:
    from cryptography import x509

    from .credentials import Credential

_logger = logging.getLogger(__name__)


def _to_asn1_cert(cert: x509.Certificate) -> asn1_x509.Certificate:
    return asn1_x509.Certificate.load(cert.public_bytes(serialization.Encoding.DER))


def _signing_time_value(signing_time: datetime.datetime) -> cms.Time:
    # RFC 5652 §11.3: UTCTime through 2049, GeneralizedTime afterwards
    if 1950 <= signing_time.year < 2050:
        return cms.Time({"utc_time": core.UTCTime(signing_time)})
    return cms.Time({"generalized_time": core.GeneralizedTime(signing_time)})


def _attribute(attr_type: str, value: object) -> cms.CMSAttribute:
    return cms.CMSAttribute({"type": cms.CMSAttributeType(attr_type), "values": (value,)})


def build_signed_attributes(
    content_digest: bytes, signing_time: datetime.datetime
) -> cms.CMSAttributes:
    """Build the authenticated attributes: content type, message digest, signing time."""
    return cms.CMSAttributes(
        [
            _attribute("content_type", cms.ContentType("data")),
            _attribute("message_digest", core.OctetString(content_digest)),
            _attribute("signing_time", _signing_time_value(signing_time)),
        ]
    )


def build_signed_data(
    content: bytes,
    credential: Credential,
    signing_time: datetime.datetime | None = None,
) -> bytes:
    """
    Build a detached CMS SignedData over *content*.

    Args:
        content: The bytes covered by the ByteRange (placeholder excised).
        credential: Signing key, signer certificate, and chain.
        signing_time: Value of the signing-time attribute. Defaults to now (UTC).
            Naive datetimes are taken as UTC.

    Returns:
        DER-encoded ContentInfo.
    """
    if signing_time is None:
        signing_time = datetime.datetime.now(datetime.timezone.utc)
    elif signing_time.tzinfo is None:
        signing_time = signing_time.replace(tzinfo=datetime.timezone.utc)

    content_digest = hashlib.new(SIGNING_DIGEST_ALGORITHM, content).digest()
    signed_attrs = build_signed_attributes(content_digest, signing_time)

    # The signature covers the attributes as a universal SET, not the
    # [0] IMPLICIT form they take inside SignerInfo.
    signature = credential.private_key.sign(
        signed_attrs.dump(), padding.PKCS1v15(), hashes.SHA256()
    )

    signer_cert = _to_asn1_cert(credential.certificate)
    digest_algorithm = algos.DigestAlgorithm({"algorithm": SIGNING_DIGEST_ALGORITHM})

    signer_info = cms.SignerInfo(
        {
            "version": "v1",
            "sid": cms.SignerIdentifier(
                {
                    "issuer_and_serial_number": cms.IssuerAndSerialNumber(
                        {
                            "issuer": signer_cert.issuer,
                            "serial_number": signer_cert.serial_number,
                        }
                    )
                }
            ),
            "digest_algorithm": digest_algorithm,
            "signed_attrs": signed_attrs,
            "signature_algorithm": algos.SignedDigestAlgorithm(
                {"algorithm": "rsassa_pkcs1v15"}
            ),
            "signature": signature,
        }
    )

    certs = [signer_cert]
    seen = {signer_cert.dump()}
    for cert in credential.chain:
        asn1_cert = _to_asn1_cert(cert)
        der = asn1_cert.dump()
        if der not in seen:
            seen.add(der)
            certs.append(asn1_cert)

    signed_data = cms.SignedData(
        {
            "version": "v1",
            "digest_algorithms": cms.DigestAlgorithms((digest_algorithm,)),
            "encap_content_info": {"content_type": "data"},
            "certificates": [
                cms.CertificateChoices(name="certificate", value=cert) for cert in certs
            ],
            "signer_infos": [signer_info],
        }
    )
    content_info = cms.ContentInfo({"content_type": "signed_data", "content": signed_data})
    cms_der = content_info.dump()
    _logger.debug(
        "Built CMS SignedData: %d bytes, %d certificate(s), content digest %s",
        len(cms_der),
        len(certs),
        content_digest.hex(),
    )
    return cms_der
