"""X.509 certificate parsing.

Decodes a single PEM leaf certificate into a :class:`CertificateInfo`.
No chain building or trust verification is performed.
"""

from __future__ import annotations

import logging

from cryptography import x509
from cryptography.hazmat.primitives import hashes

from cluster_inspector.models import CertificateInfo
from cluster_inspector.result import Err, Ok, Result

logger = logging.getLogger(__name__)


class CertificateParseError(Exception):
    """Raised-as-value when certificate material cannot be decoded."""


def parse_certificate(certificate_pem: str) -> Result[CertificateInfo, CertificateParseError]:
    """Parse the first certificate in *certificate_pem*.

    Returns ``Ok(CertificateInfo)`` or ``Err(CertificateParseError)``
    carrying the underlying decode diagnostic. Never raises.
    """
    try:
        cert = x509.load_pem_x509_certificate(certificate_pem.encode("utf-8"))
        info = CertificateInfo(
            subject=cert.subject.rfc4514_string(),
            issuer=cert.issuer.rfc4514_string(),
            valid_from=cert.not_valid_before_utc,
            valid_to=cert.not_valid_after_utc,
            serial_number=_format_serial(cert.serial_number),
            fingerprint=_format_fingerprint(cert.fingerprint(hashes.SHA1())),  # noqa: S303
            subject_alt_names=_subject_alt_names(cert),
        )
    except Exception as exc:
        # Extensions decode lazily, so malformed ones (e.g. a repeated SAN)
        # only surface while the fields are read.
        return Err(CertificateParseError(f"Invalid certificate: {exc}"))

    logger.debug("Parsed certificate subject=%s serial=%s", info.subject, info.serial_number)
    return Ok(info)


def _subject_alt_names(cert: x509.Certificate) -> list[str] | None:
    """SAN entries in OpenSSL's prefixed text form, or None without the extension."""
    try:
        ext = cert.extensions.get_extension_for_class(x509.SubjectAlternativeName)
    except x509.ExtensionNotFound:
        return None
    return [_format_general_name(name) for name in ext.value]


def _format_general_name(name: x509.GeneralName) -> str:
    if isinstance(name, x509.DNSName):
        return f"DNS:{name.value}"
    if isinstance(name, x509.IPAddress):
        return f"IP Address:{name.value}"
    if isinstance(name, x509.RFC822Name):
        return f"email:{name.value}"
    if isinstance(name, x509.UniformResourceIdentifier):
        return f"URI:{name.value}"
    if isinstance(name, x509.DirectoryName):
        return f"DirName:{name.value.rfc4514_string()}"
    if isinstance(name, x509.RegisteredID):
        return f"Registered ID:{name.value.dotted_string}"
    return "othername:<unsupported>"


def _format_serial(serial: int) -> str:
    # Negative serials are non-conformant but still load; show the magnitude.
    text = f"{abs(serial):X}"
    if len(text) % 2:
        text = "0" + text
    return text


def _format_fingerprint(digest: bytes) -> str:
    return ":".join(f"{b:02X}" for b in digest)
