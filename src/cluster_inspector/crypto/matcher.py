"""Host and private-key consistency checks for route certificates."""

from __future__ import annotations

import re

from cryptography import x509
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization

from cluster_inspector.models import CertificateInfo
from cluster_inspector.result import Err, Ok, Result

_SAN_TYPE_PREFIX = re.compile(r"^[A-Z]+:")
_WILDCARD_PREFIX = "*."


class KeyMatchError(Exception):
    """Raised-as-value when a key comparison cannot be carried out."""


def host_matches_certificate(host: str, cert_info: CertificateInfo) -> bool:
    """Return True if *host* matches the certificate's CN or any SAN entry.

    The CN check is a raw substring test on the subject string
    (``"CN=<host>"``), not a parsed DN comparison. A ``*.`` SAN matches
    exactly one extra left-most label.
    """
    if f"CN={host}" in cert_info.subject:
        return True

    for san in cert_info.subject_alt_names or []:
        value = _SAN_TYPE_PREFIX.sub("", san, count=1)
        if value.startswith(_WILDCARD_PREFIX):
            domain = value[len(_WILDCARD_PREFIX):]
            if host.endswith(domain) and len(host.split(".")) == len(domain.split(".")) + 1:
                return True
        elif value == host:
            return True
    return False


def private_key_matches_certificate(
    certificate_pem: str, private_key_pem: str,
) -> Result[bool, KeyMatchError]:
    """Compare the certificate's public key with the one derived from the private key.

    Both keys are serialised as PEM SubjectPublicKeyInfo and compared as
    bytes. Returns ``Err`` if either blob cannot be loaded; that outcome
    means "unknown", not "no match".
    """
    try:
        cert = x509.load_pem_x509_certificate(certificate_pem.encode("utf-8"))
        private_key = serialization.load_pem_private_key(
            private_key_pem.encode("utf-8"), password=None,
        )
        cert_spki = _spki_pem(cert.public_key())
        key_spki = _spki_pem(private_key.public_key())
    except (ValueError, TypeError, AttributeError, UnsupportedAlgorithm) as exc:
        return Err(KeyMatchError(f"Cannot compare private key with certificate: {exc}"))

    return Ok(cert_spki == key_spki)


def _spki_pem(public_key: object) -> bytes:
    return public_key.public_bytes(  # type: ignore[attr-defined]
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    )
