"""Certificate parsing and matching."""

from cluster_inspector.crypto.matcher import (
    KeyMatchError,
    host_matches_certificate,
    private_key_matches_certificate,
)
from cluster_inspector.crypto.parser import CertificateParseError, parse_certificate

__all__ = [
    "CertificateParseError",
    "KeyMatchError",
    "host_matches_certificate",
    "parse_certificate",
    "private_key_matches_certificate",
]
