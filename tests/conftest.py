"""Session-wide certificate fixtures.

Certificates are generated with ``cryptography`` at session start; no
files on disk and no cluster are needed.
"""

from __future__ import annotations

import pytest

from tests.factories import CertPair, generate_cert, generate_key


@pytest.fixture(scope="session")
def app1_cert() -> CertPair:
    return generate_cert("app1.example.com", alt_names=["app1.example.com"])


@pytest.fixture(scope="session")
def app2_cert() -> CertPair:
    return generate_cert("app2.example.com", alt_names=["app2.example.com"])


@pytest.fixture(scope="session")
def wildcard_cert() -> CertPair:
    return generate_cert("wildcard", alt_names=["*.example.com"])


@pytest.fixture(scope="session")
def cn_only_cert() -> CertPair:
    return generate_cert("app1.example.com")


@pytest.fixture(scope="session")
def rsa_cert() -> CertPair:
    return generate_cert("rsa.example.com", alt_names=["rsa.example.com"], key=generate_key("rsa"))
