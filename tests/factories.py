"""Builders for throwaway certificates and cluster objects used across tests."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any

from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec, rsa
from cryptography.x509.oid import NameOID
from kubernetes import client


@dataclass(frozen=True)
class CertPair:
    cert: str
    key: str


def generate_key(kind: str = "ec") -> Any:
    if kind == "rsa":
        return rsa.generate_private_key(public_exponent=65537, key_size=2048)
    return ec.generate_private_key(ec.SECP256R1())


def key_to_pem(key: Any, fmt: serialization.PrivateFormat = serialization.PrivateFormat.PKCS8) -> str:
    return key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=fmt,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode("ascii")


def generate_cert(
    common_name: str,
    alt_names: list[str] | None = None,
    key: Any = None,
    ip_addresses: list[str] | None = None,
) -> CertPair:
    """Self-signed certificate for *common_name*; SAN only when names are given."""
    key = key or generate_key()
    name = x509.Name([
        x509.NameAttribute(NameOID.COUNTRY_NAME, "US"),
        x509.NameAttribute(NameOID.ORGANIZATION_NAME, "Test"),
        x509.NameAttribute(NameOID.COMMON_NAME, common_name),
    ])
    now = datetime.now(tz=UTC)
    builder = (
        x509.CertificateBuilder()
        .subject_name(name)
        .issuer_name(name)
        .public_key(key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(now - timedelta(minutes=1))
        .not_valid_after(now + timedelta(days=365))
    )
    general_names: list[x509.GeneralName] = [x509.DNSName(n) for n in alt_names or []]
    if ip_addresses:
        import ipaddress

        general_names.extend(x509.IPAddress(ipaddress.ip_address(ip)) for ip in ip_addresses)
    if general_names:
        builder = builder.add_extension(x509.SubjectAlternativeName(general_names), critical=False)

    cert = builder.sign(key, hashes.SHA256())
    return CertPair(
        cert=cert.public_bytes(serialization.Encoding.PEM).decode("ascii"),
        key=key_to_pem(key),
    )


def generate_duplicate_san_cert(host: str = "dup.example.com") -> str:
    """Certificate carrying two SubjectAltName extensions.

    The builder refuses duplicates, so an IssuerAltName is added and its
    OID (2.5.29.18) is rewritten to the SAN OID (2.5.29.17) in the DER.
    The signature no longer verifies, which parsing does not check.
    """
    key = generate_key()
    name = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, host)])
    now = datetime.now(tz=UTC)
    cert = (
        x509.CertificateBuilder()
        .subject_name(name)
        .issuer_name(name)
        .public_key(key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(now - timedelta(minutes=1))
        .not_valid_after(now + timedelta(days=365))
        .add_extension(x509.SubjectAlternativeName([x509.DNSName(host)]), critical=False)
        .add_extension(x509.IssuerAlternativeName([x509.DNSName(host)]), critical=False)
        .sign(key, hashes.SHA256())
    )
    der = cert.public_bytes(serialization.Encoding.DER)
    der = der.replace(b"\x06\x03\x55\x1d\x12", b"\x06\x03\x55\x1d\x11", 1)
    return x509.load_der_x509_certificate(der).public_bytes(serialization.Encoding.PEM).decode("ascii")


# --- Cluster object builders ---


def make_route(
    name: str | None = "route-a",
    namespace: str | None = "default",
    host: str | None = "app1.example.com",
    tls: dict[str, Any] | None = None,
    path: str | None = None,
    service: str = "app-service",
    target_port: str | int = "https",
) -> dict[str, Any]:
    metadata: dict[str, Any] = {}
    if name is not None:
        metadata["name"] = name
    if namespace is not None:
        metadata["namespace"] = namespace
    spec: dict[str, Any] = {
        "to": {"kind": "Service", "name": service, "weight": 100},
        "port": {"targetPort": target_port},
        "wildcardPolicy": "None",
    }
    if host is not None:
        spec["host"] = host
    if path is not None:
        spec["path"] = path
    if tls is not None:
        spec["tls"] = tls
    return {
        "apiVersion": "route.openshift.io/v1",
        "kind": "Route",
        "metadata": metadata,
        "spec": spec,
    }


def _pod_template(name: str, annotations: dict[str, str] | None) -> client.V1PodTemplateSpec:
    return client.V1PodTemplateSpec(
        metadata=client.V1ObjectMeta(labels={"app": name}, annotations=annotations),
        spec=client.V1PodSpec(containers=[client.V1Container(name=name, image="nginx:1.27")]),
    )


def make_deployment(
    name: str = "api",
    namespace: str = "default",
    annotations: dict[str, str] | None = None,
    replicas: int = 3,
    ready_replicas: int | None = 3,
    created: datetime | None = datetime(2023, 1, 1, tzinfo=UTC),
) -> client.V1Deployment:
    return client.V1Deployment(
        api_version="apps/v1",
        kind="Deployment",
        metadata=client.V1ObjectMeta(name=name, namespace=namespace, creation_timestamp=created),
        spec=client.V1DeploymentSpec(
            replicas=replicas,
            selector=client.V1LabelSelector(match_labels={"app": name}),
            template=_pod_template(name, annotations),
        ),
        status=client.V1DeploymentStatus(ready_replicas=ready_replicas),
    )


def make_stateful_set(
    name: str = "db",
    namespace: str = "default",
    annotations: dict[str, str] | None = None,
    replicas: int = 1,
    ready_replicas: int | None = 1,
    created: datetime | None = datetime(2023, 1, 1, tzinfo=UTC),
) -> client.V1StatefulSet:
    return client.V1StatefulSet(
        api_version="apps/v1",
        kind="StatefulSet",
        metadata=client.V1ObjectMeta(name=name, namespace=namespace, creation_timestamp=created),
        spec=client.V1StatefulSetSpec(
            replicas=replicas,
            service_name=name,
            selector=client.V1LabelSelector(match_labels={"app": name}),
            template=_pod_template(name, annotations),
        ),
        status=client.V1StatefulSetStatus(replicas=replicas, ready_replicas=ready_replicas),
    )


