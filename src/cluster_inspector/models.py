"""Core data models for cluster-inspector.

Defines the schemas for:
- Certificate identity (parsed from a route's PEM certificate)
- Route TLS validation results
- Workload Prometheus scrape annotations

Python attributes are snake_case; the JSON form uses camelCase aliases.
``None`` always means "absent / could not be evaluated" and is omitted
from serialised output, so it stays distinct from ``False``.
"""

from __future__ import annotations

import enum
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class WorkloadType(enum.StrEnum):
    DEPLOYMENT = "Deployment"
    STATEFUL_SET = "StatefulSet"


class _ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_api_dict(self) -> dict[str, Any]:
        """JSON-ready dict with camelCase keys and absent fields dropped."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# --- Certificates ---


class CertificateInfo(_ApiModel):
    """Identity record of a successfully parsed X.509 certificate."""

    model_config = ConfigDict(frozen=True)

    subject: str
    issuer: str
    valid_from: datetime
    valid_to: datetime
    serial_number: str
    fingerprint: str
    subject_alt_names: list[str] | None = None


# --- Routes ---


class RouteTlsInfo(_ApiModel):
    """TLS block of a route plus the outcome of each consistency check."""

    termination: str | None = None
    certificate_info: CertificateInfo | None = None
    host_matches_certificate: bool | None = None
    private_key_matches_certificate: bool | None = None


class RouteInfo(_ApiModel):
    """An OpenShift route, reduced to routing identity and TLS checks."""

    name: str
    namespace: str
    host: str
    path: str | None = None
    service: str | None = None
    port: str | int | None = None
    tls: RouteTlsInfo | None = None


# --- Workloads ---


class MetricsAnnotations(_ApiModel):
    """Prometheus scrape annotations found on a pod template."""

    scrape_enabled: bool | None = None
    port: str | None = None
    path: str | None = None


class WorkloadMetricsInfo(_ApiModel):
    """A Deployment or StatefulSet and its scrape configuration."""

    name: str
    namespace: str
    type: WorkloadType
    replicas: int | None = None
    ready_replicas: int | None = None
    created_at: str | None = None
    has_metrics_annotations: bool
    metrics_annotations: MetricsAnnotations | None = None
