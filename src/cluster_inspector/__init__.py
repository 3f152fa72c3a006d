"""cluster-inspector: Prometheus scrape annotations and route TLS checks."""

__version__ = "0.3.0"

from cluster_inspector.config import InspectorConfig, find_config, load_config
from cluster_inspector.listers.base import (
    RouteLister,
    TransportError,
    UpstreamError,
    WorkloadLister,
)
from cluster_inspector.models import (
    CertificateInfo,
    MetricsAnnotations,
    RouteInfo,
    RouteTlsInfo,
    WorkloadMetricsInfo,
    WorkloadType,
)
from cluster_inspector.result import Err, Ok, Result
from cluster_inspector.routes.aggregator import RouteAggregationError, RouteAggregator
from cluster_inspector.service import InputError, InspectorService
from cluster_inspector.workloads.aggregator import WorkloadAggregator

__all__ = [
    "CertificateInfo",
    "Err",
    "find_config",
    "InputError",
    "InspectorConfig",
    "InspectorService",
    "load_config",
    "MetricsAnnotations",
    "Ok",
    "Result",
    "RouteAggregationError",
    "RouteAggregator",
    "RouteInfo",
    "RouteLister",
    "RouteTlsInfo",
    "TransportError",
    "UpstreamError",
    "WorkloadAggregator",
    "WorkloadLister",
    "WorkloadMetricsInfo",
    "WorkloadType",
    "__version__",
]
