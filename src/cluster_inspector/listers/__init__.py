"""Cluster object listers.

Listers: KubernetesWorkloadLister, OpenShiftRouteLister.
"""

from cluster_inspector.listers.base import (
    RouteLister,
    TransportError,
    UpstreamError,
    WorkloadLister,
)
from cluster_inspector.listers.k8s_listers import (
    KubernetesWorkloadLister,
    OpenShiftRouteLister,
    build_api_client,
)

__all__ = [
    "KubernetesWorkloadLister",
    "OpenShiftRouteLister",
    "RouteLister",
    "TransportError",
    "UpstreamError",
    "WorkloadLister",
    "build_api_client",
]
