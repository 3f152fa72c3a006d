"""Query operations exposed to the HTTP API and the CLI.

``InspectorService`` validates the request, then delegates to the route
and workload aggregators. Failures surface as :class:`InputError` (bad
request) or :class:`UpstreamError` (the cluster could not answer).
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from cluster_inspector.listers.base import RouteLister, WorkloadLister
from cluster_inspector.models import RouteInfo, WorkloadMetricsInfo
from cluster_inspector.routes.aggregator import RouteAggregator
from cluster_inspector.workloads.aggregator import WorkloadAggregator

logger = logging.getLogger(__name__)


class InputError(ValueError):
    """The request is malformed (e.g. no namespaces given)."""


class InspectorService:
    def __init__(self, workload_lister: WorkloadLister, route_lister: RouteLister) -> None:
        self._workloads = WorkloadAggregator(workload_lister)
        self._routes = RouteAggregator(route_lister)

    def get_metrics_annotations(
        self,
        namespaces: Sequence[str],
        label_selector: str | None = None,
    ) -> list[WorkloadMetricsInfo]:
        _require_namespaces(namespaces)
        result = self._workloads.get_workload_metrics_info_from_namespaces(
            namespaces, label_selector,
        )
        logger.debug("Returning %d metrics annotation records", len(result))
        return result

    def get_route_certs(
        self,
        namespaces: Sequence[str],
        label_selector: str | None = None,
        filter_no_cert: bool = False,
    ) -> list[RouteInfo]:
        """Routes with TLS validation results.

        With *filter_no_cert*, only routes whose TLS certificate was
        parsed are kept.
        """
        _require_namespaces(namespaces)
        result = self._routes.get_routes_from_namespaces(namespaces, label_selector)
        if filter_no_cert:
            result = [
                r for r in result
                if r.tls is not None and r.tls.certificate_info is not None
            ]
        logger.debug("Returning %d route cert records", len(result))
        return result


def _require_namespaces(namespaces: Sequence[str]) -> None:
    if not namespaces:
        raise InputError("At least one namespace is required")
