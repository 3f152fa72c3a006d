"""Metrics-annotation and route-certificate query endpoints."""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Query

from cluster_inspector.models import RouteInfo, WorkloadMetricsInfo
from cluster_inspector.service import InspectorService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["inspect"])

# Service is injected by the app factory
_service: InspectorService | None = None


def init_router(service: InspectorService) -> None:
    global _service  # noqa: PLW0603
    _service = service


def _svc() -> InspectorService:
    assert _service is not None, "InspectorService not initialized"
    return _service


def _clean(namespaces: list[str]) -> list[str]:
    # ``?namespaces=`` arrives as [""]
    return [ns for ns in namespaces if ns]


@router.get(
    "/metrics-annotations",
    response_model=list[WorkloadMetricsInfo],
    response_model_exclude_none=True,
)
def get_metrics_annotations(
    namespaces: Annotated[list[str], Query(description="List of namespaces")],
    label_selector: Annotated[
        str | None, Query(alias="labelSelector", description="Label selector to filter workloads"),
    ] = None,
) -> list[WorkloadMetricsInfo]:
    logger.debug("getMetricsAnnotations namespaces=%s selector=%s", namespaces, label_selector)
    return _svc().get_metrics_annotations(_clean(namespaces), label_selector)


@router.get(
    "/validate-certs",
    response_model=list[RouteInfo],
    response_model_exclude_none=True,
)
def get_route_certs(
    namespaces: Annotated[list[str], Query(description="List of namespaces")],
    label_selector: Annotated[
        str | None, Query(alias="labelSelector", description="Label selector to filter routes"),
    ] = None,
    filter_no_cert: Annotated[
        bool, Query(alias="filterNoCert", description="Filter out routes without certificates"),
    ] = False,
) -> list[RouteInfo]:
    logger.debug(
        "getRouteCerts namespaces=%s selector=%s filterNoCert=%s",
        namespaces, label_selector, filter_no_cert,
    )
    return _svc().get_route_certs(_clean(namespaces), label_selector, filter_no_cert)
