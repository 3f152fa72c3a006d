"""FastAPI application factory for the inspector API."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from kubernetes import client

from cluster_inspector import __version__
from cluster_inspector.api.routers import health, inspect
from cluster_inspector.config import InspectorConfig
from cluster_inspector.listers.base import RouteLister, UpstreamError, WorkloadLister
from cluster_inspector.listers.k8s_listers import (
    KubernetesWorkloadLister,
    OpenShiftRouteLister,
    build_api_client,
)
from cluster_inspector.service import InputError, InspectorService

logger = logging.getLogger(__name__)


def create_app(
    config: InspectorConfig | None = None,
    *,
    workload_lister: WorkloadLister | None = None,
    route_lister: RouteLister | None = None,
) -> FastAPI:
    """Build and return the FastAPI application.

    Listers not passed in are built from *config* with the kubernetes
    client; both then share one ``ApiClient``.
    """
    if workload_lister is None or route_lister is None:
        api_client = build_api_client(config)
        if workload_lister is None:
            workload_lister = KubernetesWorkloadLister(client.AppsV1Api(api_client))
        if route_lister is None:
            route_lister = OpenShiftRouteLister(client.CustomObjectsApi(api_client))

    app = FastAPI(title="Cluster Inspector", version=__version__)

    inspect.init_router(InspectorService(workload_lister, route_lister))
    health.init_router(__version__)

    app.include_router(inspect.router)
    app.include_router(health.router)

    @app.exception_handler(RequestValidationError)
    async def _bad_request(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"message": str(exc.errors())})

    @app.exception_handler(InputError)
    async def _input_error(request: Request, exc: InputError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"message": str(exc)})

    @app.exception_handler(UpstreamError)
    async def _upstream_error(request: Request, exc: UpstreamError) -> JSONResponse:
        logger.error("Error handling %s: %s", request.url.path, exc)
        return JSONResponse(status_code=500, content={"message": str(exc)})

    @app.exception_handler(Exception)
    async def _unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        logger.error("Unhandled error on %s: %s", request.url.path, exc, exc_info=exc)
        return JSONResponse(status_code=500, content={"message": str(exc)})

    return app
