"""Route retrieval across namespaces with TLS consistency checks.

Namespaces are fetched one after another. A namespace whose list call
or route parsing fails is skipped and its error recorded; the call only fails as a whole
when every failure left the result empty. Certificate and key problems
never fail a route: the affected TLS fields are left unset.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from cluster_inspector.crypto.matcher import (
    host_matches_certificate,
    private_key_matches_certificate,
)
from cluster_inspector.crypto.parser import parse_certificate
from cluster_inspector.listers.base import RouteLister, UpstreamError
from cluster_inspector.models import CertificateInfo, RouteInfo, RouteTlsInfo
from cluster_inspector.result import Err, Ok, Result

logger = logging.getLogger(__name__)

UNKNOWN = "unknown"


class RouteAggregationError(UpstreamError):
    """No routes could be collected because every failing namespace left nothing."""

    def __init__(self, errors: list[str]) -> None:
        super().__init__("; ".join(errors))
        self.errors = errors


class RouteAggregator:
    """Collects :class:`RouteInfo` records from a :class:`RouteLister`."""

    def __init__(self, lister: RouteLister) -> None:
        self._lister = lister

    def get_routes_from_namespaces(
        self,
        namespaces: Sequence[str],
        label_selector: str | None = None,
    ) -> list[RouteInfo]:
        """Return routes from *namespaces*, in namespace then lister order.

        Raises:
            RouteAggregationError: At least one namespace failed and no
                route was collected from any namespace.
        """
        logger.debug("Retrieving routes from namespaces %s (selector=%s)", namespaces, label_selector)
        all_routes: list[RouteInfo] = []
        errors: list[str] = []

        for namespace in namespaces:
            result = self._get_routes_from_namespace(namespace, label_selector)
            if isinstance(result, Ok):
                logger.debug("Fetched %d routes for namespace %s", len(result.value), namespace)
                all_routes.extend(result.value)
            else:
                logger.error("Failed to get routes from namespace %s: %s", namespace, result.error)
                errors.append(f"Failed to get routes from namespace {namespace}: {result.error}")

        if errors and not all_routes:
            logger.error("No routes found in any namespace: %s", errors)
            raise RouteAggregationError(errors)

        logger.debug("Returning %d routes", len(all_routes))
        return all_routes

    def _get_routes_from_namespace(
        self, namespace: str, label_selector: str | None,
    ) -> Result[list[RouteInfo], Exception]:
        # Any failure while listing or parsing marks only this namespace as failed.
        try:
            raw_routes = self._lister.list_routes(namespace, label_selector)
            return Ok([parse_route(route) for route in raw_routes])
        except Exception as exc:
            return Err(exc)


def parse_route(route: dict[str, Any]) -> RouteInfo:
    """Reduce a raw OpenShift route object to a :class:`RouteInfo`."""
    metadata = route.get("metadata") or {}
    spec = route.get("spec") or {}
    name = metadata.get("name") or UNKNOWN
    namespace = metadata.get("namespace") or UNKNOWN
    host = spec.get("host") or UNKNOWN

    tls_info: RouteTlsInfo | None = None
    tls = spec.get("tls")
    if tls is not None:
        tls_info = _parse_tls(tls, host, name, namespace)

    route_info = RouteInfo(
        name=name,
        namespace=namespace,
        host=host,
        path=spec.get("path"),
        service=(spec.get("to") or {}).get("name"),
        port=(spec.get("port") or {}).get("targetPort"),
        tls=tls_info,
    )
    logger.debug("Parsed route %s/%s", namespace, name)
    return route_info


def _parse_tls(tls: dict[str, Any], host: str, name: str, namespace: str) -> RouteTlsInfo:
    certificate_pem = tls.get("certificate")
    key_pem = tls.get("key")

    certificate_info: CertificateInfo | None = None
    host_matches: bool | None = None
    key_matches: bool | None = None

    if certificate_pem is not None:
        parsed = parse_certificate(certificate_pem)
        if isinstance(parsed, Ok):
            certificate_info = parsed.value
            host_matches = host_matches_certificate(host, certificate_info)

            if key_pem is not None:
                key_result = private_key_matches_certificate(certificate_pem, key_pem)
                if isinstance(key_result, Ok):
                    key_matches = key_result.value
                else:
                    logger.error(
                        "Failed to validate private key for route %s/%s: %s",
                        namespace, name, key_result.error,
                    )
        else:
            logger.error(
                "Failed to parse certificate for route %s/%s: %s",
                namespace, name, parsed.error,
            )

    return RouteTlsInfo(
        termination=tls.get("termination"),
        certificate_info=certificate_info,
        host_matches_certificate=host_matches,
        private_key_matches_certificate=key_matches,
    )
