"""Listers backed by the official ``kubernetes`` Python client.

Supports kubeconfig file, explicit context, or in-cluster service
account credentials. Client and transport failures are translated into
:class:`TransportError` so the aggregators never see library exceptions.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import urllib3
from kubernetes import client, config
from kubernetes.client.exceptions import ApiException

from cluster_inspector.listers.base import TransportError

if TYPE_CHECKING:
    from cluster_inspector.config import InspectorConfig

logger = logging.getLogger(__name__)

ROUTE_GROUP = "route.openshift.io"
ROUTE_VERSION = "v1"
ROUTE_PLURAL = "routes"


def build_api_client(cfg: InspectorConfig | None = None) -> client.ApiClient:
    """Build a kubernetes ApiClient from the inspector configuration."""
    if cfg is not None and cfg.in_cluster:
        config.load_incluster_config()
        return client.ApiClient()

    kwargs: dict[str, Any] = {}
    if cfg is not None and cfg.kubeconfig:
        kwargs["config_file"] = cfg.kubeconfig
    if cfg is not None and cfg.context:
        kwargs["context"] = cfg.context
    config.load_kube_config(**kwargs)
    return client.ApiClient()


def _list_kwargs(namespace: str, label_selector: str | None) -> dict[str, Any]:
    kwargs: dict[str, Any] = {"namespace": namespace}
    if label_selector:
        kwargs["label_selector"] = label_selector
    return kwargs


def _transport_error(what: str, namespace: str, exc: Exception) -> TransportError:
    if isinstance(exc, ApiException):
        detail = f"K8s API error ({exc.status}): {exc.reason}"
    else:
        detail = f"{type(exc).__name__}: {exc}"
    return TransportError(f"Failed to list {what} in namespace {namespace}: {detail}", namespace)


class KubernetesWorkloadLister:
    """Lists Deployments and StatefulSets through ``AppsV1Api``."""

    def __init__(self, apps_api: Any) -> None:
        self._apps = apps_api

    @classmethod
    def from_config(cls, cfg: InspectorConfig | None = None) -> KubernetesWorkloadLister:
        return cls(client.AppsV1Api(build_api_client(cfg)))

    def list_deployments(self, namespace: str, label_selector: str | None = None) -> list[Any]:
        logger.debug("Listing deployments in %s (selector=%s)", namespace, label_selector)
        try:
            response = self._apps.list_namespaced_deployment(**_list_kwargs(namespace, label_selector))
        except (ApiException, urllib3.exceptions.HTTPError) as exc:
            raise _transport_error("deployments", namespace, exc) from exc
        return _items(response, "deployments", namespace)

    def list_stateful_sets(self, namespace: str, label_selector: str | None = None) -> list[Any]:
        logger.debug("Listing stateful sets in %s (selector=%s)", namespace, label_selector)
        try:
            response = self._apps.list_namespaced_stateful_set(**_list_kwargs(namespace, label_selector))
        except (ApiException, urllib3.exceptions.HTTPError) as exc:
            raise _transport_error("stateful sets", namespace, exc) from exc
        return _items(response, "stateful sets", namespace)


class OpenShiftRouteLister:
    """Lists ``route.openshift.io/v1`` routes through ``CustomObjectsApi``."""

    def __init__(self, custom_objects_api: Any) -> None:
        self._custom = custom_objects_api

    @classmethod
    def from_config(cls, cfg: InspectorConfig | None = None) -> OpenShiftRouteLister:
        return cls(client.CustomObjectsApi(build_api_client(cfg)))

    def list_routes(self, namespace: str, label_selector: str | None = None) -> list[dict[str, Any]]:
        logger.debug("Listing routes in %s (selector=%s)", namespace, label_selector)
        try:
            response = self._custom.list_namespaced_custom_object(
                group=ROUTE_GROUP,
                version=ROUTE_VERSION,
                plural=ROUTE_PLURAL,
                **_list_kwargs(namespace, label_selector),
            )
        except (ApiException, urllib3.exceptions.HTTPError) as exc:
            raise _transport_error("routes", namespace, exc) from exc
        return _items(response, "routes", namespace)


def _items(response: Any, what: str, namespace: str) -> list[Any]:
    """Pull the ``items`` list out of a list response (model or dict)."""
    items = response.get("items") if isinstance(response, dict) else getattr(response, "items", None)
    if not isinstance(items, list):
        raise TransportError(
            f"Failed to list {what} in namespace {namespace}: malformed response without items",
            namespace,
        )
    logger.debug("Listed %d %s in %s", len(items), what, namespace)
    return items
