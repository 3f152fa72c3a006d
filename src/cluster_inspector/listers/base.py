"""Lister protocols and transport errors.

A lister is whatever can list cluster objects for one namespace. Any
object with the right methods satisfies the protocol without inheriting
from it, so tests and alternative backends can be dropped in.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


class UpstreamError(Exception):
    """The cluster could not supply the data a request needed."""


class TransportError(UpstreamError):
    """A single list call against the cluster API failed."""

    def __init__(self, message: str, namespace: str | None = None) -> None:
        super().__init__(message)
        self.namespace = namespace


@runtime_checkable
class WorkloadLister(Protocol):
    """Lists Deployments and StatefulSets (``kubernetes`` client models)."""

    def list_deployments(
        self, namespace: str, label_selector: str | None = None,
    ) -> list[Any]:
        """Return the namespace's Deployments in API order."""
        ...

    def list_stateful_sets(
        self, namespace: str, label_selector: str | None = None,
    ) -> list[Any]:
        """Return the namespace's StatefulSets in API order."""
        ...


@runtime_checkable
class RouteLister(Protocol):
    """Lists OpenShift routes as raw custom-object dicts."""

    def list_routes(
        self, namespace: str, label_selector: str | None = None,
    ) -> list[dict[str, Any]]:
        """Return the namespace's routes in API order."""
        ...
