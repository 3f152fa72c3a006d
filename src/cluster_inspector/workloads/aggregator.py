"""Workload scrape-annotation retrieval across namespaces.

Unlike route retrieval this is all-or-nothing: the first failing list
call aborts the whole operation.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import UTC, datetime
from typing import Any

from cluster_inspector.listers.base import WorkloadLister
from cluster_inspector.models import WorkloadMetricsInfo, WorkloadType
from cluster_inspector.workloads.annotations import extract_metrics_annotations

logger = logging.getLogger(__name__)


class WorkloadAggregator:
    """Collects :class:`WorkloadMetricsInfo` from a :class:`WorkloadLister`."""

    def __init__(self, lister: WorkloadLister) -> None:
        self._lister = lister

    def get_workload_metrics_info_from_namespaces(
        self,
        namespaces: Sequence[str],
        label_selector: str | None = None,
    ) -> list[WorkloadMetricsInfo]:
        """Return Deployments then StatefulSets for each namespace in order.

        Raises:
            TransportError: Any list call failed; nothing is returned.
        """
        logger.debug(
            "Retrieving workload metrics info for namespaces %s (selector=%s)",
            namespaces, label_selector,
        )
        all_workloads: list[WorkloadMetricsInfo] = []

        for namespace in namespaces:
            deployments = self._lister.list_deployments(namespace, label_selector)
            stateful_sets = self._lister.list_stateful_sets(namespace, label_selector)
            logger.debug(
                "Found %d deployments and %d stateful sets in namespace %s",
                len(deployments), len(stateful_sets), namespace,
            )

            all_workloads.extend(
                to_workload_metrics_info(d, WorkloadType.DEPLOYMENT) for d in deployments
            )
            all_workloads.extend(
                to_workload_metrics_info(s, WorkloadType.STATEFUL_SET) for s in stateful_sets
            )

        logger.debug("Returning %d workloads", len(all_workloads))
        return all_workloads


def to_workload_metrics_info(workload: Any, workload_type: WorkloadType) -> WorkloadMetricsInfo:
    """Build a record from a ``V1Deployment`` / ``V1StatefulSet`` model."""
    metadata = workload.metadata
    spec = workload.spec
    status = workload.status

    template_metadata = spec.template.metadata if spec is not None and spec.template else None
    annotations = template_metadata.annotations if template_metadata is not None else None
    metrics_annotations = extract_metrics_annotations(annotations)

    return WorkloadMetricsInfo(
        name=(metadata.name if metadata is not None else None) or "",
        namespace=(metadata.namespace if metadata is not None else None) or "",
        type=workload_type,
        replicas=spec.replicas if spec is not None else None,
        ready_replicas=status.ready_replicas if status is not None else None,
        created_at=_iso_timestamp(metadata.creation_timestamp if metadata is not None else None),
        has_metrics_annotations=metrics_annotations.scrape_enabled is not None,
        metrics_annotations=metrics_annotations,
    )


def _iso_timestamp(ts: datetime | None) -> str | None:
    """UTC ISO-8601 with millisecond precision and a ``Z`` suffix."""
    if ts is None:
        return None
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=UTC)
    return ts.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")
