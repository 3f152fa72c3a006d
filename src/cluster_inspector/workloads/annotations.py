"""Prometheus scrape annotation extraction."""

from __future__ import annotations

from collections.abc import Mapping

from cluster_inspector.models import MetricsAnnotations

SCRAPE_ANNOTATION = "prometheus.io/scrape"
PORT_ANNOTATION = "prometheus.io/port"
PATH_ANNOTATION = "prometheus.io/path"


def extract_metrics_annotations(annotations: Mapping[str, str] | None) -> MetricsAnnotations:
    """Map a pod-template annotation dict to :class:`MetricsAnnotations`.

    ``scrape_enabled`` is ``None`` when the scrape key is missing, ``True``
    only for the exact string ``"true"`` and ``False`` for anything else.
    Port and path are passed through unvalidated.
    """
    if annotations is None:
        return MetricsAnnotations(scrape_enabled=None)

    scrape = annotations.get(SCRAPE_ANNOTATION)
    return MetricsAnnotations(
        scrape_enabled=None if scrape is None else scrape == "true",
        port=annotations.get(PORT_ANNOTATION),
        path=annotations.get(PATH_ANNOTATION),
    )
