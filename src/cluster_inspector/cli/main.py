"""Command-line interface for cluster-inspector.

Commands:
    metrics-annotations   Show Prometheus scrape annotations of workloads
    validate-certs        Check route TLS certificates against host and key
    serve                 Run the HTTP API
"""

from __future__ import annotations

import json
import sys
from dataclasses import replace

import click

from cluster_inspector import __version__
from cluster_inspector.config import InspectorConfig, apply_env_overrides, load_config
from cluster_inspector.listers.base import UpstreamError
from cluster_inspector.logging_setup import configure_logging
from cluster_inspector.models import RouteInfo, WorkloadMetricsInfo
from cluster_inspector.service import InputError, InspectorService


def _build_service(cfg: InspectorConfig) -> InspectorService:
    """Wire the service to kubernetes-client listers sharing one ApiClient."""
    from kubernetes import client

    from cluster_inspector.listers.k8s_listers import (
        KubernetesWorkloadLister,
        OpenShiftRouteLister,
        build_api_client,
    )

    api_client = build_api_client(cfg)
    return InspectorService(
        KubernetesWorkloadLister(client.AppsV1Api(api_client)),
        OpenShiftRouteLister(client.CustomObjectsApi(api_client)),
    )


def _badge(value: bool | None) -> str:
    """Coloured yes/no/unknown marker for CLI output."""
    if value is None:
        return click.style("[unknown]", fg="yellow")
    if value:
        return click.style("[ok]", fg="green")
    return click.style("[mismatch]", fg="red")


# --- Root group ---


@click.group()
@click.version_option(version=__version__)
@click.option("--config", "config_file", default=None, help="Path to cluster-inspector.yaml")
@click.option("--kubeconfig", default=None, help="Path to a kubeconfig file")
@click.option("--context", default=None, help="Kubeconfig context to use")
@click.option("--in-cluster", is_flag=True, help="Use the pod's service account")
@click.option("--log-level", default=None, help="Logging level (DEBUG, INFO, ...)")
@click.pass_context
def cli(
    ctx: click.Context,
    config_file: str | None,
    kubeconfig: str | None,
    context: str | None,
    in_cluster: bool,
    log_level: str | None,
) -> None:
    """cluster-inspector: scrape annotations and route TLS checks."""
    try:
        cfg = apply_env_overrides(load_config(config_file))
    except (FileNotFoundError, ValueError) as e:
        click.echo(f"Error loading config: {e}", err=True)
        sys.exit(1)

    overrides: dict[str, object] = {}
    if kubeconfig:
        overrides["kubeconfig"] = kubeconfig
    if context:
        overrides["context"] = context
    if in_cluster:
        overrides["in_cluster"] = True
    if log_level:
        overrides["log_level"] = log_level.upper()
    cfg = replace(cfg, **overrides)

    configure_logging(cfg.log_level)
    ctx.obj = cfg


# --- metrics-annotations command ---


@cli.command("metrics-annotations")
@click.argument("namespaces", nargs=-1)
@click.option("--selector", "-l", default=None, help="Label selector to filter workloads")
@click.option("--json-output", is_flag=True, help="Output as JSON")
@click.pass_obj
def metrics_annotations(
    cfg: InspectorConfig,
    namespaces: tuple[str, ...],
    selector: str | None,
    json_output: bool,
) -> None:
    """Show Prometheus scrape annotations for Deployments and StatefulSets."""
    try:
        workloads = _build_service(cfg).get_metrics_annotations(list(namespaces), selector)
    except InputError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(2)
    except UpstreamError as e:
        click.echo(click.style("ERROR", fg="red") + f"  {e}", err=True)
        sys.exit(1)

    if json_output:
        click.echo(json.dumps([w.to_api_dict() for w in workloads], indent=2))
        return

    if not workloads:
        click.echo("No workloads found.")
        return
    for w in workloads:
        click.echo(_format_workload(w))
    click.echo(f"\n{len(workloads)} workload(s) inspected.")


def _format_workload(w: WorkloadMetricsInfo) -> str:
    ann = w.metrics_annotations
    scrape = ann.scrape_enabled if ann is not None else None
    line = f"  {w.namespace + '/' + w.name:<40} {w.type:<12} " + _badge(scrape)
    if ann is not None and (ann.port or ann.path):
        line += f"  port={ann.port or '-'} path={ann.path or '-'}"
    return line


# --- validate-certs command ---


@cli.command("validate-certs")
@click.argument("namespaces", nargs=-1)
@click.option("--selector", "-l", default=None, help="Label selector to filter routes")
@click.option("--filter-no-cert", is_flag=True, help="Hide routes without a parsed certificate")
@click.option("--json-output", is_flag=True, help="Output as JSON")
@click.pass_obj
def validate_certs(
    cfg: InspectorConfig,
    namespaces: tuple[str, ...],
    selector: str | None,
    filter_no_cert: bool,
    json_output: bool,
) -> None:
    """Check route certificates against the route host and private key."""
    try:
        routes = _build_service(cfg).get_route_certs(list(namespaces), selector, filter_no_cert)
    except InputError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(2)
    except UpstreamError as e:
        click.echo(click.style("ERROR", fg="red") + f"  {e}", err=True)
        sys.exit(1)

    if json_output:
        click.echo(json.dumps([r.to_api_dict() for r in routes], indent=2))
        return

    if not routes:
        click.echo("No routes found.")
        return
    for r in routes:
        click.echo(_format_route(r))
    click.echo(f"\n{len(routes)} route(s) inspected.")


def _format_route(r: RouteInfo) -> str:
    head = f"  {r.namespace + '/' + r.name:<40} {r.host}"
    if r.tls is None:
        return head + "  (no tls)"
    if r.tls.certificate_info is None:
        return head + f"  tls={r.tls.termination or '-'} (no certificate)"
    return (
        head
        + f"  tls={r.tls.termination or '-'}"
        + "  host " + _badge(r.tls.host_matches_certificate)
        + "  key " + _badge(r.tls.private_key_matches_certificate)
    )


# --- serve command ---


@cli.command()
@click.option("--host", default=None, help="Bind address")
@click.option("--port", default=None, type=int, help="Bind port")
@click.pass_obj
def serve(cfg: InspectorConfig, host: str | None, port: int | None) -> None:
    """Run the HTTP API."""
    import uvicorn

    from cluster_inspector.api.app import create_app

    host = host or cfg.host
    port = port or cfg.port
    app = create_app(cfg)

    click.echo(f"cluster-inspector API at http://{host}:{port}")
    uvicorn.run(app, host=host, port=port, log_level=cfg.log_level.lower())
