"""Config file loading and auto-discovery for cluster-inspector.

Searches for ``cluster-inspector.yaml`` in the current directory and
parent directories, parses it, and resolves a relative ``kubeconfig``
against the config file's location. Every field can then be overridden
from the environment with the ``CLUSTER_INSPECTOR_`` prefix.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

import yaml

CONFIG_FILENAME = "cluster-inspector.yaml"
ENV_PREFIX = "CLUSTER_INSPECTOR_"


@dataclass(frozen=True)
class InspectorConfig:
    """Parsed cluster-inspector configuration."""

    config_path: Path | None = None
    kubeconfig: str | None = None
    context: str | None = None
    in_cluster: bool = False
    host: str = "127.0.0.1"
    port: int = 8080
    log_level: str = "INFO"


def find_config(start: Path | None = None) -> Path | None:
    """Nearest ``cluster-inspector.yaml`` at or above *start* (default: cwd)."""
    here = (start or Path.cwd()).resolve()
    return next(
        (d / CONFIG_FILENAME for d in (here, *here.parents) if (d / CONFIG_FILENAME).is_file()),
        None,
    )


def load_config(
    path: str | Path | None = None,
    *,
    auto_discover: bool = True,
) -> InspectorConfig:
    """Build an :class:`InspectorConfig` from YAML.

    An explicit *path* must exist. Without one the file is discovered
    upwards from the working directory unless *auto_discover* is off;
    when nothing is found every field keeps its default.
    """
    if path is None:
        discovered = find_config() if auto_discover else None
        return _parse_config(discovered) if discovered else InspectorConfig()

    explicit = Path(path).resolve()
    if not explicit.is_file():
        raise FileNotFoundError(f"Config file not found: {explicit}")
    return _parse_config(explicit)


def _parse_config(config_path: Path) -> InspectorConfig:
    """Read *config_path*; a relative ``kubeconfig`` is taken from its directory."""
    data = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError(
            f"Expected a YAML mapping in {config_path}, got {type(data).__name__}",
        )

    defaults = InspectorConfig()
    kubeconfig = data.get("kubeconfig")
    if kubeconfig is not None:
        kubeconfig = str((config_path.parent / Path(kubeconfig).expanduser()).resolve())

    return InspectorConfig(
        config_path=config_path,
        kubeconfig=kubeconfig,
        context=data.get("context"),
        in_cluster=bool(data.get("in_cluster", defaults.in_cluster)),
        host=str(data.get("host", defaults.host)),
        port=int(data.get("port", defaults.port)),
        log_level=str(data.get("log_level", defaults.log_level)).upper(),
    )


def apply_env_overrides(
    cfg: InspectorConfig, environ: dict[str, str] | None = None,
) -> InspectorConfig:
    """Return *cfg* with ``CLUSTER_INSPECTOR_<FIELD>`` variables applied."""
    env = os.environ if environ is None else environ
    overrides: dict[str, Any] = {}
    for fld in fields(cfg):
        if fld.name == "config_path":
            continue
        val = env.get(f"{ENV_PREFIX}{fld.name.upper()}")
        if val is None:
            continue
        if fld.name == "port":
            overrides[fld.name] = int(val)
        elif fld.name == "in_cluster":
            overrides[fld.name] = val.lower() in ("1", "true", "yes")
        elif fld.name == "log_level":
            overrides[fld.name] = val.upper()
        else:
            overrides[fld.name] = val
    return replace(cfg, **overrides)
