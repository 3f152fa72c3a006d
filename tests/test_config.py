"""Tests for the cluster-inspector config loader (cluster-inspector.yaml)."""

from pathlib import Path

import pytest

from cluster_inspector.config import (
    InspectorConfig,
    apply_env_overrides,
    find_config,
    load_config,
)

# --- find_config ---


class TestFindConfig:
    def test_finds_in_start_dir(self, tmp_path: Path):
        cfg = tmp_path / "cluster-inspector.yaml"
        cfg.write_text("context: dev\n", encoding="utf-8")
        assert find_config(tmp_path) == cfg

    def test_finds_in_parent(self, tmp_path: Path):
        cfg = tmp_path / "cluster-inspector.yaml"
        cfg.write_text("context: dev\n", encoding="utf-8")
        child = tmp_path / "sub" / "deep"
        child.mkdir(parents=True)
        assert find_config(child) == cfg

    def test_nearest_file_wins(self, tmp_path: Path):
        (tmp_path / "cluster-inspector.yaml").write_text("context: outer\n", encoding="utf-8")
        inner = tmp_path / "inner"
        inner.mkdir()
        cfg = inner / "cluster-inspector.yaml"
        cfg.write_text("context: inner\n", encoding="utf-8")
        assert find_config(inner) == cfg

    def test_returns_none_when_missing(self, tmp_path: Path):
        assert find_config(tmp_path) is None

    def test_ignores_directories_named_config(self, tmp_path: Path):
        """A directory named cluster-inspector.yaml should not match."""
        (tmp_path / "cluster-inspector.yaml").mkdir()
        assert find_config(tmp_path) is None


# --- load_config ---


class TestLoadConfig:
    def test_explicit_path(self, tmp_path: Path):
        cfg_path = tmp_path / "cluster-inspector.yaml"
        cfg_path.write_text(
            "kubeconfig: ./kube/config\ncontext: staging\nport: 9000\nlog_level: debug\n",
            encoding="utf-8",
        )
        cfg = load_config(cfg_path)
        assert cfg.config_path == cfg_path
        assert cfg.kubeconfig == str((tmp_path / "kube" / "config").resolve())
        assert cfg.context == "staging"
        assert cfg.port == 9000
        assert cfg.log_level == "DEBUG"

    def test_explicit_path_not_found(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError, match="not found"):
            load_config(tmp_path / "nope.yaml")

    def test_auto_discover(self, tmp_path: Path, monkeypatch):
        cfg_path = tmp_path / "cluster-inspector.yaml"
        cfg_path.write_text("in_cluster: true\n", encoding="utf-8")
        child = tmp_path / "sub"
        child.mkdir()
        monkeypatch.chdir(child)
        cfg = load_config()
        assert cfg.config_path == cfg_path
        assert cfg.in_cluster is True

    def test_auto_discover_disabled(self, tmp_path: Path, monkeypatch):
        cfg_path = tmp_path / "cluster-inspector.yaml"
        cfg_path.write_text("context: dev\n", encoding="utf-8")
        monkeypatch.chdir(tmp_path)
        cfg = load_config(auto_discover=False)
        assert cfg == InspectorConfig()

    def test_absolute_kubeconfig_kept(self, tmp_path: Path):
        kube = tmp_path / "elsewhere" / "config"
        cfg_path = tmp_path / "cluster-inspector.yaml"
        cfg_path.write_text(f"kubeconfig: {kube}\n", encoding="utf-8")
        assert load_config(cfg_path).kubeconfig == str(kube.resolve())

    def test_empty_yaml_file(self, tmp_path: Path):
        cfg_path = tmp_path / "cluster-inspector.yaml"
        cfg_path.write_text("", encoding="utf-8")
        cfg = load_config(cfg_path)
        assert cfg.config_path == cfg_path
        assert cfg.kubeconfig is None
        assert cfg.port == 8080

    def test_non_mapping_raises(self, tmp_path: Path):
        cfg_path = tmp_path / "cluster-inspector.yaml"
        cfg_path.write_text("- item\n- item2\n", encoding="utf-8")
        with pytest.raises(ValueError, match="mapping"):
            load_config(cfg_path)


# --- environment overrides ---


class TestEnvOverrides:
    def test_typed_overrides(self):
        cfg = apply_env_overrides(InspectorConfig(), {
            "CLUSTER_INSPECTOR_PORT": "9100",
            "CLUSTER_INSPECTOR_IN_CLUSTER": "yes",
            "CLUSTER_INSPECTOR_CONTEXT": "prod",
            "CLUSTER_INSPECTOR_LOG_LEVEL": "warning",
        })
        assert cfg.port == 9100
        assert cfg.in_cluster is True
        assert cfg.context == "prod"
        assert cfg.log_level == "WARNING"

    def test_unset_variables_leave_config_alone(self):
        base = InspectorConfig(context="dev")
        assert apply_env_overrides(base, {}) == base

    def test_reads_process_environment(self, monkeypatch):
        monkeypatch.setenv("CLUSTER_INSPECTOR_HOST", "0.0.0.0")
        assert apply_env_overrides(InspectorConfig()).host == "0.0.0.0"


class TestInspectorConfigFrozen:
    def test_frozen(self):
        cfg = InspectorConfig()
        with pytest.raises(AttributeError):
            cfg.context = "something"  # type: ignore[misc]
