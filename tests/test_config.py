"""Tests for specquery.config -- option precedence and project config."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from specquery.config import load_project_config, resolve_options
from specquery.exceptions import ConfigError, InvalidUsageError


def _project(root: Path, data) -> None:
    (root / "specquery.json").write_text(
        data if isinstance(data, str) else json.dumps(data), encoding="utf-8"
    )


class TestLoadProjectConfig:
    def test_missing_returns_none(self, isolated_env: Path) -> None:
        assert load_project_config() is None

    def test_reads_cwd(self, isolated_env: Path) -> None:
        _project(isolated_env, {"schema": "openapi.yaml"})
        assert load_project_config() == {"schema": "openapi.yaml"}

    def test_explicit_directory(self, tmp_path: Path) -> None:
        _project(tmp_path, {"out": "src/api"})
        assert load_project_config(tmp_path) == {"out": "src/api"}

    def test_invalid_json_raises(self, isolated_env: Path) -> None:
        _project(isolated_env, "{broken")
        with pytest.raises(ConfigError, match="Invalid project config"):
            load_project_config()

    def test_non_object_raises(self, isolated_env: Path) -> None:
        _project(isolated_env, "[]")
        with pytest.raises(ConfigError, match="expected a JSON object"):
            load_project_config()


class TestResolveOptions:
    def test_defaults(self, isolated_env: Path) -> None:
        options = resolve_options(schema="openapi.yaml")
        assert options.schema_source == "openapi.yaml"
        assert options.out_dir == "examples/out"
        assert options.base_url is None
        assert options.group_by_tag is True
        assert options.generate_types is False
        assert options.openapi_ts_config is None
        assert options.dry_run is False
        assert options.extension == "ts"

    def test_missing_schema_raises(self, isolated_env: Path) -> None:
        with pytest.raises(InvalidUsageError, match="No OpenAPI schema given"):
            resolve_options()

    def test_project_config_layer(self, isolated_env: Path) -> None:
        _project(
            isolated_env,
            {
                "schema": "api.json",
                "out": "src/api",
                "group_by_tag": False,
                "generate_types": True,
                "base_url": "https://project",
            },
        )
        options = resolve_options()
        assert options.schema_source == "api.json"
        assert options.out_dir == "src/api"
        assert options.group_by_tag is False
        assert options.generate_types is True
        assert options.base_url == "https://project"

    def test_env_overrides_project(
        self, isolated_env: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        _project(isolated_env, {"schema": "api.json", "out": "src/api"})
        monkeypatch.setenv("SPECQUERY_OUT", "generated")
        monkeypatch.setenv("SPECQUERY_BASE_URL", "https://env")
        monkeypatch.setenv("SPECQUERY_OPENAPI_TS_CONFIG", "ts.json")
        options = resolve_options()
        assert options.schema_source == "api.json"
        assert options.out_dir == "generated"
        assert options.base_url == "https://env"
        assert options.openapi_ts_config == "ts.json"

    def test_cli_overrides_env(self, isolated_env: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SPECQUERY_SCHEMA", "env.yaml")
        monkeypatch.setenv("SPECQUERY_OUT", "generated")
        options = resolve_options(schema="cli.yaml", out="cli-out")
        assert options.schema_source == "cli.yaml"
        assert options.out_dir == "cli-out"

    def test_cli_false_overrides_project_true(self, isolated_env: Path) -> None:
        _project(isolated_env, {"schema": "api.json", "group_by_tag": True})
        assert resolve_options(group_by_tag=False).group_by_tag is False

    def test_dry_run_passed_through(self, isolated_env: Path) -> None:
        assert resolve_options(schema="a.json", dry_run=True).dry_run is True

    def test_invalid_project_value_raises(self, isolated_env: Path) -> None:
        _project(isolated_env, {"schema": "api.json", "group_by_tag": "sometimes"})
        with pytest.raises(ConfigError, match="Invalid generator options"):
            resolve_options()
