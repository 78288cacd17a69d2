"""Tests for user configuration and taxonomy path resolution."""

from pathlib import Path

import pytest

from kontrolleur.config import (
    TAXONOMY_ENV_VAR,
    default_verbose,
    load_config,
    resolve_taxonomy_path,
)


@pytest.fixture(autouse=True)
def _clear_env(monkeypatch):
    monkeypatch.delenv(TAXONOMY_ENV_VAR, raising=False)


class TestLoadConfig:

    def test_missing_file(self, tmp_path):
        assert load_config(tmp_path / "config.yaml") == {}

    def test_reads_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("taxonomy: /etc/tax.yaml\nverbose: true\n", encoding="utf-8")
        assert load_config(path) == {"taxonomy": "/etc/tax.yaml", "verbose": True}

    def test_invalid_yaml_is_ignored(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("taxonomy: [oops\n", encoding="utf-8")
        assert load_config(path) == {}

    def test_non_mapping_is_ignored(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        assert load_config(path) == {}


class TestResolveTaxonomyPath:
    """Precedence: CLI > env > config file > bundled."""

    def test_bundled_by_default(self):
        assert resolve_taxonomy_path(None, {}) is None

    def test_config_file(self):
        assert resolve_taxonomy_path(None, {"taxonomy": "/cfg.yaml"}) == Path("/cfg.yaml")

    def test_env_beats_config(self, monkeypatch):
        monkeypatch.setenv(TAXONOMY_ENV_VAR, "/env.yaml")
        assert resolve_taxonomy_path(None, {"taxonomy": "/cfg.yaml"}) == Path("/env.yaml")

    def test_cli_beats_env(self, monkeypatch):
        monkeypatch.setenv(TAXONOMY_ENV_VAR, "/env.yaml")
        assert resolve_taxonomy_path("/cli.yaml", {"taxonomy": "/cfg.yaml"}) == Path("/cli.yaml")


class TestDefaultVerbose:

    def test_off_by_default(self):
        assert default_verbose({}) is False

    def test_from_config(self):
        assert default_verbose({"verbose": True}) is True

    @pytest.mark.parametrize("value", ["false", "true", 1, "yes"])
    def test_non_boolean_ignored(self, value):
        assert default_verbose({"verbose": value}) is False

    def test_quoted_false_in_file(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text('verbose: "false"\n', encoding="utf-8")
        assert default_verbose(load_config(path)) is False
