"""Tests for repo_harvest.pipeline.config ensuring env overrides and defaults work.

Run with coverage to validate configuration handling:
    pytest tests/test_config.py --maxfail=1 -v --cov=repo_harvest.pipeline.config --cov-report=term-missing
"""

from dataclasses import FrozenInstanceError
from importlib import reload
import shlex
from pathlib import Path

import pytest

import repo_harvest.pipeline.config as config
from repo_harvest.catalog import Catalog
from repo_harvest.errors import ConfigError


def test_config_defaults_are_present():
    assert isinstance(config.REPOS, list) and config.REPOS
    assert config.CLONE_URL_TEMPLATE.startswith("https://github.com/")
    assert config.DIAGNOSTIC_LINES > 0
    assert config.EXPORT_MODE in config.EXPORT_MODES


def test_embedded_catalog_is_well_formed():
    catalog = Catalog.from_strings(config.REPOS)
    assert len(catalog) == len(config.REPOS)


def test_resolve_settings_freezes_constants():
    settings = config.resolve_settings()
    assert settings.acquisition_root == Path(config.ACQUISITION_ROOT)
    assert settings.export_root == Path(config.EXPORT_ROOT)
    assert settings.catalog.entries()[0].full_name == config.REPOS[0]
    assert settings.flatten_command == tuple(shlex.split(config.FLATTEN_COMMAND))
    with pytest.raises(FrozenInstanceError):
        settings.export_mode = "remote"  # frozen dataclass


def test_resolve_settings_accepts_custom_repos():
    settings = config.resolve_settings(["octocat/Hello-World"])
    assert [ref.full_name for ref in settings.catalog.entries()] == ["octocat/Hello-World"]


def test_resolve_settings_rejects_malformed_catalog():
    with pytest.raises(ConfigError):
        config.resolve_settings(["not-a-valid-ref"])


def test_zero_timeout_disables_limit(monkeypatch):
    monkeypatch.setattr(config, "CLONE_TIMEOUT_SEC", 0)
    monkeypatch.setattr(config, "EXPORT_TIMEOUT_SEC", 45)
    settings = config.resolve_settings(["a/b"])
    assert settings.clone_timeout is None
    assert settings.export_timeout == 45.0


def test_invalid_export_mode_is_a_config_error(monkeypatch):
    monkeypatch.setattr(config, "EXPORT_MODE", "sideways")
    with pytest.raises(ConfigError):
        config.resolve_settings(["a/b"])



@pytest.mark.parametrize(
    "template",
    ["https://github.com/{repo}.git", "https://github.com/{0}.git", "https://github.com/{owner.x}/{name}", "https://github.com/{owner"],
)
def test_unusable_clone_url_template_is_a_config_error(monkeypatch, template):
    monkeypatch.setattr(config, "CLONE_URL_TEMPLATE", template)
    with pytest.raises(ConfigError) as excinfo:
        config.resolve_settings(["a/b"])
    assert "clone URL template" in str(excinfo.value)


def test_clone_url_template_may_use_any_placeholder(monkeypatch):
    monkeypatch.setattr(config, "CLONE_URL_TEMPLATE", "git@example.com:{full_name}.git")
    settings = config.resolve_settings(["a/b"])
    assert settings.catalog.entries()[0].clone_url(settings.clone_url_template) == "git@example.com:a/b.git"


def test_settings_field_defaults_match_module_constants():
    settings = config.HarvestSettings(
        catalog=Catalog.from_strings(["a/b"]),
        acquisition_root=Path(config.ACQUISITION_ROOT),
        export_root=Path(config.EXPORT_ROOT),
    )
    assert settings == config.resolve_settings(["a/b"])

def test_env_overrides(monkeypatch):
    monkeypatch.setenv("HARVEST_FLATTEN_COMMAND", "repomix --style plain")
    monkeypatch.setenv("HARVEST_REQUIRE_CLONE_MARKER", "1")
    monkeypatch.setenv("HARVEST_CLONE_DIR", "/tmp/clones")
    reloaded = reload(config)
    try:
        settings = reloaded.resolve_settings(["a/b"])
        assert settings.flatten_command == ("repomix", "--style", "plain")
        assert settings.require_clone_marker is True
        assert settings.acquisition_root == Path("/tmp/clones")
    finally:
        monkeypatch.delenv("HARVEST_FLATTEN_COMMAND", raising=False)
        monkeypatch.delenv("HARVEST_REQUIRE_CLONE_MARKER", raising=False)
        monkeypatch.delenv("HARVEST_CLONE_DIR", raising=False)
        reload(config)
