"""Tests for src/config.py — FolioConfig, TOML loading, env and CLI overrides."""

from pathlib import Path

import pytest
from folio.blog.collection import SortOrder
from folio.config import FolioConfig, load_config, merge_cli_overrides


@pytest.fixture(autouse=True)
def _isolate(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("folio.config.GLOBAL_CONFIG_PATH", tmp_path / "no-global.toml")
    monkeypatch.delenv("FOLIO_CONTENT_DIR", raising=False)
    monkeypatch.delenv("FOLIO_SORT_ORDER", raising=False)


class TestFolioConfigDefaults:
    def test_defaults(self):
        cfg = FolioConfig()
        assert cfg.content.directory == "content/blog"
        assert cfg.content.sort_order is SortOrder.ASC
        assert cfg.content_dir == Path("content/blog")


class TestLoadConfig:
    def test_no_file_uses_defaults(self):
        assert load_config() == FolioConfig()

    def test_loads_cwd_file(self, tmp_path):
        (tmp_path / ".folio.toml").write_text(
            '[content]\ndirectory = "posts"\nsort_order = "desc"\n'
        )
        cfg = load_config()
        assert cfg.content.directory == "posts"
        assert cfg.content.sort_order is SortOrder.DESC

    def test_explicit_path(self, tmp_path):
        path = tmp_path / "custom.toml"
        path.write_text('[content]\ndirectory = "elsewhere"\n')
        assert load_config(path).content.directory == "elsewhere"

    def test_explicit_missing_path(self, tmp_path):
        assert load_config(tmp_path / "missing.toml") == FolioConfig()

    def test_global_config(self, tmp_path, monkeypatch):
        global_path = tmp_path / "global.toml"
        global_path.write_text('[content]\ndirectory = "from-global"\n')
        monkeypatch.setattr("folio.config.GLOBAL_CONFIG_PATH", global_path)
        assert load_config().content.directory == "from-global"

    def test_invalid_toml_falls_back(self, tmp_path):
        (tmp_path / ".folio.toml").write_text("not = [valid")
        assert load_config() == FolioConfig()

    def test_invalid_value_falls_back(self, tmp_path):
        (tmp_path / ".folio.toml").write_text('[content]\nsort_order = "sideways"\n')
        assert load_config().content.sort_order is SortOrder.ASC


class TestEnvOverrides:
    def test_env_vars(self, monkeypatch):
        monkeypatch.setenv("FOLIO_CONTENT_DIR", "/srv/blog")
        monkeypatch.setenv("FOLIO_SORT_ORDER", "DESC")
        cfg = load_config()
        assert cfg.content.directory == "/srv/blog"
        assert cfg.content.sort_order is SortOrder.DESC

    def test_env_overrides_file(self, tmp_path, monkeypatch):
        (tmp_path / ".folio.toml").write_text('[content]\ndirectory = "posts"\n')
        monkeypatch.setenv("FOLIO_CONTENT_DIR", "env-posts")
        assert load_config().content.directory == "env-posts"

    def test_invalid_env_keeps_file_values(self, tmp_path, monkeypatch):
        (tmp_path / ".folio.toml").write_text('[content]\ndirectory = "posts"\n')
        monkeypatch.setenv("FOLIO_SORT_ORDER", "random")
        cfg = load_config()
        assert cfg.content.directory == "posts"
        assert cfg.content.sort_order is SortOrder.ASC


class TestMergeCliOverrides:
    def test_overrides_set_values(self):
        cfg = merge_cli_overrides(
            FolioConfig(), content_dir=Path("cli-posts"), sort_order=SortOrder.DESC
        )
        assert cfg.content.directory == "cli-posts"
        assert cfg.content.sort_order is SortOrder.DESC

    def test_none_leaves_config(self):
        base = FolioConfig.model_validate({"content": {"directory": "keep"}})
        cfg = merge_cli_overrides(base, content_dir=None, sort_order=None)
        assert cfg.content.directory == "keep"

    def test_unknown_keys_ignored(self):
        assert merge_cli_overrides(FolioConfig(), verbose=True) == FolioConfig()
