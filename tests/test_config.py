"""Tests for configuration loading."""

import pytest
from pydantic import ValidationError

from osshunter.config import HunterConfig, get_config, set_config


@pytest.fixture(autouse=True)
def isolated(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))


class TestDefaults:
    def test_defaults(self):
        cfg = HunterConfig.load()
        assert cfg.scan.level == 2
        assert cfg.scan.concurrency == 10
        assert cfg.scan.timeout == 6.0
        assert cfg.render.timeout == 15.0
        assert cfg.probe.object_suffix == ".ppa"

    def test_invalid_level(self):
        with pytest.raises(ValidationError):
            HunterConfig(scan={"level": 4})


class TestFileLoading:
    def test_nested_key(self, tmp_path):
        path = tmp_path / "custom.yaml"
        path.write_text("osshunter:\n  scan:\n    concurrency: 3\n  render:\n    timeout: 5\n")
        cfg = HunterConfig.load(path)
        assert cfg.scan.concurrency == 3
        assert cfg.render.timeout == 5.0

    def test_default_location(self, tmp_path):
        (tmp_path / "osshunter.yaml").write_text("scan:\n  level: 1\n")
        assert HunterConfig.load().scan.level == 1

    def test_save_and_load(self, tmp_path):
        cfg = HunterConfig()
        cfg.probe.object_suffix = ".txt"
        path = tmp_path / "conf" / "config.yaml"
        cfg.save(path)
        assert HunterConfig.load(path).probe.object_suffix == ".txt"

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert HunterConfig.load(path).scan.level == 2


class TestEnvironment:
    def test_nested_env_override(self, monkeypatch):
        monkeypatch.setenv("OSSHUNTER_SCAN__CONCURRENCY", "4")
        assert HunterConfig().scan.concurrency == 4


class TestGlobalConfig:
    def test_set_and_get(self):
        cfg = HunterConfig()
        set_config(cfg)
        assert get_config() is cfg
