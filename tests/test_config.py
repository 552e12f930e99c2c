"""Tests for service configuration loading."""

import json

import pytest

from domainer.config import CONFIG_ENV_VAR, Config, load_config


class TestConfig:

    def test_defaults(self):
        config = Config()
        assert config.storage.backend == "yaml"
        assert config.registry.strict is False
        assert config.server.port == 8060

    def test_from_dict_partial(self):
        config = Config.from_dict({"storage": {"backend": "sqlite"}, "registry": {"strict": True}})
        assert config.storage.backend == "sqlite"
        assert config.storage.db_path == "domainer.db"
        assert config.registry.strict is True
        assert config.logging.level == "INFO"

    def test_from_dict_unknown_key(self):
        with pytest.raises(TypeError):
            Config.from_dict({"storage": {"engine": "x"}})

    def test_from_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("storage:\n  backend: memory\nlogging:\n  level: DEBUG\n", encoding="utf-8")
        config = Config.from_yaml(path)
        assert config.storage.backend == "memory"
        assert config.logging.level == "DEBUG"

    def test_from_empty_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("", encoding="utf-8")
        assert Config.from_yaml(path) == Config()

    def test_from_json(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"server": {"port": 9000}}), encoding="utf-8")
        assert Config.from_json(path).server.port == 9000


class TestLoadConfig:

    def test_explicit_path(self, tmp_path):
        path = tmp_path / "custom.yaml"
        path.write_text("server:\n  port: 9100\n", encoding="utf-8")
        assert load_config(path).server.port == 9100

    def test_explicit_missing_path(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "missing.yaml")

    def test_env_var(self, tmp_path, monkeypatch):
        path = tmp_path / "env.json"
        path.write_text(json.dumps({"registry": {"strict": True}}), encoding="utf-8")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(path))
        assert load_config().registry.strict is True

    def test_falls_back_to_defaults(self, tmp_path, monkeypatch):
        monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
        monkeypatch.chdir(tmp_path)
        assert load_config() == Config()
