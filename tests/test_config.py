"""
Tests for configuration objects.
"""

import dataclasses

import pytest

from player_chat import config
from player_chat.config import ModelConfig, SourceConfig, validate_config


class TestModelConfig:

    def test_from_env_uses_module_settings(self, monkeypatch):
        monkeypatch.setattr(config, "OLLAMA_HOST", "http://gpu-box:11434")
        monkeypatch.setattr(config, "AGENT_MODEL", "qwen2.5:14b")
        monkeypatch.setattr(config, "OLLAMA_API_KEY", "")

        model_config = ModelConfig.from_env()

        assert model_config.endpoint_url == "http://gpu-box:11434"
        assert model_config.model_name == "qwen2.5:14b"
        assert model_config.credential is None

    def test_model_override(self):
        assert ModelConfig.from_env(model="mistral").model_name == "mistral"

    def test_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            ModelConfig(endpoint_url="http://x", model_name="m").timeout = 1


class TestSourceConfig:

    def test_defaults(self):
        source_config = SourceConfig()
        assert source_config.sportsdb_key == "3"
        assert source_config.wikipedia_url.endswith("/w/api.php")


class TestValidateConfig:

    def test_defaults_are_valid(self):
        assert validate_config()

    def test_rejects_bad_budget(self, monkeypatch):
        monkeypatch.setattr(config, "MAX_ITERATIONS", 0)
        assert not validate_config()

    def test_rejects_host_without_scheme(self, monkeypatch):
        monkeypatch.setattr(config, "OLLAMA_HOST", "localhost:11434")
        assert not validate_config()
