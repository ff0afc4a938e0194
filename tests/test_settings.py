"""Tests for configuration and feature flags."""

import pytest

from my_mcp_server.config import settings


class TestFeatureFlags:
    """Feature flag helpers."""

    def test_unknown_flag_raises(self):
        with pytest.raises(KeyError) as exc_info:
            settings.is_enabled("no_such_flag")

        assert "image_generation" in str(exc_info.value)

    def test_set_flag(self, monkeypatch):
        monkeypatch.setattr(settings, "FEATURE_FLAGS", {"image_generation": True})

        settings.set_flag("image_generation", False)

        assert settings.is_enabled("image_generation") is False
        assert settings.get_all_flags() == {"image_generation": False}

    def test_get_all_flags_is_a_copy(self):
        flags = settings.get_all_flags()
        flags["image_generation"] = not flags["image_generation"]

        assert settings.get_all_flags() != flags


class TestHfToken:
    """Token lookup."""

    def test_blank_token_is_none(self, monkeypatch):
        monkeypatch.setenv("HF_TOKEN", "   ")

        assert settings.get_hf_token() is None

    def test_token_read_per_call(self, monkeypatch):
        monkeypatch.delenv("HF_TOKEN", raising=False)
        assert settings.get_hf_token() is None

        monkeypatch.setenv("HF_TOKEN", "hf_abc")
        assert settings.get_hf_token() == "hf_abc"


class TestEnvFlag:
    """Boolean environment parsing."""

    @pytest.mark.parametrize("raw", ["1", "true", "TRUE", " yes ", "on"])
    def test_truthy_values(self, monkeypatch, raw):
        monkeypatch.setenv("MY_MCP_TEST_FLAG", raw)

        assert settings._env_flag("MY_MCP_TEST_FLAG", False) is True

    @pytest.mark.parametrize("raw", ["0", "false", "no", "off", ""])
    def test_falsy_values(self, monkeypatch, raw):
        monkeypatch.setenv("MY_MCP_TEST_FLAG", raw)

        assert settings._env_flag("MY_MCP_TEST_FLAG", True) is False

    def test_unset_uses_default(self, monkeypatch):
        monkeypatch.delenv("MY_MCP_TEST_FLAG", raising=False)

        assert settings._env_flag("MY_MCP_TEST_FLAG", True) is True
