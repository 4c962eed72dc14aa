"""Unit tests for configuration loading and validation."""

import pytest
from pydantic import ValidationError

from recipe_assistant.config import Settings, get_settings, settings


class TestSettingsDefaults:
    """Tests for environment-driven defaults."""

    def test_defaults(self, monkeypatch):
        """Test defaults apply when the environment is empty."""
        for name in ("REASONING_PROVIDER", "OPENROUTER_BASE_URL", "MIN_SCALE_FACTOR",
                     "MAX_SCALE_FACTOR", "CORS_ORIGINS", "LOG_LEVEL", "SEED_DATA_PATH"):
            monkeypatch.delenv(name, raising=False)
        config = Settings()
        assert config.REASONING_PROVIDER == "openrouter"
        assert config.OPENROUTER_BASE_URL == "https://openrouter.ai/api/v1"
        assert config.MIN_SCALE_FACTOR == 0.5
        assert config.MAX_SCALE_FACTOR == 10
        assert config.CORS_ORIGINS == ["http://localhost:3000", "http://localhost:5173"]
        assert config.SEED_DATA_PATH is None

    def test_environment_overrides(self, monkeypatch):
        """Test values are read from the environment at construction."""
        monkeypatch.setenv("REASONING_PROVIDER", " GEMINI ")
        monkeypatch.setenv("GEMINI_API_KEY", "gkey")
        monkeypatch.setenv("MAX_SCALE_FACTOR", "4")
        monkeypatch.setenv("CORS_ORIGINS", "https://a.example, https://b.example,")
        monkeypatch.setenv("LOG_LEVEL", "debug")
        config = Settings()
        assert config.REASONING_PROVIDER == "gemini"
        assert config.reasoning_api_key() == "gkey"
        assert config.MAX_SCALE_FACTOR == 4.0
        assert config.CORS_ORIGINS == ["https://a.example", "https://b.example"]
        assert config.LOG_LEVEL == "DEBUG"

    def test_get_settings_returns_global(self):
        assert get_settings() is settings


class TestSettingsValidation:
    """Tests for rejected configuration."""

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError):
            Settings(LOG_LEVEL="LOUD")

    def test_base_url_scheme_required(self):
        with pytest.raises(ValidationError):
            Settings(OPENROUTER_BASE_URL="openrouter.ai/api/v1")

    def test_base_url_trailing_slash_removed(self):
        assert Settings(OPENROUTER_BASE_URL="https://x.example/v1/").OPENROUTER_BASE_URL == "https://x.example/v1"

    def test_scale_range_must_be_ordered(self):
        with pytest.raises(ValidationError):
            Settings(MIN_SCALE_FACTOR=5, MAX_SCALE_FACTOR=2)

    def test_timeout_bounds(self):
        with pytest.raises(ValidationError):
            Settings(API_TIMEOUT=0)

    def test_openrouter_key_used_by_default(self):
        config = Settings(REASONING_PROVIDER="openrouter", OPENROUTER_API_KEY="ork", GEMINI_API_KEY="g")
        assert config.reasoning_api_key() == "ork"
