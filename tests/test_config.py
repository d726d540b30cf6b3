# =============================================================================
# tests/test_config.py - Settings Tests
# =============================================================================

import logging

import pytest
from pydantic import ValidationError

from app.config import Settings, get_settings


class TestSettings:
    """Tests for environment-driven settings."""

    def test_defaults(self, monkeypatch):
        for name in ("DEBUG", "MAX_TRANSFORMATION_DEPTH", "THROW_WHEN_MAX_DEPTH_REACHED"):
            monkeypatch.delenv(name, raising=False)

        settings = Settings(_env_file=None)

        assert settings.MAX_TRANSFORMATION_DEPTH is None
        assert settings.THROW_WHEN_MAX_DEPTH_REACHED is False
        assert settings.REQUEST_PARTIALS_ENABLED is True
        assert settings.log_level == logging.INFO

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("MAX_TRANSFORMATION_DEPTH", "3")
        monkeypatch.setenv("THROW_WHEN_MAX_DEPTH_REACHED", "true")
        monkeypatch.setenv("DEBUG", "true")

        settings = Settings(_env_file=None)

        assert settings.MAX_TRANSFORMATION_DEPTH == 3
        assert settings.THROW_WHEN_MAX_DEPTH_REACHED is True
        assert settings.log_level == logging.DEBUG

    def test_negative_depth_rejected(self, monkeypatch):
        monkeypatch.setenv("MAX_TRANSFORMATION_DEPTH", "-1")

        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_environment_helpers(self, monkeypatch):
        monkeypatch.setenv("ENVIRONMENT", "production")

        settings = Settings(_env_file=None)

        assert settings.is_production
        assert not settings.is_development

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()
