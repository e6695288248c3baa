"""Tests for configuration module."""

from __future__ import annotations

import pytest

from core.config import Settings, _ENV_PROFILES, get_settings


@pytest.fixture(autouse=True)
def _fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_settings_dataclass():
    s = Settings()
    assert s.app_env == "dev"
    assert s.log_level == "INFO"
    assert s.rules_path is None
    assert s.request_id_header_name == "X-Request-ID"


def test_settings_frozen():
    s = Settings()
    try:
        s.app_env = "production"
        assert False, "Should raise"
    except AttributeError:
        pass


def test_settings_is_production():
    s = Settings(app_env="production")
    assert s.is_production is True
    assert s.is_dev is False


def test_settings_is_dev():
    s = Settings(app_env="dev")
    assert s.is_dev is True
    assert s.is_production is False


def test_env_profiles_exist():
    assert "dev" in _ENV_PROFILES
    assert "staging" in _ENV_PROFILES
    assert "production" in _ENV_PROFILES


def test_dev_profile_debug_logging():
    assert _ENV_PROFILES["dev"]["log_level"] == "DEBUG"


def test_get_settings_profile_defaults(monkeypatch):
    monkeypatch.setenv("APP_ENV", "production")
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.delenv("CORS_ORIGINS", raising=False)
    s = get_settings()
    assert s.is_production
    assert s.log_level == "WARNING"
    assert s.cors_origins == []


def test_get_settings_uses_env(monkeypatch):
    monkeypatch.setenv("APP_ENV", "staging")
    monkeypatch.setenv("LOG_LEVEL", "ERROR")
    monkeypatch.setenv("RULES_PATH", "/etc/planner/rules.json")
    monkeypatch.setenv("CORS_ORIGINS", "https://a.example, https://b.example,")
    s = get_settings()
    assert s.app_env == "staging"
    assert s.log_level == "ERROR"
    assert s.rules_path == "/etc/planner/rules.json"
    assert s.cors_origins == ["https://a.example", "https://b.example"]


def test_unknown_env_falls_back_to_dev_profile(monkeypatch):
    monkeypatch.setenv("APP_ENV", "qa")
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.delenv("RULES_PATH", raising=False)
    s = get_settings()
    assert s.app_env == "qa"
    assert s.log_level == "DEBUG"
    assert s.rules_path is None


def test_get_settings_cached(monkeypatch):
    monkeypatch.setenv("APP_ENV", "dev")
    assert get_settings() is get_settings()
