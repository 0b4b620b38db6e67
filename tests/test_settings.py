"""
Tests for environment settings parsing.
"""

from config import settings as django_settings
from settings import Settings


def test_list_properties_split_and_trim():
    settings = Settings(
        django_allowed_hosts="localhost, api.example.com ,",
        cors_allowed_origins="http://localhost:5173,  https://chat.example.com"
    )

    assert settings.allowed_hosts_list == ["localhost", "api.example.com"]
    assert settings.cors_origins_list == ["http://localhost:5173", "https://chat.example.com"]


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("CHAT_MODEL", "gemini-1.5-pro")
    monkeypatch.setenv("RELAY_TIMEOUT_SECONDS", "30")

    settings = Settings()

    assert settings.chat_model == "gemini-1.5-pro"
    assert settings.relay_timeout_seconds == 30.0


def test_django_settings_have_no_database():
    assert django_settings.DATABASES == {}
    assert not hasattr(django_settings, 'DEFAULT_AUTO_FIELD')
