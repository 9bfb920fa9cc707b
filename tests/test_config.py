# =============================================================================
# tests/test_config.py - Settings Tests
# =============================================================================

import pytest
from pydantic import ValidationError

from app.config import Settings


def test_public_config_has_url_and_anon_key(make_settings):
    public = make_settings().public_store_config()

    assert public.url == "https://test-project.supabase.co"
    assert public.anon_key == "test-anon-key"


@pytest.mark.parametrize("missing", ["SUPABASE_URL", "SUPABASE_ANON_KEY"])
def test_public_config_is_all_or_nothing(make_settings, missing):
    assert make_settings(**{missing: None}).public_store_config() is None


def test_service_key_is_secret(make_settings):
    settings = make_settings()

    assert "test-service-key" not in repr(settings)
    assert settings.service_credentials().service_key.get_secret_value() == "test-service-key"


def test_empty_env_value_counts_as_missing(monkeypatch):
    monkeypatch.setenv("SUPABASE_URL", "")
    monkeypatch.setenv("SUPABASE_SERVICE_ROLE_KEY", "")

    settings = Settings(_env_file=None)

    assert settings.SUPABASE_URL is None
    assert not settings.has_supabase_url
    assert not settings.has_service_key
    assert settings.service_credentials() is None


def test_defaults(monkeypatch):
    for name in ("PORT", "ALLOWED_ORIGIN", "API_RATE_LIMIT", "SUBMIT_RATE_LIMIT"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings(_env_file=None)

    assert settings.PORT == 3000
    assert settings.cors_origins_list == ["*"]
    assert (settings.API_RATE_LIMIT, settings.API_RATE_WINDOW_SECONDS) == (300, 900)
    assert (settings.SUBMIT_RATE_LIMIT, settings.SUBMIT_RATE_WINDOW_SECONDS) == (5, 60)


def test_cors_origins_are_split(make_settings):
    settings = make_settings(ALLOWED_ORIGIN="https://a.com, https://b.com")

    assert settings.cors_origins_list == ["https://a.com", "https://b.com"]


def test_settings_are_frozen(make_settings):
    settings = make_settings()

    with pytest.raises(ValidationError):
        settings.PORT = 8080
