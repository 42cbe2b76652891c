import pytest

from app.core.config import Settings, load_settings
from app.util.edc_helpers import CONSUMER, PROVIDER, get_base_url, with_context


def test_defaults():
    settings = Settings()

    assert settings.provider_management_url == "http://localhost:19193/management/v3"
    assert settings.consumer_management_url == "http://localhost:29193/management/v3"
    assert settings.health_timeout == 5
    assert settings.health_refetch_interval == 30


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("PROVIDER_MANAGEMENT_URL", "http://provider:19193/management/v3")
    monkeypatch.setenv("HEALTH_TIMEOUT", "2.5")
    monkeypatch.setenv("LOG_LEVEL", "")

    settings = load_settings()

    assert settings.provider_management_url == "http://provider:19193/management/v3"
    assert settings.health_timeout == 2.5
    assert settings.log_level == "INFO"


def test_base_url():
    settings = Settings(consumer_management_url="http://consumer/management/v3/")

    assert get_base_url(settings, PROVIDER, "/assets") == "http://localhost:19193/management/v3/assets"
    assert get_base_url(settings, CONSUMER, "/catalog/request") == "http://consumer/management/v3/catalog/request"
    with pytest.raises(ValueError):
        get_base_url(settings, "broker", "/assets")


def test_context_is_placed_first():
    framed = with_context({"@context": "ignored", "@type": "QuerySpec"})

    assert list(framed) == ["@context", "@type"]
    assert framed["@context"] == {"@vocab": "https://w3id.org/edc/v0.0.1/ns/"}


def test_collections_are_read_on_every_render_by_default(monkeypatch):
    assert Settings().collection_refetch_interval == 0

    monkeypatch.setenv("COLLECTION_REFETCH_INTERVAL", "15")

    assert load_settings().collection_refetch_interval == 15
