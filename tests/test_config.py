import pytest

from hospital_locator.core import config


def setup_function(function):
    config.get_settings.cache_clear()


def teardown_function(function):
    config.get_settings.cache_clear()


@pytest.fixture(autouse=True)
def no_dotenv(monkeypatch):
    monkeypatch.setattr(config, "load_dotenv", lambda: None)


def test_get_settings_reads_env(monkeypatch):
    monkeypatch.setenv("DATA_GOV_API_KEY", "abc123")
    monkeypatch.setenv("DATA_GOV_BASE_URL", "https://example.test/resource/x")
    monkeypatch.setenv("DATA_GOV_TIMEOUT_SECONDS", "7.5")
    monkeypatch.setenv("PORT", "8100")

    settings = config.get_settings()

    assert settings.data_gov_api_key == "abc123"
    assert settings.data_gov_base_url == "https://example.test/resource/x"
    assert settings.request_timeout == 7.5
    assert settings.port == 8100


def test_get_settings_warns_when_missing(monkeypatch, caplog):
    monkeypatch.delenv("DATA_GOV_API_KEY", raising=False)
    monkeypatch.delenv("DATA_GOV_BASE_URL", raising=False)
    monkeypatch.delenv("DATA_GOV_TIMEOUT_SECONDS", raising=False)
    monkeypatch.delenv("PORT", raising=False)

    with caplog.at_level("WARNING"):
        settings = config.get_settings()

    assert "DATA_GOV_API_KEY is not configured" in " ".join(caplog.messages)
    assert settings.data_gov_api_key == ""
    assert settings.data_gov_base_url == config.DEFAULT_BASE_URL
    assert settings.request_timeout is None
    assert settings.port == 5000


def test_get_settings_rejects_bad_port(monkeypatch):
    monkeypatch.setenv("DATA_GOV_API_KEY", "abc123")
    monkeypatch.setenv("PORT", "eighty")

    with pytest.raises(config.ConfigError):
        config.get_settings()


def test_get_settings_is_cached(monkeypatch):
    monkeypatch.setenv("DATA_GOV_API_KEY", "first")
    first = config.get_settings()
    monkeypatch.setenv("DATA_GOV_API_KEY", "second")

    assert config.get_settings() is first
