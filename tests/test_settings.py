from wayside.core.settings import Settings


def test_settings_from_environment(monkeypatch):
    monkeypatch.setenv("GOOGLE_MAPS_API_KEY", "AIza-test")
    monkeypatch.setenv("ALLOWED_ORIGINS", "https://a.example, https://b.example")
    monkeypatch.setenv("SEARCH_TIMEOUT_SECONDS", "2.5")
    monkeypatch.setenv("MAX_CONCURRENT_SEARCHES", "3")

    settings = Settings(_env_file=None)

    assert settings.GOOGLE_MAPS_API_KEY == "AIza-test"
    assert settings.cors_origins == ["https://a.example", "https://b.example"]
    assert settings.SEARCH_TIMEOUT_SECONDS == 2.5
    assert settings.MAX_CONCURRENT_SEARCHES == 3


def test_settings_defaults(monkeypatch):
    for name in ("GOOGLE_MAPS_API_KEY", "ALLOWED_ORIGINS", "SEARCH_TIMEOUT_SECONDS"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings(_env_file=None)

    assert settings.GOOGLE_MAPS_API_KEY is None
    assert settings.cors_origins == ["*"]
    assert settings.REQUEST_TIMEOUT_SECONDS == 10.0
    assert settings.MAX_RESPONSE_BYTES == 1_048_576
