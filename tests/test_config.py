from config import Settings


def test_settings_read_prefixed_environment(monkeypatch):
    monkeypatch.setenv("FCFRAMES_HUB_URL", "https://hub.example.test:2281")
    monkeypatch.setenv("FCFRAMES_HUB_TIMEOUT_MS", "2500")

    settings = Settings(_env_file=None)

    assert settings.hub_url == "https://hub.example.test:2281"
    assert settings.hub_timeout_ms == 2500
    assert settings.log_level == "INFO"
