"""
config.py — Konfiguracja aplikacji przez zmienne środowiskowe.
Wszystkie zmienne mają prefiks FCFRAMES_.
"""
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Hub (weryfikacja podpisanych akcji ramek, HTTP API)
    hub_url: str = "https://nemes.farcaster.xyz:2281"
    hub_timeout_ms: int = 10_000

    # Pobieranie stron z ramkami (inspect)
    fetch_timeout_ms: int = 10_000
    user_agent: str = "fcframes/0.1.0"

    # Logging
    log_level: str = "INFO"

    # App
    app_title: str = "fcframes"
    app_version: str = "0.1.0"

    model_config = SettingsConfigDict(env_prefix="FCFRAMES_", env_file=".env", extra="ignore")
