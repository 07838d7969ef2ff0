"""
config.py — Konfiguracja aplikacji przez zmienne środowiskowe.
Wszystkie zmienne mają prefiks FORM_GUARD_.
"""
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Locale aktywny dla nowych instancji silnika
    default_locale: str = "en"

    # Katalog z plikami locales/<klucz>.json (ładowane przy starcie)
    locale_dir: str = "locales"

    # Nadpisania komunikatów na poziomie instancji (JSON: {"required": "..."})
    messages: dict[str, str] = {}

    # Logging
    log_level: str = "INFO"

    # App
    app_title: str = "FormGuard"
    app_version: str = "2.1.0"

    model_config = SettingsConfigDict(env_prefix="FORM_GUARD_", env_file=".env", extra="ignore")
