"""
Adapter: JSON locale loader
Ładuje pliki locales/<klucz>.json (płaska mapa reguła -> szablon) do rejestru.

Format pliku:
    {"required": "To pole jest wymagane.", "minLength": "Co najmniej {min} znaków."}
"""
from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from errors import ConfigurationError
from ports.locale_registry import LocaleRegistry

logger = logging.getLogger("form_guard.locales")

_MESSAGE_MAP = TypeAdapter(dict[str, str])


def load_locale_file(registry: LocaleRegistry, path: str | Path, extend: bool = True) -> str:
    """Rejestruje jeden plik; kluczem locale jest nazwa pliku bez rozszerzenia."""
    path = Path(path)
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
        messages = _MESSAGE_MAP.validate_python(raw)
    except (OSError, json.JSONDecodeError) as exc:
        raise ConfigurationError(f"Cannot read locale file {path}: {exc}") from exc
    except ValidationError as exc:
        raise ConfigurationError(
            f"Locale file {path} must be a flat mapping of rule name to template: {exc}"
        ) from exc

    key = path.stem
    registry.register_locale(key, messages, extend=extend)
    return key


def load_locale_dir(registry: LocaleRegistry, directory: str | Path, extend: bool = True) -> list[str]:
    """Ładuje wszystkie *.json z katalogu (alfabetycznie). Brak katalogu = nic."""
    directory = Path(directory)
    if not directory.is_dir():
        logger.info("Locale directory %s not found, only built-in locale available.", directory)
        return []

    loaded = [load_locale_file(registry, p, extend=extend) for p in sorted(directory.glob("*.json"))]
    if loaded:
        logger.info("Loaded locales: %s", ", ".join(loaded))
    return loaded
