"""
Adapter: InMemoryLocaleRegistry
Implementuje port LocaleRegistry — słownik locale -> mapa szablonów w pamięci.

Rejestr jest append-only: locale można dodać lub nadpisać, nigdy usunąć.
Jeden współdzielony egzemplarz na proces zwraca get_locale_registry();
testy i osadzenia mogą wstrzyknąć własny egzemplarz z innym językiem bazowym.

Brak blokad: rejestrować locale przy starcie, przed walidacją.
"""
from __future__ import annotations

import logging
from typing import Mapping, Optional

from errors import LocaleNotRegisteredError

logger = logging.getLogger("form_guard.locales")

DEFAULT_LOCALE = "en"

DEFAULT_MESSAGES: dict[str, str] = {
    "required": "This field is required.",
    "minLength": "Must be at least {min} characters.",
    "maxLength": "Must be no more than {max} characters.",
    "min": "Must be at least {min}.",
    "max": "Must be no more than {max}.",
    "email": "Please enter a valid email address.",
    "url": "Please enter a valid URL.",
    "pattern": "Invalid format.",
    "numeric": "Must be a number.",
    "integer": "Must be an integer.",
    "alpha": "Must contain only letters.",
    "alphanumeric": "Must contain only letters and numbers.",
    "phone": "Please enter a valid phone number.",
    "date": "Please enter a valid date.",
    "dateMin": "Date must be on or after {min}.",
    "dateMax": "Date must be on or before {max}.",
    "equalTo": 'Must match the "{target}" field.',
    "notEqualTo": 'Must not match the "{target}" field.',
    "in": "Must be one of: {values}.",
    "notIn": "Must not be one of: {values}.",
    "fileSize": "File size must not exceed {max}.",
    "fileType": "Allowed file types: {types}.",
    "creditCard": "Please enter a valid credit card number.",
    "strongPassword": "Password must contain uppercase, lowercase, number, and special character.",
    "hexColor": "Please enter a valid hex color (e.g. #ff0000).",
    "ipv4": "Please enter a valid IPv4 address.",
    "ipv6": "Please enter a valid IPv6 address.",
    "json": "Please enter valid JSON.",
    "custom": "Invalid value.",
}


class InMemoryLocaleRegistry:
    """Współdzielony magazyn szablonów komunikatów."""

    def __init__(
        self,
        default_locale: str = DEFAULT_LOCALE,
        default_messages: Optional[Mapping[str, str]] = None,
    ) -> None:
        self._default_locale = default_locale
        seed = DEFAULT_MESSAGES if default_messages is None else default_messages
        self._locales: dict[str, dict[str, str]] = {default_locale: dict(seed)}

    # -- LocaleRegistry protocol ---------------------------------------

    @property
    def default_locale(self) -> str:
        return self._default_locale

    def register_locale(
        self, key: str, messages: Mapping[str, str], extend: bool = True
    ) -> None:
        if extend:
            merged = dict(self._locales[self._default_locale])
            merged.update(messages)
        else:
            merged = dict(messages)
        if key in self._locales:
            logger.debug("Replacing locale %r.", key)
        self._locales[key] = merged
        logger.debug("Registered locale %r (%d messages, extend=%s).", key, len(merged), extend)

    def merge_messages(self, key: str, messages: Mapping[str, str]) -> None:
        if key not in self._locales:
            self.register_locale(key, {}, extend=True)
        self._locales[key].update(messages)

    def has_locale(self, key: str) -> bool:
        return key in self._locales

    def get_locales(self) -> list[str]:
        return list(self._locales)

    def get_messages(self, key: str) -> dict[str, str]:
        try:
            return dict(self._locales[key])
        except KeyError:
            raise LocaleNotRegisteredError(key) from None

    def template(self, key: str, rule: str) -> Optional[str]:
        """Pojedynczy szablon bez kopiowania całej mapy."""
        messages = self._locales.get(key)
        if messages is None:
            raise LocaleNotRegisteredError(key)
        return messages.get(rule)


_SHARED: Optional[InMemoryLocaleRegistry] = None


def get_locale_registry() -> InMemoryLocaleRegistry:
    """Procesowy rejestr współdzielony przez wszystkie instancje FormGuard."""
    global _SHARED
    if _SHARED is None:
        _SHARED = InMemoryLocaleRegistry()
    return _SHARED


def register_locale(key: str, messages: Mapping[str, str], extend: bool = True) -> None:
    get_locale_registry().register_locale(key, messages, extend=extend)
