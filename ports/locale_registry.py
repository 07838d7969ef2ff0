"""
Port: LocaleRegistry
Odpowiedzialność: współdzielony (append-only) magazyn szablonów komunikatów
per locale, z dziedziczeniem po języku domyślnym.
"""
from __future__ import annotations

from typing import Mapping, Protocol, runtime_checkable


@runtime_checkable
class LocaleRegistry(Protocol):
    @property
    def default_locale(self) -> str:
        ...

    def register_locale(
        self, key: str, messages: Mapping[str, str], extend: bool = True
    ) -> None:
        """
        Stores messages under key, replacing any previous registration.
        extend=True layers messages over a copy of the default language;
        extend=False stores them as-is.
        """
        ...

    def merge_messages(self, key: str, messages: Mapping[str, str]) -> None:
        """
        Merges single entries into an existing locale map.
        An unknown key is first created as an extension of the default language.
        """
        ...

    def has_locale(self, key: str) -> bool:
        ...

    def get_locales(self) -> list[str]:
        ...

    def get_messages(self, key: str) -> dict[str, str]:
        """
        Returns a copy of the locale's template map.
        Raises LocaleNotRegisteredError for unknown keys.
        """
        ...
