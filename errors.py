"""
errors.py — Wyjątki FormGuard.

Błędy konfiguracji są fatalne i przerywają wywołanie. Niepowodzenia walidacji
NIE są wyjątkami, trafiają do ValidationResult jako ErrorEntry.
"""


class FormGuardError(Exception):
    """Base exception for FormGuard errors."""
    pass


class ConfigurationError(FormGuardError, ValueError):
    """Raised for invalid engine configuration."""
    pass


class LocaleNotRegisteredError(ConfigurationError):
    """Raised when activating a locale that is not in the registry."""

    def __init__(self, locale: str) -> None:
        self.locale = locale
        super().__init__(
            f'Locale "{locale}" not registered. Register it (or load locales/{locale}.json) first.'
        )


class InvalidPredicateError(ConfigurationError, TypeError):
    """Raised when a custom rule is registered with a non-callable predicate."""

    def __init__(self, name: str) -> None:
        self.rule_name = name
        super().__init__(f'Custom rule "{name}" must be a callable predicate.')
