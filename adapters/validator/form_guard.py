"""
Adapter: FormGuard
Implementuje port Validator — silnik walidacji składający wszystkie elementy:

  BuiltinRuleLibrary + CustomRuleRegistry  →  LayeredRuleLibrary (custom wygrywa)
  InMemoryLocaleRegistry (współdzielony)   →  TemplateMessageResolver
  TwoPassExecutor                          →  validate / validate_async

Stan instancji: aktywny locale, nadpisania komunikatów, reguły custom.
Instancje są niezależne i dzielą jeden rejestr locale.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Mapping, Optional, Union

from adapters.locale_registry.in_memory_registry import get_locale_registry
from adapters.message_resolver.template_resolver import FALLBACK_MESSAGE, TemplateMessageResolver
from adapters.rule_executor.two_pass_executor import TwoPassExecutor
from adapters.rule_library.builtin_rules import BuiltinRuleLibrary
from adapters.rule_library.custom_rules import CustomRuleRegistry, LayeredRuleLibrary
from contracts import ErrorEntry, RuleSet, Schema, ValidationResult, ValueMap
from errors import LocaleNotRegisteredError
from ports.locale_registry import LocaleRegistry
from ports.rule_library import Predicate

logger = logging.getLogger("form_guard.engine")

_BUILTINS = BuiltinRuleLibrary()


class FormGuard:
    """
    Headless validation engine.

    Example:
        guard = FormGuard(locale="pl", messages={"required": "Pole obowiązkowe."})
        guard.add_rule("even", lambda v, p, a: int(v) % 2 == 0, "Must be even.")
        result = guard.validate({"age": {"required": True, "even": True}}, {"age": "3"})
    """

    def __init__(
        self,
        locale: Optional[str] = None,
        messages: Optional[Mapping[str, str]] = None,
        registry: Optional[LocaleRegistry] = None,
        on_unknown_rule: Optional[Callable[[str], None]] = None,
    ) -> None:
        self._registry = registry if registry is not None else get_locale_registry()
        self.locale = locale or self._registry.default_locale
        if not self._registry.has_locale(self.locale):
            logger.warning(
                'Locale "%s" not registered. Falling back to "%s".',
                self.locale,
                self._registry.default_locale,
            )
            self.locale = self._registry.default_locale

        self._overrides: dict[str, str] = dict(messages or {})
        self._custom = CustomRuleRegistry()
        self._resolver = TemplateMessageResolver(self._registry)
        self._rules = LayeredRuleLibrary(self._custom, _BUILTINS)
        self._executor = TwoPassExecutor(
            rules=self._rules,
            describe=self._describe,
            on_unknown_rule=on_unknown_rule,
        )

    @classmethod
    def create(cls, **options: Any) -> "FormGuard":
        return cls(**options)

    @property
    def registry(self) -> LocaleRegistry:
        return self._registry

    @property
    def overrides(self) -> dict[str, str]:
        return dict(self._overrides)

    def _describe(self, rule: str, parameter: Any, rule_set: RuleSet) -> str:
        return self._resolver.resolve(rule, parameter, rule_set, self.locale, self._overrides)

    # -- locale --------------------------------------------------------

    def set_locale(self, locale: str) -> "FormGuard":
        if not self._registry.has_locale(locale):
            raise LocaleNotRegisteredError(locale)
        self.locale = locale
        return self

    def has_locale(self, locale: str) -> bool:
        return self._registry.has_locale(locale)

    def get_locales(self) -> list[str]:
        return self._registry.get_locales()

    # -- custom rules --------------------------------------------------

    def add_rule(
        self,
        name: str,
        predicate: Predicate,
        message: Optional[Union[str, Mapping[str, str]]] = None,
    ) -> "FormGuard":
        """
        Registers a custom predicate(value, param, all_values) -> bool | Awaitable[bool].

        message may be:
          - str: instance-level override for this engine only
          - {locale: text}: merged into each locale of the shared registry;
            this engine's override is taken from its active locale, then the
            default language, then a generic fallback
        """
        if name in self._custom:
            logger.info('Custom rule "%s" replaced.', name)
        self._custom.add(name, predicate)

        if isinstance(message, str):
            self._overrides[name] = message
        elif isinstance(message, Mapping):
            for locale_key, text in message.items():
                self._registry.merge_messages(locale_key, {name: text})
            self._overrides[name] = (
                message.get(self.locale)
                or message.get(self._registry.default_locale)
                or FALLBACK_MESSAGE
            )
        return self

    def rule_names(self) -> list[str]:
        return self._rules.names()

    # -- Validator protocol --------------------------------------------

    def run_field(
        self, value: Any, rule_set: RuleSet, all_values: Optional[ValueMap] = None
    ) -> list[ErrorEntry]:
        return self._executor.run_field(value, rule_set, all_values)

    async def run_field_async(
        self, value: Any, rule_set: RuleSet, all_values: Optional[ValueMap] = None
    ) -> list[ErrorEntry]:
        return await self._executor.run_field_async(value, rule_set, all_values)

    def validate(self, schema: Schema, values: ValueMap) -> ValidationResult:
        return self._executor.run_schema(schema, values)

    async def validate_async(self, schema: Schema, values: ValueMap) -> ValidationResult:
        return await self._executor.run_schema_async(schema, values)
