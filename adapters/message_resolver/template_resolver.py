"""
Adapter: TemplateMessageResolver
Implementuje port MessageResolver.

Kolejność (najwyższy priorytet pierwszy):
  1. rule_set["<reguła>Message"]        — dosłownie, bez interpolacji
  2. nadpisania instancji (overrides)
  3. szablon aktywnego locale
  4. szablon "custom" (overrides, potem locale), na końcu FALLBACK_MESSAGE

Interpolacja: {nazwa} -> zmienna reguły; nieznane placeholdery zostają
w tekście dosłownie, żeby literówki w szablonach były widoczne.
"""
from __future__ import annotations

import re
from collections import ChainMap
from typing import Any, Mapping

from adapters.rule_library.builtin_rules import CHOICE_TYPES, to_number, to_text
from contracts import LABEL_SUFFIX, MESSAGE_SUFFIX, RuleSet
from ports.locale_registry import LocaleRegistry

FALLBACK_MESSAGE = "Invalid value."

_PLACEHOLDER_RE = re.compile(r"\{(\w+)\}", re.ASCII)


def interpolate(template: str, variables: Mapping[str, Any]) -> str:
    def _sub(m: re.Match) -> str:
        key = m.group(1)
        if key in variables:
            return to_text(variables[key])
        return m.group(0)

    return _PLACEHOLDER_RE.sub(_sub, template)


def format_bytes(size: Any) -> str:
    """1023 -> '1023 B', 2048 -> '2.0 KB', 5242880 -> '5.0 MB'."""
    n = to_number(size)
    if n < 1024:
        return f"{to_text(size)} B"
    if n < 1048576:
        return f"{n / 1024:.1f} KB"
    return f"{n / 1048576:.1f} MB"


def _join(parameter: Any) -> str:
    if isinstance(parameter, (set, frozenset)):
        return ", ".join(sorted(to_text(item) for item in parameter))
    if isinstance(parameter, CHOICE_TYPES):
        return ", ".join(to_text(item) for item in parameter)
    return to_text(parameter)


def template_variables(rule: str, parameter: Any, rule_set: RuleSet) -> dict[str, Any]:
    variables: dict[str, Any] = {"min": parameter, "max": parameter}
    if rule in ("equalTo", "notEqualTo"):
        variables["target"] = rule_set.get(f"{to_text(parameter)}{LABEL_SUFFIX}") or parameter
    if rule in ("in", "notIn"):
        variables["values"] = _join(parameter)
    if rule == "fileSize":
        variables["max"] = format_bytes(parameter)
    if rule == "fileType":
        variables["types"] = _join(parameter)
    return variables


class TemplateMessageResolver:
    """Rozwiązuje komunikaty na podstawie współdzielonego LocaleRegistry."""

    def __init__(self, registry: LocaleRegistry) -> None:
        self._registry = registry

    # -- MessageResolver protocol --------------------------------------

    def resolve(
        self,
        rule: str,
        parameter: Any,
        rule_set: RuleSet,
        locale: str,
        overrides: Mapping[str, str],
    ) -> str:
        inline = rule_set.get(f"{rule}{MESSAGE_SUFFIX}")
        if inline:
            return inline if isinstance(inline, str) else to_text(inline)

        messages = ChainMap(dict(overrides), self._registry.get_messages(locale))
        template = messages.get(rule) or messages.get("custom") or FALLBACK_MESSAGE
        return interpolate(template, template_variables(rule, parameter, rule_set))
