"""
Adapter: CustomRuleRegistry + LayeredRuleLibrary
Implementuje port RuleLibrary dla reguł dodawanych przez użytkownika.

CustomRuleRegistry  — mutowalny magazyn predykatów (nadpisanie = ostatni wygrywa)
LayeredRuleLibrary  — łączy warstwy przy lookup(); pierwsza warstwa wygrywa,
                      więc custom przesłania built-in o tej samej nazwie
"""
from __future__ import annotations

from typing import Optional

from errors import InvalidPredicateError
from ports.rule_library import Predicate, RuleEntry, RuleLibrary


class CustomRuleRegistry:
    """Reguły użytkownika jednej instancji silnika."""

    def __init__(self) -> None:
        self._rules: dict[str, Predicate] = {}

    def add(self, name: str, predicate: Predicate) -> None:
        if not callable(predicate):
            raise InvalidPredicateError(name)
        self._rules[name] = predicate

    def __contains__(self, name: object) -> bool:
        return name in self._rules

    # -- RuleLibrary protocol ------------------------------------------

    def lookup(self, name: str) -> Optional[RuleEntry]:
        predicate = self._rules.get(name)
        if predicate is None:
            return None
        return RuleEntry(name=name, predicate=predicate, origin="custom")

    def names(self) -> list[str]:
        return list(self._rules)


class LayeredRuleLibrary:
    def __init__(self, *layers: RuleLibrary) -> None:
        self._layers = layers

    def lookup(self, name: str) -> Optional[RuleEntry]:
        for layer in self._layers:
            entry = layer.lookup(name)
            if entry is not None:
                return entry
        return None

    def names(self) -> list[str]:
        seen: dict[str, None] = {}
        for layer in self._layers:
            for name in layer.names():
                seen.setdefault(name, None)
        return list(seen)
