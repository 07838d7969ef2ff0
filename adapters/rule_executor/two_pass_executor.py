"""
Adapter: TwoPassExecutor
Implementuje port RuleExecutor.

Przebieg pola:
  1. sync  — reguły w kolejności deklaracji; klucze *Message/*Label pomijane;
             pusta wartość pomija wszystko poza `required`;
             wynik Deferred odkładany na później
  2. async — (tylko run_field_async) odłożone wyniki awaitowane w kolejności
             deklaracji, błędy dopisywane PO błędach sync

Każdy predykat wywoływany jest dokładnie raz na przebieg pola.
Pola schematu walidowane są sekwencyjnie, w kolejności kluczy.
"""
from __future__ import annotations

import inspect
import logging
from typing import Any, Awaitable, Callable, Optional

from adapters.rule_library.builtin_rules import is_empty
from contracts import ErrorEntry, RuleSet, Schema, ValidationResult, ValueMap, is_meta_key
from ports.rule_executor import Deferred, Immediate, RuleOutcome
from ports.rule_library import RuleEntry, RuleLibrary

logger = logging.getLogger("form_guard.executor")

# describe(rule, parameter, rule_set) -> komunikat błędu
Describe = Callable[[str, Any, RuleSet], str]

_Pending = tuple[str, Any, Awaitable[Any]]


def invoke(entry: RuleEntry, value: Any, parameter: Any, all_values: ValueMap) -> RuleOutcome:
    result = entry.predicate(value, parameter, all_values)
    if inspect.isawaitable(result):
        return Deferred(result)
    return Immediate(bool(result))


def _discard(pending: Awaitable[Any]) -> None:
    # Niezawaitowana korutyna generuje RuntimeWarning przy GC
    if inspect.iscoroutine(pending):
        pending.close()


def _discard_all(pending: list[_Pending]) -> None:
    for _, _, awaitable in pending:
        _discard(awaitable)


class TwoPassExecutor:
    def __init__(
        self,
        rules: RuleLibrary,
        describe: Describe,
        on_unknown_rule: Optional[Callable[[str], None]] = None,
    ) -> None:
        self._rules = rules
        self._describe = describe
        self._on_unknown_rule = on_unknown_rule

    def _report_unknown(self, name: str) -> None:
        logger.warning('Unknown rule "%s", skipped.', name)
        if self._on_unknown_rule is not None:
            self._on_unknown_rule(name)

    def _error(self, name: str, parameter: Any, rule_set: RuleSet) -> ErrorEntry:
        return ErrorEntry(rule=name, message=self._describe(name, parameter, rule_set))

    def _sync_pass(
        self, value: Any, rule_set: RuleSet, all_values: ValueMap
    ) -> tuple[list[ErrorEntry], list[_Pending]]:
        errors: list[ErrorEntry] = []
        pending: list[_Pending] = []
        empty = is_empty(value)

        try:
            for name, parameter in rule_set.items():
                if is_meta_key(name):
                    continue
                entry = self._rules.lookup(name)
                if entry is None:
                    self._report_unknown(name)
                    continue
                if empty and name != "required":
                    continue

                outcome = invoke(entry, value, parameter, all_values)
                if isinstance(outcome, Deferred):
                    pending.append((name, parameter, outcome.pending))
                elif not outcome.passed:
                    errors.append(self._error(name, parameter, rule_set))
        except BaseException:
            _discard_all(pending)
            raise

        return errors, pending

    # -- RuleExecutor protocol -----------------------------------------

    def run_field(
        self, value: Any, rule_set: RuleSet, all_values: Optional[ValueMap] = None
    ) -> list[ErrorEntry]:
        errors, pending = self._sync_pass(value, rule_set, all_values or {})
        _discard_all(pending)
        return errors

    async def run_field_async(
        self, value: Any, rule_set: RuleSet, all_values: Optional[ValueMap] = None
    ) -> list[ErrorEntry]:
        errors, pending = self._sync_pass(value, rule_set, all_values or {})
        for index, (name, parameter, awaitable) in enumerate(pending):
            try:
                passed = await awaitable
            except BaseException:
                _discard_all(pending[index + 1:])
                raise
            if not passed:
                errors.append(self._error(name, parameter, rule_set))
        return errors

    def run_schema(self, schema: Schema, values: Optional[ValueMap] = None) -> ValidationResult:
        values = values or {}
        result = ValidationResult()
        for field_name, rule_set in schema.items():
            result.add_field_errors(
                field_name, self.run_field(values.get(field_name), rule_set, values)
            )
        return result

    async def run_schema_async(
        self, schema: Schema, values: Optional[ValueMap] = None
    ) -> ValidationResult:
        values = values or {}
        result = ValidationResult()
        for field_name, rule_set in schema.items():
            errors = await self.run_field_async(values.get(field_name), rule_set, values)
            result.add_field_errors(field_name, errors)
        return result
