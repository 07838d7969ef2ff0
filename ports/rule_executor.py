"""
Port: RuleExecutor
Odpowiedzialność: uruchamianie reguł pola (przebieg sync + async) i całego schematu.

Wynik wywołania predykatu jest jawnie rozróżniony:
  Immediate — werdykt znany od razu
  Deferred  — awaitable, rozstrzygany dopiero w przebiegu async
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Awaitable, Protocol, Union, runtime_checkable

from contracts import ErrorEntry, RuleSet, Schema, ValidationResult, ValueMap


@dataclass(frozen=True)
class Immediate:
    passed: bool


@dataclass(frozen=True)
class Deferred:
    pending: Awaitable[Any]


RuleOutcome = Union[Immediate, Deferred]


@runtime_checkable
class RuleExecutor(Protocol):
    def run_field(
        self, value: Any, rule_set: RuleSet, all_values: ValueMap
    ) -> list[ErrorEntry]:
        """
        Synchronous pass. Rules producing a Deferred outcome are omitted.
        """
        ...

    async def run_field_async(
        self, value: Any, rule_set: RuleSet, all_values: ValueMap
    ) -> list[ErrorEntry]:
        """
        Synchronous pass followed by awaiting every Deferred outcome in
        declaration order. Sync failures always precede async failures.
        """
        ...

    def run_schema(self, schema: Schema, values: ValueMap) -> ValidationResult:
        ...

    async def run_schema_async(self, schema: Schema, values: ValueMap) -> ValidationResult:
        ...
