"""
Port: Validator
Odpowiedzialność: dwa wywołania udostępniane warstwie osadzającej
(binder formularza, CLI, API): walidacja sync i async całego schematu.
"""
from typing import Any, Mapping, Optional, Protocol, Union, runtime_checkable

from contracts import Schema, ValidationResult, ValueMap
from ports.rule_library import Predicate


@runtime_checkable
class Validator(Protocol):
    def validate(self, schema: Schema, values: ValueMap) -> ValidationResult:
        """
        Validates every field of the schema synchronously.
        Verdicts of asynchronous rules are not observed on this path.
        """
        ...

    async def validate_async(self, schema: Schema, values: ValueMap) -> ValidationResult:
        """
        Validates every field, awaiting asynchronous rules.
        """
        ...

    def add_rule(
        self,
        name: str,
        predicate: Predicate,
        message: Optional[Union[str, Mapping[str, str]]] = None,
    ) -> Any:
        """
        Registers a custom predicate under name (overrides a built-in).
        Raises InvalidPredicateError for non-callable predicates.
        """
        ...

    def set_locale(self, locale: str) -> Any:
        """
        Activates a registered locale.
        Raises LocaleNotRegisteredError for unknown locales.
        """
        ...
