"""
Port: MessageResolver
Odpowiedzialność: zamiana nieudanej reguły na gotowy, zlokalizowany komunikat.
"""
from __future__ import annotations

from typing import Any, Mapping, Protocol, runtime_checkable

from contracts import RuleSet


@runtime_checkable
class MessageResolver(Protocol):
    def resolve(
        self,
        rule: str,
        parameter: Any,
        rule_set: RuleSet,
        locale: str,
        overrides: Mapping[str, str],
    ) -> str:
        """
        Produces the final message for a failed rule. Precedence:
          1. rule_set["<rule>Message"] (verbatim)
          2. overrides[rule]
          3. locale template for rule
          4. locale "custom" template, then a hardcoded fallback
        Placeholders {name} are interpolated; unknown ones stay literal.
        """
        ...
