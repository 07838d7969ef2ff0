"""
Port: RuleLibrary
Odpowiedzialność: rozwiązywanie nazwy reguły na predykat (built-in lub custom).
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Literal, Optional, Protocol, Union, runtime_checkable

from contracts import ValueMap

# predicate(value, parameter, all_values) -> bool | Awaitable[bool]
Predicate = Callable[[Any, Any, ValueMap], Union[bool, Awaitable[bool]]]

RuleOrigin = Literal["builtin", "custom"]


@dataclass(frozen=True)
class RuleEntry:
    name: str
    predicate: Predicate
    origin: RuleOrigin


@runtime_checkable
class RuleLibrary(Protocol):
    def lookup(self, name: str) -> Optional[RuleEntry]:
        """
        Returns the RuleEntry registered under name, or None when the name
        is unknown. Must not raise for unknown names.
        """
        ...

    def names(self) -> list[str]:
        """Returns all resolvable rule names."""
        ...
