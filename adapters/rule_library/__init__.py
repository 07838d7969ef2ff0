"""
Rule library adapter package.

Public import:
    from adapters.rule_library import BuiltinRuleLibrary, CustomRuleRegistry, LayeredRuleLibrary
"""

from adapters.rule_library.builtin_rules import BUILTIN_RULES, BuiltinRuleLibrary, is_empty
from adapters.rule_library.custom_rules import CustomRuleRegistry, LayeredRuleLibrary

__all__ = [
    "BUILTIN_RULES",
    "BuiltinRuleLibrary",
    "CustomRuleRegistry",
    "LayeredRuleLibrary",
    "is_empty",
]
