"""
contracts.py — Jedyne źródło prawdy dla typów danych FormGuard.
Wszystkie moduły importują WYŁĄCZNIE stąd. Nie modyfikować bez versioning.
"""
from __future__ import annotations

from typing import Any, Mapping

from pydantic import BaseModel, Field

CONTRACTS_VERSION = "1.0.0"

# Sufiksy kluczy metadanych w RuleSet, nigdy nie wykonywane jako reguły
MESSAGE_SUFFIX = "Message"
LABEL_SUFFIX = "Label"


# ─────────────────────────── Schema ──────────────────────────────────────

RuleSet = Mapping[str, Any]      # nazwa reguły -> parametr (+ klucze *Message / *Label)
Schema = Mapping[str, RuleSet]   # nazwa pola -> RuleSet
ValueMap = Mapping[str, Any]     # nazwa pola -> bieżąca wartość


def is_meta_key(key: str) -> bool:
    """True dla kluczy metadanych (inline message / label)."""
    return key.endswith(MESSAGE_SUFFIX) or key.endswith(LABEL_SUFFIX)


# ─────────────────────────── Pliki ───────────────────────────────────────

class FileRef(BaseModel):
    name: str
    size: int = 0           # bajty
    content_type: str = ""  # MIME, np. "image/png"


class FileList(list):
    """
    Lista plików z pola typu "file". Odróżniona od zwykłej listy, bo
    reguły fileSize / fileType działają wyłącznie na FileList.
    """

    def __repr__(self) -> str:
        return f"FileList({list.__repr__(self)})"


# ─────────────────────────── Wynik walidacji ─────────────────────────────

class ErrorEntry(BaseModel):
    rule: str
    message: str


class ValidationResult(BaseModel):
    valid: bool = True
    errors: dict[str, list[ErrorEntry]] = Field(default_factory=dict)

    def add_field_errors(self, field_name: str, entries: list[ErrorEntry]) -> None:
        if entries:
            self.errors[field_name] = list(entries)
            self.valid = False
