"""
schemas.py — Request/Response modele FastAPI.
Oddzielone od contracts.py żeby API mogło ewoluować niezależnie.
"""
from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from contracts import ErrorEntry, FileRef


# ─────────────────────────── /validate ───────────────────────────

class ValidateRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    rule_schema: dict[str, dict[str, Any]] = Field(alias="schema")
    values: dict[str, Any] = {}
    files: dict[str, list[FileRef]] = {}   # pola typu "file", trafiają do values jako FileList
    locale: Optional[str] = None
    messages: dict[str, str] = {}           # nadpisania na czas jednego żądania
    mode: Literal["sync", "async"] = "async"


class ValidateResponse(BaseModel):
    valid: bool
    errors: dict[str, list[ErrorEntry]]
    locale: str


# ─────────────────────────── /locales ────────────────────────────

class LocaleResponse(BaseModel):
    key: str
    messages: dict[str, str]


class RegisterLocaleRequest(BaseModel):
    messages: dict[str, str]
    extend: bool = True   # brakujące klucze dziedziczone z języka domyślnego


# ─────────────────────────── /rules ──────────────────────────────

class RulesResponse(BaseModel):
    rules: list[str]


# ─────────────────────────── /health ─────────────────────────────

class HealthResponse(BaseModel):
    status: str
    version: str
    locales: list[str]
