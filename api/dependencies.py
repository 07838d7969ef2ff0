"""
dependencies.py — FastAPI Dependency Injection.
Każda zależność zwraca odpowiedni obiekt przez Request.app.state.
"""
from __future__ import annotations

from fastapi import Request

from adapters.locale_registry.in_memory_registry import InMemoryLocaleRegistry
from config import Settings


def get_locale_registry(request: Request) -> InMemoryLocaleRegistry:
    return request.app.state.locale_registry


def get_settings(request: Request) -> Settings:
    return request.app.state.settings
