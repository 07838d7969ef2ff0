"""
Router: GET /locales, GET /locales/{key}, PUT /locales/{key}
Odczyt i rejestracja map komunikatów we współdzielonym rejestrze.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import get_locale_registry
from api.schemas import LocaleResponse, RegisterLocaleRequest
from errors import LocaleNotRegisteredError

router = APIRouter(prefix="/locales", tags=["locales"])


@router.get("", response_model=list[str])
async def list_locales(registry=Depends(get_locale_registry)) -> list[str]:
    return registry.get_locales()


@router.get("/{key}", response_model=LocaleResponse)
async def get_locale(key: str, registry=Depends(get_locale_registry)) -> LocaleResponse:
    try:
        messages = registry.get_messages(key)
    except LocaleNotRegisteredError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    return LocaleResponse(key=key, messages=messages)


@router.put("/{key}", response_model=LocaleResponse)
async def register_locale(
    key: str,
    body: RegisterLocaleRequest,
    registry=Depends(get_locale_registry),
) -> LocaleResponse:
    registry.register_locale(key, body.messages, extend=body.extend)
    return LocaleResponse(key=key, messages=registry.get_messages(key))
