"""
Router: POST /validate
Waliduje mapę wartości względem schematu (domyślnie przebieg async).
Reguły custom nie są dostępne przez HTTP, tylko wbudowane.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends

from adapters.validator.form_guard import FormGuard
from api.dependencies import get_locale_registry, get_settings
from api.schemas import ValidateRequest, ValidateResponse
from contracts import FileList

router = APIRouter(prefix="/validate", tags=["validate"])


@router.post("", response_model=ValidateResponse)
async def validate(
    body: ValidateRequest,
    registry=Depends(get_locale_registry),
    settings=Depends(get_settings),
) -> ValidateResponse:
    guard = FormGuard(messages={**settings.messages, **body.messages}, registry=registry)
    # Nieznany locale -> LocaleNotRegisteredError -> 400 (handler w main.py)
    guard.set_locale(body.locale or settings.default_locale)

    values = dict(body.values)
    for field_name, files in body.files.items():
        values[field_name] = FileList(files)

    if body.mode == "sync":
        result = guard.validate(body.rule_schema, values)
    else:
        result = await guard.validate_async(body.rule_schema, values)

    return ValidateResponse(valid=result.valid, errors=result.errors, locale=guard.locale)
