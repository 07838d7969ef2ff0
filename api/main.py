"""
api/main.py — punkt wejścia FastAPI.

Lifespan:
  - Tworzy rejestr locale (język domyślny wbudowany)
  - Ładuje pliki locales/*.json z settings.locale_dir
  - Rejestr żyje w app.state przez cały czas działania procesu

Uruchomienie: uvicorn api.main:app
"""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from adapters.locale_registry.in_memory_registry import InMemoryLocaleRegistry
from adapters.locale_registry.json_locale_loader import load_locale_dir
from api.routers import locales, rules, validate
from api.schemas import HealthResponse
from config import Settings
from errors import ConfigurationError

logger = logging.getLogger("form_guard")


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings

    registry = InMemoryLocaleRegistry(default_locale="en")
    load_locale_dir(registry, settings.locale_dir)
    if not registry.has_locale(settings.default_locale):
        logger.warning(
            'Default locale "%s" not registered, requests without locale will fail.',
            settings.default_locale,
        )
    app.state.locale_registry = registry

    logger.info("FormGuard API ready (%d locales).", len(registry.get_locales()))
    yield

    logger.info("Shutting down.")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings()
    logging.basicConfig(level=settings.log_level.upper())

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        lifespan=lifespan,
    )
    app.state.settings = settings

    # Routers
    app.include_router(validate.router)
    app.include_router(locales.router)
    app.include_router(rules.router)

    # Health
    @app.get("/health", response_model=HealthResponse, tags=["health"])
    async def health(request: Request):
        return HealthResponse(
            status="ok",
            version=settings.app_version,
            locales=request.app.state.locale_registry.get_locales(),
        )

    # Globalne handlery błędów
    @app.exception_handler(ConfigurationError)
    async def configuration_error_handler(request: Request, exc: ConfigurationError):
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(KeyError)
    async def key_error_handler(request: Request, exc: KeyError):
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    return app


app = create_app()
