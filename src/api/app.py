"""FastAPI application for owner contact processing."""
from __future__ import annotations

import os
import sys

# Add src/ to Python path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from core.config import get_settings
from core.exceptions import ConfigurationError, ContactsError, ValidationError
from core.logging_config import configure_logging, get_logger
from api.routes import contacts, health

LOGGER = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Configure logging from settings and log startup/shutdown."""
    settings = get_settings()
    configure_logging(settings)
    LOGGER.info(
        "Contacts API starting",
        extra={"extra_data": settings.as_public_dict()},
    )
    yield
    LOGGER.info("Contacts API shutting down")


def _error(status_code: int, error: str, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": error, "message": message})


def create_app() -> FastAPI:
    """
    Build the FastAPI application.

    Error mapping:
        ValidationError (bad threshold, weights or BBL) -> 400
        ConfigurationError -> 500, message hidden
        any other ContactsError -> 500
    Request-body schema errors stay FastAPI's 422.
    """
    application = FastAPI(
        title="NYC Property Contacts",
        description="Owner contact normalization, deduplication and categorization API",
        version="1.0.0",
        lifespan=lifespan,
    )
    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    @application.exception_handler(ValidationError)
    async def validation_handler(request: Request, exc: ValidationError) -> JSONResponse:
        LOGGER.warning(f"Rejected request to {request.url.path}: {exc}")
        return _error(400, "validation_error", str(exc))

    @application.exception_handler(ConfigurationError)
    async def configuration_handler(request: Request, exc: ConfigurationError) -> JSONResponse:
        LOGGER.error(f"Configuration error: {exc}")
        return _error(500, "configuration_error", "Service misconfiguration")

    @application.exception_handler(ContactsError)
    async def contacts_error_handler(request: Request, exc: ContactsError) -> JSONResponse:
        LOGGER.error(f"Contact processing failed on {request.url.path}: {exc}", exc_info=True)
        return _error(500, "application_error", str(exc))

    application.include_router(health.router, prefix="/health", tags=["Health"])
    application.include_router(contacts.router, prefix="/contacts", tags=["Contacts"])

    # Health check without the trailing slash
    @application.get("/health", include_in_schema=False)
    async def root_health_check():
        return {"status": "ok", "service": "nyc-property-contacts"}

    return application


app = create_app()
