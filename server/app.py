"""Main FastAPI application."""

from __future__ import annotations

import json

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from pagehook.engine import get_engine

from .config import get_settings
from .logging_config import configure_logging, logger
from .routes import api_router


# Register global exception handlers for consistent error responses across the API
def register_exception_handlers(app: FastAPI) -> None:
    """Register exception handlers for 422, HTTP, and 500 errors."""

    @app.exception_handler(RequestValidationError)
    async def _validation_exception_handler(request: Request, exc: RequestValidationError):
        logger.debug("validation error", extra={"errors": exc.errors(), "path": str(request.url)})
        return JSONResponse(
            {"ok": False, "error": "Invalid request"},
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        )

    @app.exception_handler(HTTPException)
    async def _http_exception_handler(request: Request, exc: HTTPException):
        logger.debug(
            "http error",
            extra={"detail": exc.detail, "status": exc.status_code, "path": str(request.url)},
        )
        detail = exc.detail
        if not isinstance(detail, str):
            detail = json.dumps(detail)
        return JSONResponse({"ok": False, "error": detail}, status_code=exc.status_code)

    @app.exception_handler(Exception)
    async def _unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error", extra={"path": str(request.url)})
        return JSONResponse(
            {"ok": False, "error": "Internal server error"},
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )


_settings = get_settings()
configure_logging(_settings.log_level)

app = FastAPI(
    title=_settings.app_name,
    version=_settings.app_version,
    docs_url=_settings.resolved_docs_url,
    redoc_url=None,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=_settings.cors_allow_origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(api_router)


@app.on_event("startup")
async def _startup() -> None:
    engine = get_engine()
    if engine.verify and not engine.app_secret:
        logger.warning("Signature verification is on but MESSENGER_APP_SECRET is not set")
    if not _settings.page_access_token:
        logger.warning("MESSENGER_PAGE_TOKEN is not set; replies will fail")
    logger.info(
        "Starting pagehook server",
        extra={
            "version": _settings.app_version,
            "webhook_path": _settings.resolved_webhook_path,
            "verify": engine.verify,
            "handlers": engine.registry.summary(),
        },
    )


@app.on_event("shutdown")
async def _shutdown() -> None:
    logger.info("pagehook server shutdown complete")


__all__ = ["app"]
