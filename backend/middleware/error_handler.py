"""Global error handling utilities for the FastAPI backend."""

from __future__ import annotations

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from backend.core.logging_config import get_logger, log_event
from backend.services.secret_provider import SecretNotConfiguredError
from totp_engine import TotpGenerationError

logger = get_logger(service="error_handler")


def register_error_handlers(app: FastAPI) -> None:
    """Attach custom exception handlers to the provided FastAPI application."""

    @app.exception_handler(HTTPException)
    async def handle_http_exception(
        request: Request,
        exc: HTTPException,
    ) -> JSONResponse:
        log_event(
            logger,
            service="backend",
            event="http_error",
            level="error",
            method=request.method,
            path=request.url.path,
            status=exc.status_code,
            detail=exc.detail,
        )
        return JSONResponse(
            {"detail": exc.detail},
            status_code=exc.status_code,
            headers=exc.headers if exc.headers else None,
        )

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        # El cuerpo puede contener el código; solo registramos las ubicaciones
        locations = [".".join(str(part) for part in err.get("loc", ())) for err in exc.errors()]
        invalid_json = any(err.get("type") == "json_invalid" for err in exc.errors())
        log_event(
            logger,
            service="backend",
            event="request_validation_error",
            level="error",
            path=request.url.path,
            fields=locations,
        )
        if invalid_json:
            return JSONResponse({"error": "Invalid JSON format"}, status_code=400)
        return JSONResponse({"error": "Validation Error"}, status_code=422)

    @app.exception_handler(SecretNotConfiguredError)
    async def handle_secret_not_configured(
        request: Request,
        exc: SecretNotConfiguredError,
    ) -> JSONResponse:
        log_event(
            logger,
            service="backend",
            event="totp_secret_not_configured",
            level="error",
            path=request.url.path,
        )
        return JSONResponse({"error": "Secret not configured"}, status_code=500)

    @app.exception_handler(TotpGenerationError)
    async def handle_totp_generation_error(
        request: Request,
        exc: TotpGenerationError,
    ) -> JSONResponse:
        status_code = 400 if exc.is_input_error else 500
        log_event(
            logger,
            service="backend",
            event="totp_generation_error",
            level="error",
            path=request.url.path,
            status=status_code,
            error=type(exc.cause).__name__ if exc.cause else type(exc).__name__,
        )
        if exc.is_input_error:
            return JSONResponse({"error": "Invalid TOTP configuration or secret"}, status_code=400)
        return JSONResponse({"error": "Failed to generate TOTP"}, status_code=500)

    @app.exception_handler(Exception)
    async def handle_unexpected_exception(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        log_event(
            logger,
            service="backend",
            event="internal_error",
            level="error",
            method=request.method,
            path=request.url.path,
            status=500,
            error=str(exc),
        )
        return JSONResponse({"error": "Internal Server Error"}, status_code=500)
