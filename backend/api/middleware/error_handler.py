"""
Global error handlers for the CONCORD API.

Translates exceptions into consistent JSON error responses.
Never exposes internal details to clients.
"""
import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from concord import UnifyConfigError

logger = structlog.get_logger("concord.api.errors")


class DomainError(Exception):
    """Base class for domain-level errors."""
    status_code: int = 400
    error_code: str = "DOMAIN_ERROR"

    def __init__(self, message: str, details: dict | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class PayloadTooLargeError(DomainError):
    """Too many values in one request."""
    status_code = 413
    error_code = "PAYLOAD_TOO_LARGE"


def _error_body(code: str, message: str, details: dict | None = None) -> dict:
    return {
        "error": {
            "code": code,
            "message": message,
            "details": details if details else None,
        }
    }


def register_error_handlers(app: FastAPI) -> None:
    """Register global exception handlers on the FastAPI app."""

    @app.exception_handler(DomainError)
    async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(exc.error_code, exc.message, exc.details),
        )

    @app.exception_handler(UnifyConfigError)
    async def config_error_handler(request: Request, exc: UnifyConfigError) -> JSONResponse:
        logger.warning("invalid_config", error=exc.message, path=request.url.path)
        return JSONResponse(
            status_code=422,
            content=_error_body("INVALID_CONFIG", exc.message, exc.details),
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error(
            "unhandled_error",
            error_type=type(exc).__name__,
            error=str(exc),
            path=request.url.path,
        )
        return JSONResponse(
            status_code=500,
            content=_error_body("INTERNAL_ERROR", "An unexpected error occurred."),
        )
