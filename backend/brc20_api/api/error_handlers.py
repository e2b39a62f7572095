"""Error Handlers - global exception handlers for the BRC-20 API.

Invariants:
    - LedgerApiError -> its own to_response() body and http_status
      (NotFoundError always renders {"error": "Not Found"})
    - CacheShortCircuit -> cached 200 payload or empty 304, both with ETag
    - RequestValidationError -> 400 with field-level error details
    - Exception (catch-all) -> 500, never leaks internal details

Design Decisions:
    - Registered in one place from main.py
    - NotFoundError logged at INFO with the resource kind (token | supply); supply-missing
      is already reported at WARNING by services/token_details.py
"""

import logging

from fastapi import FastAPI, Request, Response, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from brc20_api.api.cache_hooks import CacheShortCircuit
from brc20_api.core.errors import (
    ErrorSeverity, LedgerApiError, NotFoundError, ValidationError,
)

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_ledger_error_handler(app)
    _register_cache_short_circuit_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_ledger_error_handler(app: FastAPI) -> None:
    """Register ledger domain/infrastructure error handler."""

    @app.exception_handler(LedgerApiError)
    async def ledger_error_handler(request: Request, exc: LedgerApiError):
        """Handle all ledger domain/infrastructure errors."""
        extra = {
            "error_code": exc.code,
            "path": request.url.path,
            "ticker": exc.context.ticker,
            "address": exc.context.address,
        }
        if isinstance(exc, NotFoundError):
            logger.info(
                f"NotFound: {exc.message}",
                extra={**extra, "resource": exc.resource},
            )
        elif isinstance(exc, ValidationError):
            logger.warning(f"ValidationError: {exc.message}", extra=extra)
        else:
            logger.error(f"LedgerApiError: {exc.message}", extra=extra)
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_cache_short_circuit_handler(app: FastAPI) -> None:
    """Register handler answering requests from the response cache."""

    @app.exception_handler(CacheShortCircuit)
    async def cache_short_circuit_handler(
        request: Request, exc: CacheShortCircuit,
    ):
        headers = {"ETag": exc.etag}
        if exc.status_code == status.HTTP_304_NOT_MODIFIED:
            return Response(
                status_code=status.HTTP_304_NOT_MODIFIED, headers=headers,
            )
        return JSONResponse(content=exc.payload, headers=headers)


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register Pydantic validation error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle Pydantic validation errors."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(exc),
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all - never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": "An unexpected error occurred",
                    "category": "internal",
                    "severity": ErrorSeverity.CRITICAL.value,
                },
            },
        )


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    """Build structured validation error response."""
    return {
        "error": {
            "code": "VALIDATION_ERROR",
            "message": "Invalid request data",
            "category": "validation",
            "severity": ErrorSeverity.ERROR.value,
            "details": [
                {
                    "field": ".".join(str(loc) for loc in e["loc"]),
                    "message": e["msg"],
                    "type": e["type"],
                }
                for e in exc.errors()
            ],
        },
    }
