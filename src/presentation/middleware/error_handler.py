"""Error handling middleware and exception handlers."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
import structlog

from src.domain.exceptions import (
    DomainException,
    SettlementFailed,
    ValidationFailure,
)
from .request_context import get_request_id

logger = structlog.get_logger(__name__)

_HTTP_ERROR_CODES = {
    404: "not_found",
    405: "method_not_allowed",
}


def error_handler_middleware(app: FastAPI) -> None:
    """
    Register exception handlers with the FastAPI app.

    Maps domain exceptions to appropriate HTTP responses. Bodies carry the
    error code only, except validation issues and ledger failure messages.
    """

    @app.exception_handler(ValidationFailure)
    async def validation_failure_handler(
        request: Request,
        exc: ValidationFailure,
    ) -> JSONResponse:
        """Handle missing or malformed fields and unsupported currencies."""
        content = {"error": exc.code}
        if exc.issues:
            content["issues"] = exc.issues
        return JSONResponse(status_code=exc.status_code, content=content)

    @app.exception_handler(SettlementFailed)
    async def settlement_failed_handler(
        request: Request,
        exc: SettlementFailed,
    ) -> JSONResponse:
        """Handle ledger failures."""
        logger.error(
            "settlement_failed",
            request_id=get_request_id(),
            message=exc.message,
        )
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": exc.code,
                "message": exc.message,
            },
        )

    @app.exception_handler(DomainException)
    async def domain_exception_handler(
        request: Request,
        exc: DomainException,
    ) -> JSONResponse:
        """Handle authentication and policy rejections."""
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.code},
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request,
        exc: StarletteHTTPException,
    ) -> JSONResponse:
        """Handle routing errors."""
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": _HTTP_ERROR_CODES.get(exc.status_code, "http_error")},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """Handle unexpected exceptions."""
        logger.exception(
            "unhandled_exception",
            request_id=get_request_id(),
            error=str(exc),
            error_type=type(exc).__name__,
        )
        return JSONResponse(
            status_code=500,
            content={"error": "internal_error"},
        )
