from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from patient_service.domain.exceptions import (
    BusinessValidationError,
    DomainError,
    EmailAlreadyExistsError,
    PatientNotFoundError,
    StoreUnavailableError,
)

logger = logging.getLogger("patient_service.errors")

# Subclasses (e.g. InvalidDateFormatError) resolve to their parent's status via MRO.
_DOMAIN_STATUS_CODES: dict[type[DomainError], int] = {
    BusinessValidationError: 400,
    PatientNotFoundError: 404,
    EmailAlreadyExistsError: 409,
}


def _log_failure(*, request: Request, status_code: int, error: str, level: int) -> None:
    # IMPORTANT: do not log request bodies, query values, or any PHI.
    request_id = getattr(request.state, "request_id", None) or request.headers.get("X-Request-ID")
    logger.log(
        level,
        "Request failed",
        extra={
            "request_id": request_id,
            "http_method": request.method,
            "request_path": request.url.path,  # no query string
            "status_code": status_code,
            "error": error,
        },
    )


def _field_errors(exc: RequestValidationError) -> dict[str, str]:
    """First message per field, keyed by the field's external name.

    Input values are deliberately left out of the response.
    """

    errors: dict[str, str] = {}
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ())]
        field = loc[-1] if loc else "body"
        errors.setdefault(field, str(err.get("msg", "Invalid value")))
    return errors


def _domain_error_handler(
    status_code: int,
) -> Callable[[Request, Any], Awaitable[JSONResponse]]:
    async def handle(request: Request, exc: DomainError) -> JSONResponse:
        _log_failure(
            request=request, status_code=status_code, error=exc.error_code, level=logging.INFO
        )
        return JSONResponse(
            status_code=status_code, content={"detail": exc.message, "error": exc.error_code}
        )

    return handle


def register_exception_handlers(app: FastAPI) -> None:
    """Register application exception handlers."""

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        _log_failure(
            request=request, status_code=400, error="validation_failed", level=logging.INFO
        )
        return JSONResponse(
            status_code=400,
            content={
                "detail": "Validation failed",
                "error": "validation_failed",
                "errors": _field_errors(exc),
            },
        )

    for exc_class, status_code in _DOMAIN_STATUS_CODES.items():
        app.add_exception_handler(exc_class, _domain_error_handler(status_code))

    @app.exception_handler(StoreUnavailableError)
    async def handle_store_unavailable(
        request: Request,
        exc: StoreUnavailableError,
    ) -> JSONResponse:
        # No exc_info: driver errors can embed statement parameters (PHI).
        _log_failure(
            request=request, status_code=503, error=exc.error_code, level=logging.WARNING
        )
        return JSONResponse(
            status_code=503, content={"detail": exc.message, "error": exc.error_code}
        )
