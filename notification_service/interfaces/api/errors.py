"""Exception handlers that keep every failure in the ``{success: false}`` shape."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from notification_service.domain.exceptions import (
    NotFoundError,
    NotificationForbiddenError,
    NotificationServiceError,
    NotificationValidationError,
    PartialFanoutFailure,
    TransientStoreError,
)
from notification_service.interfaces.api.schemas import ErrorResponse

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR: tuple[tuple[type[NotificationServiceError], int], ...] = (
    (NotificationValidationError, status.HTTP_400_BAD_REQUEST),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (NotificationForbiddenError, status.HTTP_403_FORBIDDEN),
    (PartialFanoutFailure, status.HTTP_207_MULTI_STATUS),
    (TransientStoreError, status.HTTP_500_INTERNAL_SERVER_ERROR),
)


def status_for_error(exc: NotificationServiceError) -> int:
    for error_class, status_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_class):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def error_response(
    status_code: int,
    *,
    message: str,
    error: str,
    details: list[dict] | None = None,
) -> JSONResponse:
    body = ErrorResponse(message=message, error=error, details=details)
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(body.model_dump(by_alias=True, exclude_none=True)),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register exception handlers with the FastAPI application."""

    @app.exception_handler(NotificationServiceError)
    async def notification_error_handler(
        request: Request, exc: NotificationServiceError
    ) -> JSONResponse:
        details = None
        if isinstance(exc, PartialFanoutFailure):
            details = [
                {"recipientId": failure.recipient_id, "reason": failure.reason}
                for failure in exc.result.failures
            ]
        return error_response(
            status_for_error(exc),
            message=exc.message,
            error=exc.error_code,
            details=details,
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        details = [
            {
                "field": ".".join(str(part) for part in error.get("loc", ())),
                "message": error.get("msg", ""),
            }
            for error in exc.errors()
        ]
        return error_response(
            status.HTTP_400_BAD_REQUEST,
            message="Invalid request parameters",
            error=NotificationValidationError.error_code,
            details=details,
        )

    # Routing 404/405 errors are raised as the Starlette base class.
    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return error_response(exc.status_code, message=str(exc.detail), error="HTTP_ERROR")

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            message="Unexpected error",
            error="INTERNAL_ERROR",
        )


__all__ = ["error_response", "register_exception_handlers", "status_for_error"]
