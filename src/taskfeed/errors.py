"""Application-level exception hierarchy and FastAPI exception handlers.

Every handler answers with the ``{message, data, ok}`` envelope. Authorization
failures (``UnauthorizedError`` and ``InvalidCredentialsError``) are reported
with status 400, matching the status codes existing clients already expect.
"""

from __future__ import annotations

import logging
from contextvars import Token
from typing import Mapping

from fastapi import FastAPI, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.requests import Request

from .core.context import REQUEST_ID_HEADER, bind_request_id, reset_request_id
from .schemas.envelope import failure

logger = logging.getLogger(__name__)


class ApplicationError(Exception):
    """Base class for domain-specific errors."""

    default_message = "Bad Request!"
    default_status = status.HTTP_400_BAD_REQUEST
    code = "application_error"

    def __init__(self, message: str | None = None, *, status_code: int | None = None) -> None:
        self.message = message or self.default_message
        self.status_code = status_code or self.default_status
        super().__init__(self.message)


class ValidationError(ApplicationError):
    """Malformed or missing input, including badly formed identifiers."""

    code = "validation_error"


class NotFoundError(ApplicationError):
    """A referenced document does not exist."""

    default_message = "Not found!"
    default_status = status.HTTP_404_NOT_FOUND
    code = "not_found"


class UnauthorizedError(ApplicationError):
    """The caller is neither the owner nor a collaborator of the resource."""

    default_message = "Unauthorized request!"
    code = "unauthorized"


class InvalidCredentialsError(ApplicationError):
    """The verified caller does not match the subject named by the request."""

    default_message = "Invalid Credentials!"
    code = "invalid_credentials"


class PreconditionFailedError(ApplicationError):
    """The entity already satisfies the requested transition."""

    code = "precondition_failed"


class InvalidTokenError(ApplicationError):
    """The bearer token is missing or could not be verified."""

    default_message = "Invalid token!"
    default_status = status.HTTP_401_UNAUTHORIZED
    code = "invalid_token"


class StoreError(ApplicationError):
    """A document store operation failed unexpectedly."""

    default_message = "Internal server error"
    default_status = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = "store_error"


def _bind_request_context(request: Request) -> Token[str] | None:
    request_id = getattr(request.state, "request_id", None)
    if not request_id:
        return None
    return bind_request_id(request_id)


def _reset_request_context(token: Token[str] | None) -> None:
    if token is not None:
        reset_request_id(token)


def _error_response(
    request: Request,
    *,
    status_code: int,
    message: str,
    headers: Mapping[str, str] | None = None,
) -> JSONResponse:
    response = JSONResponse(status_code=status_code, content=failure(message).model_dump())
    if headers:
        response.headers.update(headers)
    request_id = getattr(request.state, "request_id", None)
    if request_id:
        response.headers.setdefault(REQUEST_ID_HEADER, request_id)
    return response


def register_exception_handlers(app: FastAPI) -> None:
    """Register exception handlers with the provided FastAPI app."""

    @app.exception_handler(ApplicationError)
    async def _handle_application_error(
        request: Request,
        exc: ApplicationError,
    ) -> JSONResponse:
        token = _bind_request_context(request)
        try:
            if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
                logger.error(
                    "Application error encountered",
                    exc_info=exc.__cause__ or exc,
                    extra={"code": exc.code, "status_code": exc.status_code},
                )
            else:
                logger.warning(
                    "Request rejected: %s",
                    exc.message,
                    extra={"code": exc.code, "status_code": exc.status_code, "path": request.url.path},
                )
            headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, InvalidTokenError) else None
            return _error_response(
                request,
                status_code=exc.status_code,
                message=exc.message,
                headers=headers,
            )
        finally:
            _reset_request_context(token)

    @app.exception_handler(RequestValidationError)
    async def _handle_request_validation_error(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        token = _bind_request_context(request)
        try:
            logger.warning("Request parsing failed", extra={"errors": exc.errors()})
            return _error_response(
                request,
                status_code=status.HTTP_400_BAD_REQUEST,
                message="Bad Request!",
            )
        finally:
            _reset_request_context(token)

    @app.exception_handler(StarletteHTTPException)
    async def _handle_http_exception(
        request: Request,
        exc: StarletteHTTPException,
    ) -> JSONResponse:
        token = _bind_request_context(request)
        try:
            message = exc.detail if isinstance(exc.detail, str) else "Request failed."
            logger.warning(
                "HTTP exception raised",
                extra={"status_code": exc.status_code, "path": request.url.path},
            )
            return _error_response(
                request,
                status_code=exc.status_code,
                message=message,
                headers=exc.headers or None,
            )
        finally:
            _reset_request_context(token)

    @app.exception_handler(Exception)
    async def _handle_unhandled_exception(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        token = _bind_request_context(request)
        try:
            logger.error("Unhandled application error.", exc_info=exc)
            return _error_response(
                request,
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                message="Internal server error",
            )
        finally:
            _reset_request_context(token)


__all__ = [
    "ApplicationError",
    "InvalidCredentialsError",
    "InvalidTokenError",
    "NotFoundError",
    "PreconditionFailedError",
    "StoreError",
    "UnauthorizedError",
    "ValidationError",
    "register_exception_handlers",
]
