"""
Error taxonomy and HTTP mapping.

Services raise subclasses of :class:`AdminAPIError`; the handlers
registered by :func:`register_exception_handlers` turn them (and
FastAPI's own errors) into ``{"message": ...}`` JSON bodies with the
matching status code.  Anything unexpected becomes a logged 500.
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException


logger = logging.getLogger(__name__)


class AdminAPIError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal Server Error"

    def __init__(self, message: Optional[str] = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class UnauthorizedError(AdminAPIError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Unauthorized"


class ForbiddenError(AdminAPIError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Insufficient permissions"


class NotFoundError(AdminAPIError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class InvalidInputError(AdminAPIError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid input"


class InvalidQueryError(InvalidInputError):
    """Raised for list query parameters that cannot be interpreted."""

    default_message = "Invalid query"


def _message_response(status_code: int, message: str, headers: Optional[dict] = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message}, headers=headers)


def _describe_validation_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid input"
    if all(error.get("type") == "missing" for error in errors):
        missing = [str(error.get("loc", ("",))[-1]) for error in errors]
        return f"Missing required fields: {', '.join(missing)}"
    first = errors[0]
    if first.get("type") == "json_invalid":
        return "Invalid JSON body"
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    if location:
        return f"Invalid value for {location}: {first.get('msg')}"
    return str(first.get("msg", "Invalid input"))


def register_exception_handlers(app: FastAPI) -> None:
    """Attach JSON error handlers to ``app``."""

    @app.exception_handler(AdminAPIError)
    async def handle_admin_error(request: Request, exc: AdminAPIError) -> JSONResponse:
        headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, UnauthorizedError) else None
        return _message_response(exc.status_code, exc.message, headers)

    @app.exception_handler(HTTPException)
    async def handle_http_exception(request: Request, exc: HTTPException) -> JSONResponse:
        return _message_response(exc.status_code, str(exc.detail), getattr(exc, "headers", None))

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        return _message_response(status.HTTP_400_BAD_REQUEST, _describe_validation_error(exc))

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return _message_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal Server Error")
