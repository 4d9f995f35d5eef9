"""
Error taxonomy shared by the route handlers.

Every error is rendered to clients as ``{"error": message}`` by the handlers
registered in ``register_exception_handlers``.
"""
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

logger = logging.getLogger(__name__)


class RosterError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(RosterError):
    """A required field is missing from the request."""
    status_code = status.HTTP_400_BAD_REQUEST


class Conflict(RosterError):
    """A uniqueness constraint was violated (duplicate enrollment, duplicate email)."""
    status_code = status.HTTP_400_BAD_REQUEST


class NotFound(RosterError):
    status_code = status.HTTP_404_NOT_FOUND


class StoreError(RosterError):
    """Any other persistence failure."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


async def roster_error_handler(request: Request, exc: RosterError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return error_response(exc.status_code, exc.message)


async def http_error_handler(request: Request, exc: HTTPException) -> JSONResponse:
    return error_response(exc.status_code, str(exc.detail))


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Malformed JSON or wrongly typed fields; missing fields are checked by the handlers
    errors = exc.errors()
    message = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
    return error_response(status.HTTP_400_BAD_REQUEST, message)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RosterError, roster_error_handler)
    app.add_exception_handler(HTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
