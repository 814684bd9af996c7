"""Error kinds raised by the service layer and their HTTP mapping."""

import enum
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)


class ErrorKind(enum.Enum):
    NOT_FOUND = "not_found"
    BAD_INPUT = "bad_input"
    CONFLICT = "conflict"
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    INTERNAL = "internal"


# CONFLICT stays 400: duplicate registration is reported as bad input to clients
STATUS_BY_KIND = {
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.BAD_INPUT: status.HTTP_400_BAD_REQUEST,
    ErrorKind.CONFLICT: status.HTTP_400_BAD_REQUEST,
    ErrorKind.UNAUTHORIZED: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    ErrorKind.INTERNAL: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


INTERNAL_ERROR_MESSAGE = "Internal server error"


class ServiceError(Exception):
    """Base class for failures reported by services"""

    kind = ErrorKind.INTERNAL

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @property
    def status_code(self) -> int:
        return STATUS_BY_KIND[self.kind]


class NotFoundError(ServiceError):
    kind = ErrorKind.NOT_FOUND


class BadInputError(ServiceError):
    kind = ErrorKind.BAD_INPUT


class ConflictError(ServiceError):
    kind = ErrorKind.CONFLICT


class UnauthorizedError(ServiceError):
    kind = ErrorKind.UNAUTHORIZED


class ForbiddenError(ServiceError):
    kind = ErrorKind.FORBIDDEN


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    logger.warning(
        "%s %s failed (%s): %s", request.method, request.url.path, exc.kind.value, exc.message
    )
    return error_response(exc.status_code, exc.message)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{location}: {first.get('msg')}" if location else first.get("msg")
    else:
        message = "Invalid request"
    logger.warning("%s %s rejected: %s", request.method, request.url.path, message)
    return error_response(status.HTTP_400_BAD_REQUEST, message)


async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error(
        "Database failure on %s %s", request.method, request.url.path, exc_info=exc
    )
    # statement and bound parameters stay in the log only
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR_MESSAGE)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(SQLAlchemyError, database_error_handler)
