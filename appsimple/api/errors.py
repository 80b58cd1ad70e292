"""Map domain errors to HTTP responses with a consistent {"error": message} body."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from appsimple.core.errors import (
    AppError,
    DuplicateEntityError,
    EntityNotFoundError,
    InvalidCredentialsError,
    PermissionDeniedError,
    SystemEntityProtectedError,
    TokenInvalidError,
    UnauthorizedError,
)

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "An unexpected error occurred."

# Most specific first; the first isinstance match wins.
ERROR_STATUS: tuple[tuple[type[AppError], int], ...] = (
    (EntityNotFoundError, status.HTTP_404_NOT_FOUND),
    (DuplicateEntityError, status.HTTP_409_CONFLICT),
    (InvalidCredentialsError, status.HTTP_401_UNAUTHORIZED),
    (TokenInvalidError, status.HTTP_401_UNAUTHORIZED),
    (UnauthorizedError, status.HTTP_401_UNAUTHORIZED),
    (PermissionDeniedError, status.HTTP_403_FORBIDDEN),
    (SystemEntityProtectedError, status.HTTP_403_FORBIDDEN),
)

_BEARER_CHALLENGE = {"WWW-Authenticate": "Bearer"}


def status_for(exc: Exception) -> int:
    """Return the HTTP status for `exc`; anything unclassified is a 500."""
    for error_type, code in ERROR_STATUS:
        if isinstance(exc, error_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    code = status_for(exc)
    if code == status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error("Unclassified application error on %s %s", request.method, request.url.path, exc_info=exc)
        return JSONResponse(status_code=code, content={"error": GENERIC_ERROR_MESSAGE})
    headers = _BEARER_CHALLENGE if code == status.HTTP_401_UNAUTHORIZED else None
    logger.debug("Returning error response: %s - %s", code, exc.message)
    return JSONResponse(status_code=code, content={"error": exc.message}, headers=headers)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Unhandled exception on %s %s",
        request.method,
        request.url.path,
        exc_info=exc,
        extra={"error_type": type(exc).__name__, "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": GENERIC_ERROR_MESSAGE},
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
