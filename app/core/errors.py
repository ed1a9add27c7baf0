"""
core/errors.py
--------------
Domain exceptions raised by the service layer.

Services never build HTTP responses. They raise one of these and the
handlers registered in main.py translate them:

  NotFoundError      → 404  nothing exists for the resolved scope
  AccessDeniedError  → 403  organization outside the caller's authorized set
  ConflictError      → 409  uniqueness violation / illegal state change

Anything else that escapes a route is logged and answered with a bare 500.
"""

from fastapi import Request, status
from fastapi.responses import JSONResponse

from app.core.logging import get_logger

logger = get_logger(__name__)


class AppError(Exception):
    """Base class for expected, user-facing failures."""

    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND


class AccessDeniedError(AppError):
    status_code = status.HTTP_403_FORBIDDEN


class ConflictError(AppError):
    status_code = status.HTTP_409_CONFLICT


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    # 403s are logged louder: they may indicate an access violation attempt
    log = logger.warning if isinstance(exc, AccessDeniedError) else logger.info
    log(
        "Request rejected",
        path=request.url.path,
        method=request.method,
        status=exc.status_code,
        reason=exc.message,
    )
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Unhandled exception",
        path=request.url.path,
        method=request.method,
        error=str(exc),
        exc_info=True,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )
