from fastapi import Request
from fastapi.responses import JSONResponse
from .base import AppException, AuthenticationError
from tracker.core.logging import get_logger

logger = get_logger(__name__)


def _error_body(message: str, details: dict) -> dict:
    return {"error": {"message": message, "details": details}}


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Render an AppException as a JSON error envelope."""

    log = logger.warning if exc.status_code < 500 else logger.error
    log(
        f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}",
        extra={"status_code": exc.status_code, "details": exc.details}
    )

    headers = None
    if isinstance(exc, AuthenticationError):
        headers = {"WWW-Authenticate": "Bearer"}

    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(exc.message, exc.details),
        headers=headers
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last-resort handler; hides internals from the client."""

    logger.exception(f"Unhandled exception on {request.method} {request.url.path}: {exc}")

    return JSONResponse(
        status_code=500,
        content=_error_body("An unexpected error occurred", {})
    )
