"""Exception handlers mapping Beacon errors to JSON responses.

Only the error's human-readable message crosses the boundary; provider
internals and stack traces stay in the logs.
"""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
import structlog

from beacon.exceptions import BeaconError

log = structlog.get_logger()

# Error code to HTTP status
_STATUS_BY_CODE: dict[str, int] = {
    "VALIDATION_ERROR": status.HTTP_400_BAD_REQUEST,
    "INVALID_PASSWORD": status.HTTP_400_BAD_REQUEST,
    "INVALID_OR_EXPIRED_TOKEN": status.HTTP_400_BAD_REQUEST,
    "ACCOUNT_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "ACCOUNT_EXISTS": status.HTTP_409_CONFLICT,
    "IDENTITY_PROVIDER_ERROR": status.HTTP_500_INTERNAL_SERVER_ERROR,
    "NOTIFICATION_ERROR": status.HTTP_500_INTERNAL_SERVER_ERROR,
}

# Messages returned instead of collaborator error text
_PUBLIC_MESSAGES: dict[str, str] = {
    "IDENTITY_PROVIDER_ERROR": "Identity provider request failed.",
    "NOTIFICATION_ERROR": "Failed to send email.",
}


def status_for(exc: BeaconError) -> int:
    return _STATUS_BY_CODE.get(exc.code, status.HTTP_500_INTERNAL_SERVER_ERROR)


def error_body(code: str, message: str) -> dict:
    return {"ok": False, "code": code, "message": message}


async def beacon_error_handler(request: Request, exc: BeaconError) -> JSONResponse:
    status_code = status_for(exc)
    if status_code >= 500:
        log.error("request_failed", path=request.url.path, code=exc.code, error=exc.message)
    message = _PUBLIC_MESSAGES.get(exc.code, exc.message)
    return JSONResponse(status_code=status_code, content=error_body(exc.code, message))


async def request_validation_handler(request: Request, exc: Exception) -> JSONResponse:
    """Malformed bodies are client errors like any other missing input."""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body("VALIDATION_ERROR", "Invalid request body."),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    log.exception("unhandled_error", path=request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body("INTERNAL_ERROR", "Internal server error."),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(BeaconError, beacon_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
