"""Global exception handlers — map exceptions to HTTP status codes.

Routes and the session service raise ``ValueError`` for lookups that miss
and for out-of-range arguments.  Rather than catching these in every route,
global handlers inspect the message and pick the status code.  Store
failures (``SQLAlchemyError``) surface as 503, anything else as 500.

Internal detail stays in the server log.  Exception text reaches the
client only when ``SERVER_EXPOSE_ERRORS`` is on (development).
"""

import logging

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)

# --- Keyword patterns in ValueError messages and their HTTP status codes ---
# Checked in order; first match wins.
_VALUE_ERROR_PATTERNS: list[tuple[str, int]] = [
    ("not found", 404),
    ("out of range", 400),
]

_SAFE_MESSAGES: dict[int, str] = {
    404: "Session not found",
    400: "Invalid request",
}


def _expose_errors(request: Request) -> bool:
    settings = getattr(request.app.state, "settings", None)
    return bool(settings and settings.expose_errors)


def format_validation_errors(errors: list[dict]) -> list[str]:
    """Render pydantic error dicts as ``field.path: message`` strings."""
    messages = []
    for err in errors:
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        msg = err.get("msg", "invalid value")
        messages.append(f"{loc}: {msg}" if loc else msg)
    return messages


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Reject malformed request bodies with 400 and a list of messages."""
    errors = format_validation_errors(exc.errors())
    logger.warning("Invalid request at %s: %s", request.url, errors)
    return JSONResponse(
        status_code=400,
        content={"detail": "Invalid session data", "errors": errors},
    )


async def value_error_handler(request: Request, exc: ValueError) -> JSONResponse:
    """Map ``ValueError`` to 404 or 400 based on its message."""
    msg = str(exc)
    status = 400
    for pattern, code in _VALUE_ERROR_PATTERNS:
        if pattern in msg.lower():
            status = code
            break

    logger.warning("ValueError [%d] at %s: %s", status, request.url, msg)
    return JSONResponse(
        status_code=status,
        content={"detail": _SAFE_MESSAGES.get(status, "Invalid request")},
    )


async def store_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Storage failure — log the traceback, return 503."""
    logger.exception("Storage error at %s", request.url)
    content = {"detail": "Storage unavailable"}
    if _expose_errors(request):
        content["error"] = str(exc)
    return JSONResponse(status_code=503, content=content)


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all for unhandled exceptions — log full traceback, return 500."""
    logger.exception("Unhandled exception at %s", request.url)
    content = {"detail": "Internal server error"}
    if _expose_errors(request):
        content["error"] = str(exc)
    return JSONResponse(status_code=500, content=content)
