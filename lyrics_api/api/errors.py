"""Error rendering and the top-level failure boundary.

Every error leaves the service as ``{"error": "<message>"}`` with
``Cache-Control: no-store``; stack traces are logged, never returned.
"""

from __future__ import annotations

from http import HTTPStatus
from typing import Any, Iterable

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from .responses import error_response

logger = structlog.get_logger(__name__)

PREFLIGHT_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
    "Access-Control-Max-Age": "86400",
}

_FRAMEWORK_MESSAGES = {
    404: "Not found",
    405: "Method not allowed",
}

# Error types that mean the client left a required value out or blank.
_MISSING_TYPES = {"missing", "string_too_short"}


class PreflightMiddleware(BaseHTTPMiddleware):
    """Answer every OPTIONS request before routing."""

    async def dispatch(self, request: Request, call_next):  # type: ignore[override]
        if request.method == "OPTIONS":
            return Response(status_code=204, headers=PREFLIGHT_HEADERS)
        return await call_next(request)


class ErrorBoundaryMiddleware(BaseHTTPMiddleware):
    """Convert any exception escaping the handlers into a generic 500."""

    async def dispatch(self, request: Request, call_next):  # type: ignore[override]
        try:
            return await call_next(request)
        except Exception:
            logger.exception(
                "request.unhandled_error",
                method=request.method,
                path=request.url.path,
            )
            return error_response(500, "Internal server error")


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> Response:
    message = exc.detail if isinstance(exc.detail, str) else None
    if message is None or message == HTTPStatus(exc.status_code).phrase:
        message = _FRAMEWORK_MESSAGES.get(exc.status_code, HTTPStatus(exc.status_code).phrase)
    return error_response(exc.status_code, message, headers=getattr(exc, "headers", None))


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> Response:
    return error_response(400, describe_validation_errors(exc.errors()))


def describe_validation_errors(errors: Iterable[dict[str, Any]]) -> str:
    """Reduce pydantic's error list to the single message a client sees."""

    errors = list(errors)
    if any(error.get("type") == "json_invalid" for error in errors):
        return "Malformed JSON body"

    missing: list[str] = []
    unknown: list[str] = []
    for error in errors:
        field = _field_name(error.get("loc", ()))
        error_type = error.get("type")
        if not field:
            if error_type == "missing":
                return "Request body is required"
            return "Request body must be a JSON object"
        if error_type in _MISSING_TYPES and _is_blank_or_absent(error):
            missing.append(field)
        elif error_type == "string_type" and error.get("input") is None:
            missing.append(field)
        elif error_type == "extra_forbidden":
            unknown.append(field)

    if missing:
        return f"Missing required field(s): {', '.join(dict.fromkeys(missing))}"
    if unknown:
        return f"Unknown field(s): {', '.join(dict.fromkeys(unknown))}"

    first = errors[0] if errors else {}
    ctx = first.get("ctx") or {}
    if first.get("type") == "value_error" and "error" in ctx:
        # Raised by our own validators, already phrased for the client.
        return str(ctx["error"])
    return f"Invalid value for '{_field_name(first.get('loc', ()))}': {first.get('msg', 'invalid value')}"


def _field_name(loc: Iterable[Any]) -> str:
    parts = [str(part) for part in loc]
    if parts and parts[0] in ("body", "query", "path"):
        parts = parts[1:]
    return ".".join(parts)


def _is_blank_or_absent(error: dict[str, Any]) -> bool:
    if error.get("type") == "missing":
        return True
    return (error.get("ctx") or {}).get("min_length") == 1


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
