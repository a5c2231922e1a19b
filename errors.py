"""
Global error handlers: every failure leaves the app as
{"error_type": ..., "error": ..., "docs": ...}.
"""
from __future__ import annotations
import logging
from typing import Callable

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from config import settings
from schemas import ErrorResponse, ErrorType

logger = logging.getLogger(__name__)


def error_response(status_code: int, error_type: ErrorType, message: str) -> JSONResponse:
    body = ErrorResponse(error_type=error_type, error=message, docs=settings.docs_url)
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


def error_type_for_status(status_code: int) -> ErrorType:
    if status_code == 404:
        return ErrorType.NOT_FOUND
    if status_code in (400, 422):
        return ErrorType.VALIDATION
    if status_code >= 500:
        return ErrorType.INTERNAL_SERVER_ERROR
    return ErrorType.UNKNOWN


def _describe_validation(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p not in ("query", "body"))
        msg = err.get("msg", "invalid value")
        parts.append(f"{loc}: {msg}" if loc else msg)
    return "; ".join(parts) or "Invalid request"


class UnhandledErrorMiddleware(BaseHTTPMiddleware):
    """
    Turns unexpected exceptions into the uniform 500 body.

    Registered before CORSMiddleware so CORS wraps it and the 500 still
    carries Access-Control-Allow-Origin; Starlette's own ServerErrorMiddleware
    sits outside every user middleware.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            return await call_next(request)
        except Exception:
            logger.exception("Unhandled error on %s %s", request.method, request.url.path)
            return error_response(500, ErrorType.INTERNAL_SERVER_ERROR, "Internal server error")


def install_error_handlers(app: FastAPI) -> None:
    """Call before adding CORSMiddleware (see UnhandledErrorMiddleware)."""
    @app.exception_handler(StarletteHTTPException)
    async def http_exc_handler(request: Request, exc: StarletteHTTPException):  # type: ignore[override]
        detail = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
        return error_response(exc.status_code, error_type_for_status(exc.status_code), detail)

    @app.exception_handler(RequestValidationError)
    async def validation_exc_handler(request: Request, exc: RequestValidationError):  # type: ignore[override]
        if any(err.get("type") == "json_invalid" for err in exc.errors()):
            return error_response(400, ErrorType.PARSE, _describe_validation(exc))
        return error_response(400, ErrorType.VALIDATION, _describe_validation(exc))

    app.add_middleware(UnhandledErrorMiddleware)
