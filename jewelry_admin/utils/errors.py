"""
Uniform JSON error responses.

Every error leaves the API as ``{"success": false, "message": ...}``,
optionally with ``errors`` (validation details) or ``error`` (exception
text, debug mode only).
"""
import logging
from typing import Any, Dict, List

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..config.settings import get_settings

logger = logging.getLogger(__name__)
settings = get_settings()


def server_error(message: str, exc: Exception) -> HTTPException:
    """500 carrying a generic message; the exception text only in debug mode."""
    detail: Dict[str, Any] = {"message": message}
    if settings.debug:
        detail["error"] = str(exc)
    return HTTPException(status_code=500, detail=detail)


def _error_body(detail: Any) -> Dict[str, Any]:
    if isinstance(detail, dict):
        return {"success": False, **detail}
    return {"success": False, "message": str(detail)}


def format_validation_errors(errors: List[Dict[str, Any]]) -> List[Dict[str, str]]:
    """Flatten pydantic error dicts into ``{field, message}`` pairs."""
    formatted = []
    for error in errors:
        location = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        formatted.append({
            "field": ".".join(location) or "request",
            "message": error.get("msg", "Invalid value"),
        })
    return formatted


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(exc.detail),
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={
            "success": False,
            "message": "Validation failed",
            "errors": format_validation_errors(exc.errors()),
        },
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"❌ Unhandled error on {request.method} {request.url.path}", exc_info=exc)
    body: Dict[str, Any] = {"success": False, "message": "Internal server error"}
    if settings.debug:
        body["error"] = str(exc)
    return JSONResponse(status_code=500, content=body)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
