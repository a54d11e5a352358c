import logging
import os
from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import DBAPIError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

GENERIC_DETAIL = "An unexpected error occurred"

# SQLSTATE -> (status, error, fallback detail)
PG_ERROR_MAP: dict[str, tuple[int, str, str]] = {
    "23505": (409, "Duplicate entry", "A record with this value already exists"),
    "23503": (400, "Invalid reference", "Referenced record does not exist"),
    "23502": (400, "Missing required field", "A required field is missing"),
    "22P02": (400, "Invalid data format", "The provided data format is invalid"),
}


class NotFoundError(LookupError):
    pass


class ApiError(Exception):
    def __init__(self, status_code: int, error: str, details: Any = None):
        super().__init__(error)
        self.status_code = status_code
        self.error = error
        self.details = details


def diagnostics_enabled() -> bool:
    return os.getenv("ENV", "dev").lower() in {"dev", "local", "test"}


def describe(exc: BaseException) -> str:
    if diagnostics_enabled():
        return str(exc)
    return GENERIC_DETAIL


def failure(message: str, exc: BaseException) -> ApiError:
    """Turn a service exception into the API error a router raises."""
    if isinstance(exc, NotFoundError):
        return ApiError(404, message, details=str(exc))
    logger.exception(message)
    return ApiError(500, message, details=describe(exc))


def _error_body(error: str, details: Any = None, **extra: Any) -> dict[str, Any]:
    body: dict[str, Any] = {"error": error}
    if details is not None:
        body["details"] = details
    body.update(extra)
    return body


def _pg_code(exc: DBAPIError) -> Optional[str]:
    orig = getattr(exc, "orig", None)
    code = getattr(orig, "pgcode", None)
    if isinstance(code, str) and len(code) == 5:
        return code
    return None


async def api_error_handler(_request: Request, exc: ApiError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=_error_body(exc.error, exc.details))


async def validation_error_handler(_request: Request, exc: RequestValidationError) -> JSONResponse:
    details = [
        {
            "field": ".".join(str(p) for p in err.get("loc", ()) if p != "body"),
            "message": err.get("msg", ""),
        }
        for err in exc.errors()
    ]
    return JSONResponse(status_code=400, content=_error_body("Validation failed", details))


async def database_error_handler(_request: Request, exc: DBAPIError) -> JSONResponse:
    code = _pg_code(exc)
    if code in PG_ERROR_MAP:
        status, error, fallback = PG_ERROR_MAP[code]
        detail = getattr(getattr(exc.orig, "diag", None), "message_detail", None) or fallback
        return JSONResponse(status_code=status, content={"error": error, "detail": detail})

    logger.exception("Database error", extra={"pgcode": code})
    return JSONResponse(
        status_code=500,
        content={"error": "Database error", "detail": describe(exc)},
    )


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == 404 and exc.detail == "Not Found":
        return JSONResponse(status_code=404, content=_error_body("Not found", path=request.url.path))
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(DBAPIError, database_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
