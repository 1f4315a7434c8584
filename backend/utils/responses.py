# utils/responses.py
import logging
import time

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from config import get_settings
from utils.errors import AppError

logger = logging.getLogger(__name__)
access_logger = logging.getLogger("http")

# Locations FastAPI prefixes to validation errors; the client only cares about the field path
_LOCATION_PREFIXES = {"body", "query", "path", "header"}


def error_body(message: str, code: str, details=None) -> dict:
    body = {"success": False, "error": message, "code": code}
    if details:
        body["details"] = details
    return body


def _field_path(loc) -> str:
    parts = [str(p) for p in loc if p not in _LOCATION_PREFIXES]
    return ".".join(parts) or "body"


def setup_exception_handlers(app: FastAPI):

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        return JSONResponse(
            status_code=exc.status_code,
            content=jsonable_encoder(error_body(exc.message, exc.code, exc.details)),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        details = [
            {"field": _field_path(err.get("loc", ())), "message": err.get("msg", "Invalid value")}
            for err in exc.errors()
        ]
        return JSONResponse(
            status_code=400,
            content=jsonable_encoder(error_body("Validation failed", "ValidationError", details)),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        code = "NotFound" if exc.status_code == 404 else "HttpError"
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(str(exc.detail), code),
            headers=getattr(exc, "headers", None),
        )

    # Catch all unhandled exceptions
    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        body = error_body("Internal server error", "Internal")
        if not get_settings().is_production:
            body["detail"] = f"{type(exc).__name__}: {exc}"
        return JSONResponse(status_code=500, content=body)


def setup_request_logging(app: FastAPI):

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        # Unhandled errors surface as 500 from the generic handler
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            elapsed_ms = (time.perf_counter() - started) * 1000
            access_logger.info(
                "%s %s -> %s (%.1f ms)",
                request.method, request.url.path, status_code, elapsed_ms,
            )
