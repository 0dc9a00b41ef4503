# launchboard/exceptions/handlers.py
from fastapi import FastAPI, Request, HTTPException
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from launchboard.middleware.tracing import get_client_ip
from launchboard.db.gateway import GatewayError
from launchboard.core import tracing
import time


def get_safe_headers(request: Request) -> dict:
    """Extract and mask sensitive headers for logging"""
    headers = request.headers
    return {
        "user_agent": headers.get("user-agent", "unknown"),
        "authorization": (headers.get("authorization", "")[:10] + "...") if headers.get("authorization") else "none",
    }


def _error_body(detail, status_code: int, **extra) -> dict:
    return {
        "detail": detail,
        "status_code": status_code,
        "trace_id": tracing.get_current_trace_id(),
        "timestamp": time.time(),
        **extra
    }


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    log = tracing.error if exc.status_code >= 500 else tracing.warning
    log(
        f"HTTP {exc.status_code}: {exc.detail}",
        url=str(request.url),
        ip=get_client_ip(request),
        **get_safe_headers(request)
    )

    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(exc.detail, exc.status_code, path=request.url.path),
        headers=getattr(exc, 'headers', None)
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [
        {
            "field": " -> ".join(str(x) for x in error["loc"]),
            "message": error["msg"],
            "type": error["type"]
        }
        for error in exc.errors()
    ]

    tracing.warning(
        f"Validation error: {len(errors)} errors",
        url=str(request.url),
        ip=get_client_ip(request),
        fields=[e["field"] for e in errors]
    )

    return JSONResponse(
        status_code=422,
        content=_error_body("Validation error", 422, errors=errors)
    )


async def gateway_exception_handler(request: Request, exc: GatewayError) -> JSONResponse:
    tracing.error(
        f"Data gateway failure: {exc}",
        url=str(request.url),
        table=exc.table,
        operation=exc.operation
    )

    return JSONResponse(
        status_code=503,
        content=_error_body("Data store unavailable", 503)
    )


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    tracing.error(
        f"Unhandled exception: {str(exc)}",
        url=str(request.url),
        ip=get_client_ip(request),
        error_type=type(exc).__name__,
        **get_safe_headers(request)
    )

    return JSONResponse(
        status_code=500,
        content=_error_body("Internal server error", 500, error_type=type(exc).__name__)
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(GatewayError, gateway_exception_handler)
    app.add_exception_handler(Exception, global_exception_handler)
