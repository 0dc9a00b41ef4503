# launchboard/middleware/tracing.py - Request tracing middleware
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
import time
from typing import Callable

from launchboard.core import tracing


def get_client_ip(request: Request) -> str:
    """Best-effort client address for logs"""
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


class TracingMiddleware(BaseHTTPMiddleware):
    """
    Request tracing middleware
    - Starts a trace per request (honours an incoming X-Trace-ID)
    - Adds trace headers to all responses
    - Logs request and response timing
    """

    def __init__(self, app, log_requests: bool = True, log_responses: bool = True):
        super().__init__(app)
        self.log_requests = log_requests
        self.log_responses = log_responses

    async def dispatch(self, request: Request, call_next: Callable):
        start_time = time.perf_counter()
        client_ip = get_client_ip(request)
        trace_id = tracing.start_trace(request.headers.get("x-trace-id"))

        if self.log_requests:
            tracing.info(f"{request.method} {request.url.path}", ip=client_ip)

        try:
            response = await call_next(request)
        except Exception as e:
            process_time = time.perf_counter() - start_time
            tracing.error(
                f"Request failed: {e} in {process_time:.3f}s",
                path=request.url.path,
                error_type=type(e).__name__
            )
            raise

        process_time = time.perf_counter() - start_time
        response.headers["X-Trace-ID"] = trace_id
        response.headers["X-Request-ID"] = trace_id

        if self.log_responses:
            tracing.info(
                f"{response.status_code} {request.method} {request.url.path} in {process_time:.3f}s",
                status_code=response.status_code
            )

        return response
