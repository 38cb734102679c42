"""
Request logging middleware.
Logs method, path, status and duration for every request.
"""

import time

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from core.logging import get_logger, log_request

logger = get_logger("http")


class RequestLoggingMiddleware(BaseHTTPMiddleware):

    async def dispatch(self, request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - started) * 1000
        log_request(logger, request.method, request.url.path, response.status_code, duration_ms)
        return response
