"""
HTTP middleware: request ids, the structured access log and response
security headers.
"""
from __future__ import annotations

import time
import uuid
from typing import Callable

import structlog
from fastapi import FastAPI, Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from hostelhub.config.settings import settings
from hostelhub.core.logging import get_logger, request_id as request_id_var

logger = get_logger(__name__)
access_logger = structlog.get_logger("hostelhub.access")

REQUEST_ID_HEADER = "X-Request-ID"


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Tag every request with an id.

    The id is kept on ``request.state``, bound to the logging context for
    the duration of the request and echoed back in ``X-Request-ID``.
    """

    def __init__(self, app: ASGIApp, header_name: str = REQUEST_ID_HEADER):
        super().__init__(app)
        self.header_name = header_name

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        # Reuse an upstream request ID when a proxy already assigned one
        request_id = request.headers.get(self.header_name) or str(uuid.uuid4())

        request.state.request_id = request_id
        token = request_id_var.set(request_id)
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)

        response.headers[self.header_name] = request_id
        return response


class AccessLogMiddleware(BaseHTTPMiddleware):
    """One access log line per request, levelled by response status."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        started = time.perf_counter()
        response = await call_next(request)
        elapsed = time.perf_counter() - started

        response.headers["X-Process-Time"] = f"{elapsed:.4f}"

        if response.status_code >= 500:
            log = access_logger.error
        elif response.status_code >= 400:
            log = access_logger.warning
        else:
            log = access_logger.info
        log(
            "request_completed",
            request_id=getattr(request.state, "request_id", None),
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            duration=round(elapsed, 4),
            client_host=request.client.host if request.client else None,
        )
        return response


class SecurityHeadersMiddleware(BaseHTTPMiddleware):

    def __init__(self, app: ASGIApp, strict_transport: bool = False):
        super().__init__(app)
        self.strict_transport = strict_transport

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        response = await call_next(request)

        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        if self.strict_transport:
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
        return response


def register_middlewares(app: FastAPI) -> None:
    """
    Install the middleware stack.

    Starlette runs the last added middleware first, so the request id is
    assigned before the access log reads it.
    """
    app.add_middleware(AccessLogMiddleware)
    app.add_middleware(SecurityHeadersMiddleware, strict_transport=settings.is_production())
    app.add_middleware(RequestIDMiddleware)

    logger.debug("Middlewares registered", extra={"hsts": settings.is_production()})


__all__ = [
    "AccessLogMiddleware",
    "RequestIDMiddleware",
    "SecurityHeadersMiddleware",
    "register_middlewares",
]
