"""Custom middleware for the application."""

import logging
import time
import uuid

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from storefront.config import settings

logger = logging.getLogger(__name__)

SLOW_REQUEST_SECONDS = 1.0


def is_payment_path(path: str) -> bool:
    return path.startswith(f"{settings.api_prefix}/payments")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Stamp each request with an id and log payment traffic.

    Every payment request is logged with its outcome status, since a
    redirect that went to the wrong target is otherwise invisible. Other
    requests are only logged when slow.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        started = time.perf_counter()
        request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
        request.state.request_id = request_id

        response = await call_next(request)

        elapsed = time.perf_counter() - started
        response.headers["X-Request-ID"] = request_id
        response.headers["X-Response-Time"] = f"{elapsed:.3f}s"

        path = request.url.path
        if elapsed > SLOW_REQUEST_SECONDS:
            logger.warning(
                f"SLOW REQUEST [{request_id}]: {request.method} {path} took {elapsed:.3f}s"
            )
        elif is_payment_path(path):
            logger.info(
                f"[{request_id}] {request.method} {path} -> {response.status_code} "
                f"({elapsed:.3f}s)"
            )

        return response


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers; payment responses are never cacheable."""

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        response = await call_next(request)

        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"

        if is_payment_path(request.url.path):
            response.headers["Cache-Control"] = "no-store"

        if not settings.debug:
            response.headers["Strict-Transport-Security"] = (
                "max-age=31536000; includeSubDomains"
            )

        return response
