"""
Global middleware and error handlers.
"""

from __future__ import annotations

import logging
import time

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from auth.errors import AuthError

logger = logging.getLogger(__name__)


def register_middleware(app: FastAPI) -> None:
    """Attach app-level middleware and the auth error handler."""

    @app.middleware("http")
    async def request_timer(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        elapsed = time.perf_counter() - start
        response.headers["X-Process-Time"] = f"{elapsed:.4f}"
        logger.debug(
            "%s %s → %d — %.3fs",
            request.method, request.url.path, response.status_code, elapsed,
        )
        return response

    @app.exception_handler(AuthError)
    async def auth_error_handler(request: Request, exc: AuthError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.to_body())
        return JSONResponse(status_code=exc.status_code, content=exc.to_body())
