"""Bind per-request context into every log entry emitted while the request is handled."""

import time

import structlog
from asgi_correlation_id import correlation_id
from fastapi import FastAPI, Request, Response
from starlette.middleware.base import RequestResponseEndpoint

from ..core.log_config import logger


def add_logging_middleware(app: FastAPI) -> None:
    @app.middleware('http')
    async def logging_context(request: Request, call_next: RequestResponseEndpoint) -> Response:
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=correlation_id.get(),
            method=request.method,
            path=request.url.path,
        )

        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            logger.exception('Unhandled error while handling request')
            raise
        finally:
            duration_ms = round((time.perf_counter() - start) * 1000, 2)
            structlog.contextvars.bind_contextvars(duration_ms=duration_ms)

        logger.info('Request handled', status_code=response.status_code)
        return response
