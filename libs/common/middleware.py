"""Observability middleware and error handlers for FastAPI.

Provides:
- Request ID generation and propagation
- Request/response timing
- A JSON error response for backend (database) failures

Usage:
    from libs.common.middleware import add_observability_middleware

    app = FastAPI()
    add_observability_middleware(app)
"""
import time
from typing import Callable

from fastapi import FastAPI, Request, Response
from sqlalchemy.exc import SQLAlchemyError
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse

from libs.common.logging import (
    clear_request_context,
    configure_logging,
    get_logger,
    set_request_context,
)

logger = get_logger(__name__)


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Sets request context for tracing and logs the request lifecycle.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = set_request_context(
            request_id=request.headers.get("X-Request-ID"),
            path=request.url.path,
            method=request.method,
        )

        start_time = time.perf_counter()

        try:
            response = await call_next(request)

            duration_ms = (time.perf_counter() - start_time) * 1000

            # Skip noisy health checks
            if request.url.path != "/health":
                log_level = "warning" if response.status_code >= 400 else "info"
                getattr(logger, log_level)(
                    "Request completed",
                    extra={
                        "extra_fields": {
                            "status_code": response.status_code,
                            "duration_ms": round(duration_ms, 2),
                        }
                    },
                )

            response.headers["X-Request-ID"] = request_id
            return response

        except Exception as e:
            duration_ms = (time.perf_counter() - start_time) * 1000
            logger.exception(
                "Request failed with unhandled exception",
                extra={
                    "extra_fields": {
                        "error": str(e),
                        "duration_ms": round(duration_ms, 2),
                    }
                },
            )
            raise

        finally:
            clear_request_context()


async def backend_error_handler(request: Request, exc: SQLAlchemyError) -> Response:
    """
    Surface a failed backend read/write as a transient, non-fatal error.

    Writes are not retried; the caller decides whether to try again.
    """
    logger.error("Backend operation failed: %s", exc, exc_info=exc)
    return JSONResponse(
        status_code=503,
        content={"detail": "Store backend unavailable", "code": "BACKEND_ERROR"},
    )


def add_observability_middleware(app: FastAPI) -> None:
    """
    Add logging, request-context middleware and backend error handling to an app.
    """
    configure_logging()

    app.add_middleware(RequestContextMiddleware)
    app.add_exception_handler(SQLAlchemyError, backend_error_handler)

    logger.info("Observability middleware initialized")
