"""
Request logging middleware.
Assigns a request id, logs one line per request and adds tracing headers.
"""

from typing import Callable
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
import logging
import time
import uuid

logger = logging.getLogger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Tags each request with ``request.state.request_id`` (reused by the error
    handlers) and reports its duration in ``X-Processing-Time``.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())[:8]
        request.state.request_id = request_id

        start_time = time.time()
        try:
            response = await call_next(request)
        except Exception as exc:
            processing_time = time.time() - start_time
            logger.error(
                f"Request error [{request_id}]: {type(exc).__name__} - {exc} "
                f"(processing_time: {processing_time:.3f}s)",
                extra={
                    "request_id": request_id,
                    "path": request.url.path,
                    "method": request.method,
                    "processing_time": processing_time,
                },
            )
            raise

        processing_time = time.time() - start_time
        log = logger.warning if response.status_code >= 500 else logger.info
        log(
            f"{request.method} {request.url.path} -> {response.status_code} "
            f"[{request_id}] {processing_time:.3f}s",
            extra={
                "request_id": request_id,
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "processing_time": processing_time,
            },
        )

        response.headers["X-Request-ID"] = request_id
        response.headers["X-Processing-Time"] = f"{processing_time:.3f}"
        return response
