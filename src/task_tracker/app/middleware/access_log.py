import time
import uuid
import logging
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("task_tracker.access")

# Hit every few seconds by kubelet probes and the page's config poll.
QUIET_PATHS = frozenset({"/health", "/ready", "/api/config"})


class AccessLogMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
        start = time.perf_counter()
        path = request.url.path
        level = logging.DEBUG if path in QUIET_PATHS else logging.INFO

        request.state.request_id = request_id

        logger.log(
            level,
            "request.start",
            extra={
                "category": "http",
                "event": "request.start",
                "request_id": request_id,
                "method": request.method,
                "path": path,
                "client": request.client.host if request.client else None,
            },
        )

        try:
            response: Response = await call_next(request)
        except Exception:
            duration_ms = round((time.perf_counter() - start) * 1000, 2)
            logger.exception(
                "request.error",
                extra={
                    "category": "http",
                    "event": "request.error",
                    "request_id": request_id,
                    "method": request.method,
                    "path": path,
                    "duration_ms": duration_ms,
                },
            )
            raise

        duration_ms = round((time.perf_counter() - start) * 1000, 2)
        response.headers["X-Request-ID"] = request_id

        logger.log(
            level,
            "request.end",
            extra={
                "category": "http",
                "event": "request.end",
                "request_id": request_id,
                "method": request.method,
                "path": path,
                "status_code": response.status_code,
                "duration_ms": duration_ms,
            },
        )
        return response
