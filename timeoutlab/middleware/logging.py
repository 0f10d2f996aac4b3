import time

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from timeoutlab.api.delay import APPLIED_SLEEP_HEADER

logger = structlog.get_logger()


class LoggingMiddleware(BaseHTTPMiddleware):
    """Access log for the delay server.

    Logs the delay the caller asked for, the delay the server applied after
    capping, and the latency until the response started.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        start = time.perf_counter()
        response = await call_next(request)
        latency_ms = round((time.perf_counter() - start) * 1000, 2)

        logger.info(
            "server.request",
            method=request.method,
            path=request.url.path,
            requested_sleep_ms=request.query_params.get("sleep") or request.query_params.get("duration"),
            applied_sleep_ms=response.headers.get(APPLIED_SLEEP_HEADER),
            status=response.status_code,
            latency_ms=latency_ms,
        )
        return response
