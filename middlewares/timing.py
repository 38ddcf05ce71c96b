import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

logger = logging.getLogger(__name__)


class TimingMiddleware(BaseHTTPMiddleware):
    """X-Latency-Ms on every response; requests slower than `slow_ms` are logged as warnings."""

    def __init__(self, app, slow_ms: int = 1000):
        super().__init__(app)
        self.slow_ms = slow_ms

    async def dispatch(self, request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed = int((time.perf_counter() - started) * 1000)
        response.headers["X-Latency-Ms"] = str(elapsed)

        line = f"{request.method} {request.url.path} {response.status_code} {elapsed}ms"
        if elapsed >= self.slow_ms:
            logger.warning(f"slow request: {line}")
        else:
            logger.debug(line)
        return response
