import logging
import time
import uuid
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

access_log = logging.getLogger("app.access")


class RequestIdMiddleware(BaseHTTPMiddleware):
    """
    Ensures every request has a request-id, placed into response headers.
    Uses configured header name (default X-Request-Id).
    """

    def __init__(self, app, header_name: str = "X-Request-Id"):
        super().__init__(app)
        self.header_name = header_name

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        rid = request.headers.get(self.header_name) or str(uuid.uuid4())
        request.state.request_id = rid

        response = await call_next(request)
        response.headers[self.header_name] = rid
        return response


class AccessLogMiddleware(BaseHTTPMiddleware):
    """
    One structured log line per request. Must be installed inside
    RequestIdMiddleware so request.state.request_id is already set.
    """

    def __init__(self, app, exclude_paths: set[str] | None = None):
        super().__init__(app)
        self._exclude = exclude_paths or set()

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        path = request.url.path
        if path in self._exclude:
            return await call_next(request)

        start = time.perf_counter()
        extra = {
            "http_method": request.method.upper(),
            "path": path,
            "request_id": getattr(request.state, "request_id", None),
        }
        try:
            response = await call_next(request)
        except Exception:
            extra["duration_ms"] = round((time.perf_counter() - start) * 1000.0, 2)
            access_log.exception("request_error", extra=extra)
            raise

        extra["status_code"] = response.status_code
        extra["duration_ms"] = round((time.perf_counter() - start) * 1000.0, 2)
        access_log.info("request", extra=extra)
        return response
