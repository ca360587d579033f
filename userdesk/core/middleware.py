import logging
import time

logger = logging.getLogger(__name__)


class RequestLoggingMiddleware:
    """
    ASGI middleware that logs every HTTP request.

    One line per request: method, path, response status and duration.
    Requests that raise before a response starts are logged as 500.
    """

    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        method = scope.get("method", "UNKNOWN")
        path = scope.get("path", "/")
        start_time = time.perf_counter()

        status_code = 500

        async def send_wrapper(message):
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message.get("status", 500)
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        finally:
            duration_ms = (time.perf_counter() - start_time) * 1000
            log = logger.warning if status_code >= 500 else logger.info
            log(f"{method} {path} {status_code} {duration_ms:.1f}ms")
