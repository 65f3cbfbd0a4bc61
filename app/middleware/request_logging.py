from fastapi import Request
import logging
import time
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger("app")

# Asset requests would drown out the page traffic
QUIET_PREFIXES = ("/statics/",)

class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """One line per page request: who, what, outcome and duration.

    Form bodies are never logged since login and register carry passwords.
    """

    async def dispatch(self, request: Request, call_next):
        if request.url.path.startswith(QUIET_PREFIXES):
            return await call_next(request)

        started = time.perf_counter()
        response = await call_next(request)
        elapsed = time.perf_counter() - started

        target = request.url.path
        if request.url.query:
            target = f"{target}?{request.url.query}"
        client = request.client.host if request.client else "-"

        level = logging.ERROR if response.status_code >= 500 else logging.INFO
        logger.log(level, f"{client} {request.method} {target} -> {response.status_code} ({elapsed * 1000:.1f}ms)")

        return response
