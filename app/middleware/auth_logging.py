from fastapi import Request
import logging
from starlette.middleware.base import BaseHTTPMiddleware

from app.core.config import settings

logger = logging.getLogger("app")

# Pages that only make sense for a logged in user
PROTECTED_PREFIXES = ("/create/post", "/reaction/")

class AuthLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        path = request.url.path
        has_session = settings.SESSION_COOKIE_NAME in request.cookies

        if not has_session and path.startswith(PROTECTED_PREFIXES):
            logger.warning(f"Protected page {path} accessed without a session cookie")

        # Process the request
        response = await call_next(request)

        # Auth failures end as a redirect to the login page
        if response.status_code == 303 and response.headers.get("location") == "/login":
            logger.warning(f"Auth redirect to /login from {request.method} {path}")
        elif response.status_code == 403:
            logger.warning(f"Rejected form submission on {path}")

        return response
