from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import RedirectResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging

from app.core.config import settings
from app.core.exceptions import AuthError, ForumError, PersistenceError
from app.core.templates import render_error
from app.db.init_db import create_all_tables
from app.db.session import SessionLocal
from app.middleware.request_logging import RequestLoggingMiddleware
from app.middleware.auth_logging import AuthLoggingMiddleware
from app.modules.auth.api.router import router as auth_router
from app.modules.auth.services.session import cleanup_expired_sessions
from app.modules.home_feed.api.router import router as home_feed_router
from app.modules.posts.api.router import router as posts_router
from app.modules.posts.comments.api.router import router as comments_router
from app.modules.posts.reactions.api.router import router as reactions_router

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger("app")

HTTP_ERROR_MESSAGES = {
    status.HTTP_404_NOT_FOUND: "Page not found",
    status.HTTP_405_METHOD_NOT_ALLOWED: "Method not allowed",
}

# Initialize the FastAPI application
app = FastAPI(
    title=settings.PROJECT_NAME,
    debug=settings.DEBUG,
    description="Discussion forum with categories, comments and reactions",
    version=settings.VERSION,
    docs_url=None,
    redoc_url=None,
    openapi_url=None,
)

@app.on_event("startup")
def startup_event():
    logger.info(f"Starting server in {settings.ENVIRONMENT} mode")

    # Schema is created idempotently
    create_all_tables()

    db = SessionLocal()
    try:
        removed = cleanup_expired_sessions(db)
        if removed:
            logger.info(f"Removed {removed} expired sessions")
    finally:
        db.close()

@app.exception_handler(AuthError)
async def auth_error_handler(request: Request, exc: AuthError):
    return RedirectResponse("/login", status_code=status.HTTP_303_SEE_OTHER)

@app.exception_handler(ForumError)
async def forum_error_handler(request: Request, exc: ForumError):
    if isinstance(exc, PersistenceError):
        logger.error(f"{request.method} {request.url.path} failed: {exc.__cause__ or exc}")
    return render_error(request, exc.message, exc.status_code)

@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    message = HTTP_ERROR_MESSAGES.get(exc.status_code, str(exc.detail))
    return render_error(request, message, exc.status_code)

@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    logger.info(f"Malformed request on {request.url.path}: {exc.errors()}")
    return render_error(request, "Bad request", status.HTTP_400_BAD_REQUEST)

# Add middleware
app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(AuthLoggingMiddleware)

# Static assets; StaticFiles never lists directories
app.mount("/statics", StaticFiles(directory=settings.STATIC_DIR), name="statics")

# Register page routers
app.include_router(home_feed_router, tags=["home feed"])
app.include_router(auth_router, tags=["authentication"])
app.include_router(posts_router, tags=["posts"])
app.include_router(comments_router, tags=["comments"])
app.include_router(reactions_router, tags=["reactions"])

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("app.main:app", host="0.0.0.0", port=8080, reload=True)
