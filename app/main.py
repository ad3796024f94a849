"""
BornToMe API - FastAPI application entry point.
"""
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import get_settings
from .database import engine, Base
from . import models  # noqa: F401  registers tables on Base.metadata
from .logging_config import db_logger
from .middleware import SecurityHeadersMiddleware, RequestLoggingMiddleware
from .limiter import limiter
from .responses import api_exception_handler, request_validation_handler
from .routes import (
    auth_router,
    articles_router,
    comments_router,
    health_router,
)

settings = get_settings()

# Create tables (in production, use migrations instead)
Base.metadata.create_all(bind=engine)
db_logger.info("Database tables ensured", url=engine.url.render_as_string(hide_password=True))

app = FastAPI(
    title=settings.app_name,
    description="Backend API for articles, comments and user accounts",
    version=settings.version,
    docs_url="/api/docs" if settings.debug else None,
    redoc_url="/api/redoc" if settings.debug else None,
)

# Add rate limiter to app state
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# Errors share one JSON envelope
app.add_exception_handler(StarletteHTTPException, api_exception_handler)
app.add_exception_handler(RequestValidationError, request_validation_handler)
app.add_exception_handler(Exception, api_exception_handler)

# Security headers middleware
app.add_middleware(SecurityHeadersMiddleware)

# Request logging middleware (only in debug mode)
if settings.debug:
    app.add_middleware(RequestLoggingMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=[
        "Authorization",
        "Content-Type",
        "Accept",
        "Origin",
        "X-Requested-With",
    ],
    max_age=3600,  # Cache preflight requests for 1 hour
)

# Routes
app.include_router(auth_router)
app.include_router(articles_router)
app.include_router(comments_router)
app.include_router(health_router)


@app.get("/")
def root():
    return {
        "message": settings.app_name,
        "docs": "/api/docs" if settings.debug else "Disabled in production",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000, log_level="debug" if settings.debug else "info")
