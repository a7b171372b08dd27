"""FastAPI application entry point."""

import logging
import os
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from little_learners.api import content, dashboard, progress
from little_learners.api.routes import router
from little_learners.config import Settings, get_settings
from little_learners.db import get_session_factory, init_db
from little_learners.errors import install_error_handlers
from little_learners.storage.seed import seed_catalogs

# Configure structlog based on environment
is_production = os.getenv("ENV", "development").lower() == "production"

if is_production:
    # Production: JSON format for machine parsing
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(logging.INFO),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
else:
    # Development: console format for human readability
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(logging.DEBUG),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

logger = structlog.get_logger()
settings = get_settings()


def create_app(settings: Settings) -> FastAPI:
    """Build the API application for the given settings."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Create tables and seed empty catalogs before serving requests."""
        init_db()
        if settings.seed_content:
            db = get_session_factory()()
            try:
                seed_catalogs(db, settings.content_dir)
            finally:
                db.close()
        logger.info("app_started", host=settings.host, port=settings.port)
        yield

    app = FastAPI(title="Little Learners", version="0.1.0", lifespan=lifespan)

    # Added before CORS so CORS is the outer layer
    @app.middleware("http")
    async def auth_middleware(request: Request, call_next):
        """Optional APP_SECRET check on API requests."""
        if not settings.app_secret or request.method == "OPTIONS":
            return await call_next(request)
        if not request.url.path.startswith("/api") or request.url.path == "/api/health":
            return await call_next(request)
        secret = request.headers.get("X-App-Secret", "")
        if secret != settings.app_secret:
            return JSONResponse({"error": "unauthorized", "message": "Unauthorized"}, status_code=401)
        return await call_next(request)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(router)
    app.include_router(progress.router)
    app.include_router(content.router)
    app.include_router(dashboard.router)
    install_error_handlers(app)
    return app


app = create_app(settings)


def main() -> None:
    """Run the application."""
    uvicorn.run(
        "little_learners.main:app",
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level="info",
    )


if __name__ == "__main__":
    main()
