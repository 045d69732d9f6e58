"""FastAPI application entry point."""

from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from taskboard.api import router
from taskboard.api.limits import limiter
from taskboard.config import get_settings
from taskboard.database import init_db, close_db
from taskboard.logging_config import setup_logging
from taskboard.models import utcnow
from taskboard.schemas.base import HealthResponse


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    await init_db()
    logger.info("{} API started", app.title)

    yield

    # Shutdown
    await close_db()
    logger.info("{} API stopped", app.title)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Track tasks and the files attached to them",
        version=settings.app_version,
        lifespan=lifespan,
    )

    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    if settings.cors_enabled:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_allow_origins,
            allow_methods=settings.cors_allow_methods,
            allow_headers=settings.cors_allow_headers,
            allow_credentials=settings.cors_allow_credentials,
            max_age=settings.cors_max_age,
        )

    @app.middleware("http")
    async def log_unhandled_errors(request: Request, call_next):
        """Log store/transport failures before they propagate."""
        try:
            return await call_next(request)
        except Exception:
            logger.exception("Unhandled error on {} {}", request.method, request.url.path)
            raise

    # Include API routes
    app.include_router(router)

    @app.get("/health", response_model=HealthResponse, operation_id="healthcheck")
    async def health_check():
        """Health check endpoint."""
        return HealthResponse(status="ok", timestamp=utcnow())

    return app


app = create_app()


def run_server(host: str | None = None, port: int | None = None):
    """Run the API server."""
    settings = get_settings()
    setup_logging(settings)
    uvicorn.run(
        "taskboard.main:app",
        host=host or settings.api_host,
        port=port or settings.api_port,
        reload=settings.debug,
    )


if __name__ == "__main__":
    run_server()
