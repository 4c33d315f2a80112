from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tracker.core import settings, setup_logging, get_logger
from tracker.exceptions import AppException, app_exception_handler, general_exception_handler
from tracker.api.v1 import api_router
from tracker.db import Base, engine, SessionLocal
from tracker.testing import is_test_mode, configure_test_overrides
from tracker.workspace import WorkspaceRegistry

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup
    setup_logging()
    logger.info("Starting up Daily Task Tracker API")

    # Supabase tables usually exist already; this only fills gaps locally
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables created/verified")

    yield

    # Shutdown: pending autosaves are dropped with their editors
    await app.state.workspaces.close()
    logger.info("Shutting down Daily Task Tracker API")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    app = FastAPI(
        title=settings.api_title,
        version=settings.api_version,
        description=settings.api_description,
        lifespan=lifespan
    )

    cors_origins = settings.cors_origins
    if settings.environment == "production":
        localhost_origins = [origin for origin in cors_origins if "localhost" in origin or "127.0.0.1" in origin]
        if localhost_origins:
            logger.warning(f"Production environment detected with localhost origins: {localhost_origins}")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    # Exception handlers
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    # Include API routes
    app.include_router(api_router)

    # One workspace per signed-in user, loaded on first request
    app.state.workspaces = WorkspaceRegistry(SessionLocal)

    if is_test_mode():
        configure_test_overrides(app)

    @app.get("/")
    async def root():
        """Root endpoint for basic health check."""
        return {"status": "ok", "message": "Daily Task Tracker API is running"}

    @app.get("/healthz")
    async def healthz():
        """Production health check endpoint."""
        return {"status": "ok"}

    return app


# Create the app instance
app = create_app()
