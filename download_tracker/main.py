"""
FastAPI application entry point.

Initializes FastAPI app, registers routers, adds middleware, and configures lifespan.

Dependencies: fastapi, download_tracker.api, download_tracker.observability, download_tracker.configs
System role: Application initialization and configuration
"""

from contextlib import asynccontextmanager
import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from download_tracker import __version__
from download_tracker.configs import get_settings
from download_tracker.api import api_router
from download_tracker.boundary.db import (
    get_async_engine,
    get_async_session_factory,
    init_models,
)
from download_tracker.core.download_lifecycle import DownloadLifecycleEngine
from download_tracker.observability.logger import configure_logging
from download_tracker.observability.middleware import (
    RequestLoggingMiddleware,
    CorrelationMiddleware,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Handles startup and shutdown events.
    Creates tables, starts the download lifecycle engine and resumes
    downloads left over by a previous process.
    """
    # Startup
    settings = get_settings()
    configure_logging(settings.log_level)
    logger.info("Application startup: logging configured")

    try:
        engine = get_async_engine()
        await init_models(engine)
        logger.info("Database tables ready")

        download_engine = DownloadLifecycleEngine(
            session_factory=get_async_session_factory(),
            settings=settings.downloads,
        )
        app.state.download_engine = download_engine

        resumed = await download_engine.recover()
        logger.info(
            "Application startup complete",
            extra={"resumed_downloads": resumed},
        )
    except Exception as e:
        logger.exception(
            "Failed to initialize application resources",
            extra={"error": str(e)},
        )
        raise

    yield

    # Shutdown
    logger.info("Application shutdown")
    await app.state.download_engine.shutdown()
    await get_async_engine().dispose()


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application.

    Returns:
        FastAPI: Configured application instance
    """
    settings = get_settings()

    app = FastAPI(
        title="Download Tracker API",
        description="Per-user image download jobs with progress tracking",
        version=__version__,
        debug=settings.debug,
        lifespan=lifespan,
    )

    # Add observability middleware (added first = last to execute)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register API routes
    app.include_router(api_router, prefix="/api/v1")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "download_tracker.main:app",
        host="localhost",
        port=8082,
        reload=settings.debug,
    )
