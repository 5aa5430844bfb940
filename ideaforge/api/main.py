"""
Main FastAPI application for the IdeaForge API.

Turns free-text project ideas into validated, versioned project bundles.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from ideaforge import __version__
from ideaforge.api.dependencies import current_job_tracker
from ideaforge.api.error_handlers import register_error_handlers
from ideaforge.api.middleware import CorrelationIDMiddleware
from ideaforge.api.routers import ai_router, health_router
from ideaforge.core.config import settings
from ideaforge.core.database import engine, init_database
from ideaforge.core.logging import configure_logging

logger = logging.getLogger(__name__)


def create_app(init_db: bool = True) -> FastAPI:
    """
    Build the application.

    Args:
        init_db: Create tables on startup (tests that override the
            store pass False)
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        configure_logging(settings.LOG_LEVEL, settings.LOG_FORMAT)
        logger.info(f"Starting IdeaForge API (provider={settings.AI_PROVIDER})")

        if init_db:
            try:
                await init_database()
            except Exception as e:
                logger.error(f"Database initialization failed: {e}")
                raise

        yield

        logger.info("Shutting down IdeaForge API...")
        tracker = current_job_tracker()
        if tracker is not None:
            await tracker.wait_idle()
        if init_db:
            await engine.dispose()

    app = FastAPI(
        title="IdeaForge",
        description="AI project bundle generation",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(CorrelationIDMiddleware)
    register_error_handlers(app)

    app.include_router(health_router)
    app.include_router(ai_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "ideaforge.api.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=False,
    )
