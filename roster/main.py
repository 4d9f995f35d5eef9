import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from roster.api.router import api_router
from roster.core.config import Settings, get_settings
from roster.core.database import Database
from roster.core.errors import register_exception_handlers
from roster.core.logging_config import setup_logging

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, database: Optional[Database] = None) -> FastAPI:
    """
    Build the application around an explicit store handle.

    ``database`` defaults to one built from ``settings.database_url``; tests
    pass their own in-memory instance.
    """
    settings = settings or get_settings()
    setup_logging(settings.log_level)
    database = database or Database(settings.database_url, echo=settings.debug)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Application lifespan handler for startup and shutdown.

        Creates the schema when configured and releases the engine on exit.
        """
        # Startup
        if settings.create_tables:
            database.create_all()
        logger.info("%s started", settings.app_name)
        yield
        # Shutdown
        database.close()

    app = FastAPI(
        title=settings.app_name,
        description="Users, courses and course enrollments",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.database = database
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    @app.get("/health", tags=["health"])
    def health_check():
        """Health check endpoint."""
        return {"status": "ok"}

    # Include API routes
    app.include_router(api_router, prefix="/api")

    return app


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("roster.main:create_app", factory=True, host="0.0.0.0", port=8000)
