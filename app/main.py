"""FastAPI application entrypoint. No business logic; only wiring, lifecycle and middleware."""

from dotenv import load_dotenv

load_dotenv()

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api import router as api_router
from app.core.config import Settings, get_settings
from app.core.database import Database
from app.core.errors import register_exception_handlers

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%SZ",
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Open the database handle at startup and dispose of it at shutdown."""
    settings: Settings = app.state.settings
    database = Database(settings.DATABASE_URL, echo=settings.DEBUG)
    if settings.AUTO_CREATE_TABLES:
        logger.info("Creating missing database tables")
        database.create_all()
    app.state.database = database
    logger.info("Store Rating API started (env=%s)", settings.APP_ENV)
    try:
        yield
    finally:
        database.dispose()
        logger.info("Store Rating API stopped")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the API for the given settings (defaults to environment settings)."""
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title="Store Rating API",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.APP_ENV == "dev" else settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)
    app.include_router(api_router, prefix=settings.API_PREFIX)

    @app.get("/", include_in_schema=False)
    def root() -> dict[str, str]:
        """Root route; minimal payload for discovery."""
        return {"message": "Store Rating API"}

    return app


app = create_app()
