"""FastAPI application entrypoint. No business logic; only wiring, start-up bootstrap and error mapping."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from dotenv import load_dotenv

load_dotenv()

from fastapi import FastAPI
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware

from appsimple import __version__
from appsimple.api.deps import get_bootstrap
from appsimple.api.errors import register_error_handlers
from appsimple.api.v1 import router as v1_router
from appsimple.core.config import get_settings
from appsimple.core.logs import configure_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Ensure schema and protected admin before serving (idempotent)."""
    await run_in_threadpool(get_bootstrap().bootstrap)
    logger.info("Database bootstrap complete")
    yield


def create_app() -> FastAPI:
    """
    Build the API from get_settings(), the same source the service dependencies
    and the start-up bootstrap read. Raises pydantic.ValidationError on a broken
    configuration.
    """
    settings = get_settings()
    configure_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title="AppSimple API",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.APP_ENV == "dev" else [],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)
    app.include_router(v1_router, prefix=settings.API_V1_PREFIX)

    @app.get("/")
    def root() -> dict[str, str]:
        """Root route; minimal payload for discovery."""
        return {"message": "AppSimple API is running."}

    return app


app = create_app()
