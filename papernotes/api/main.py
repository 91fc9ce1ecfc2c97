"""
FastAPI application with assembled routers.

Initializes FastAPI app with the health and notes routers and configures
the uvicorn server.

Dependencies: fastapi, papernotes.api.routers, uvicorn
System role: API entry point with router assembly and server launch
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from papernotes.api.deps.dependencies import get_service_cache
from papernotes.core.exceptions import ConfigurationError
from papernotes.observability.logger import configure_logging
from papernotes.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware

from .routers import health_router, notes_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Configures logging, pre-warms the notes pipeline and creates the
    relational schema on startup; releases the database pool on shutdown.
    """
    cache = get_service_cache()
    configure_logging(cache.settings.log_level)
    logger = logging.getLogger("uvicorn")

    # Startup
    logger.info("Pre-warming service cache...")
    try:
        pipeline = cache.notes_pipeline
        await pipeline.initialize()
        logger.info("Service cache pre-warmed")
    except ConfigurationError as e:
        logger.warning(f"Notes pipeline not available until configured: {e}")

    yield

    # Shutdown
    await cache.aclose()
    logger.info("Service cache cleared")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Returns:
        FastAPI: Configured application instance with all routers registered
    """
    app = FastAPI(
        title="Paper Notes API",
        description="Takes structured notes on arXiv papers and indexes their text",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add observability middleware
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    app.include_router(health_router)
    app.include_router(notes_router)

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "papernotes.api.main:app",
        host="0.0.0.0",
        port=8000,
    )
