"""FastAPI application configuration and setup."""

import logging
import time
from contextlib import asynccontextmanager
from typing import Any, Dict, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ... import __version__
from ...infrastructure.monitoring.logging_setup import setup_logging
from .dependencies.container import Container
from .middleware.error_handler import ErrorHandlerMiddleware
from .routes.ptce import router as ptce_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Set up logging and the container on startup; release the container on shutdown."""
    settings = app.state.container.settings
    setup_logging(settings.log_level, log_file=settings.log_file, json_format=settings.log_json)
    logger.info("Starting PTCE API")
    await app.state.container.wire_dependencies()
    yield
    logger.info("Shutting down PTCE API")
    await app.state.container.cleanup()


def create_app(container: Optional[Container] = None) -> FastAPI:
    """Create and configure FastAPI application."""
    app = FastAPI(
        title="Predictive Triadic Consensus Engine API",
        description="Pairwise winner determination by three criterion-bound evaluators",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.container = container or Container()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(ErrorHandlerMiddleware)

    app.include_router(ptce_router, prefix="/api/ptce", tags=["PTCE"])

    @app.get("/health", tags=["Health"])
    async def health_check() -> Dict[str, Any]:
        """Health check endpoint."""
        return {"status": "healthy", "timestamp": int(time.time()), "version": __version__}

    return app
