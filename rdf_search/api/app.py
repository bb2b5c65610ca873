"""
FastAPI application definition.

This module creates and configures the FastAPI application instance,
including logging, middleware, the search pipeline and router registration.
"""

import logging
from pathlib import Path
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse

from rdf_search.api.routes import router
from rdf_search.core.config import Config, settings
from rdf_search.retrieval.pipeline import SearchPipeline, create_pipeline

STATIC_DIR = Path(__file__).resolve().parent.parent / "static"

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def create_app(
    config: Optional[Config] = None,
    pipeline: Optional[SearchPipeline] = None,
) -> FastAPI:
    """
    Build the application.

    Args:
        config: Settings to use (default: module-level settings)
        pipeline: Pre-built search pipeline; tests inject one with a fake
            transport and clock

    Returns:
        Configured FastAPI instance
    """
    config = config or settings

    app = FastAPI(
        title="RDF Paper Search API",
        description="API for searching scholarly papers in an RDF knowledge graph",
        version="0.1.0",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    if not config.SPARQL_ENDPOINT:
        logger.warning("SPARQL_ENDPOINT is not set; requests will fail until it is configured")

    app.state.pipeline = pipeline or create_pipeline(config)

    # Register API routes
    app.include_router(router)

    @app.get("/ping")
    async def ping():
        """Health check endpoint."""
        return {"message": "pong"}

    @app.get("/", include_in_schema=False)
    async def index():
        return FileResponse(STATIC_DIR / "index.html")

    return app


app = create_app()
