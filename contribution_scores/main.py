"""
FastAPI application entry point for the Contribution Scores API.

Configures logging, manages the database pool lifecycle, registers the API
router and starts the ASGI server when run directly.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from contribution_scores import __version__
from contribution_scores.api import api_router
from contribution_scores.core.database import init_db, close_db

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Lifespan context manager for FastAPI application startup and shutdown events.

    On startup:
        - Initialize database connection pool

    On shutdown:
        - Close database connection pool
    """
    logger.info("Contribution Scores API starting")
    try:
        await init_db()
        logger.info("Database connection pool initialized")
    except Exception as e:
        # The pool is created lazily on the first report if this fails
        logger.error(f"Failed to initialize database: {e}")

    yield

    logger.info("Contribution Scores API shutting down")
    try:
        await close_db()
        logger.info("Database connection pool closed")
    except Exception as e:
        logger.error(f"Error closing database pool: {e}")


app = FastAPI(
    title="Contribution Scores API",
    version=__version__,
    description=(
        "Ranks wiki contributors by edit diversity (distinct pages) and "
        "edit volume over a trailing window."
    ),
    lifespan=lifespan,
)

# The wiki front-end renders the tables from these JSON reports
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:8080",  # local wiki
        "http://127.0.0.1:8080",
    ],
    allow_credentials=True,
    allow_methods=["GET"],
    allow_headers=["*"],
)

app.include_router(api_router)


@app.get("/health")
async def health_check():
    """
    Health check endpoint for monitoring and load balancer probes.

    Returns:
        Dict with status 'healthy'
    """
    return {"status": "healthy"}


@app.get("/")
async def root():
    """
    Root endpoint providing API information.
    """
    return {
        "name": "Contribution Scores API",
        "version": __version__,
        "docs": "/docs",
        "openapi": "/openapi.json",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "contribution_scores.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
