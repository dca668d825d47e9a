"""Main entry point for the Quizboard application."""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.gzip import GZipMiddleware

from quizboard.api.v1 import (
    ingestion_router,
    problem_sets_router,
    questions_router,
    reputation_router,
    votes_router,
)
from quizboard.core.settings import settings

logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

# Initialize FastAPI app
app = FastAPI(
    title="Quizboard API",
    description="Community quiz platform with reputation-backed content issuance",
    version=settings.app_version,
)

# Add GZip middleware for compression
app.add_middleware(GZipMiddleware)

# Include API routers
app.include_router(votes_router, prefix="/api/v1")
app.include_router(reputation_router, prefix="/api/v1")
app.include_router(questions_router, prefix="/api/v1")
app.include_router(problem_sets_router, prefix="/api/v1")
app.include_router(ingestion_router, prefix="/api/v1")


@app.get("/health")
def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


@app.get("/")
def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
        "redoc": "/redoc",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("quizboard.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
