# src/vibeshift/main.py
"""Main entry point for the VibeShift counter service."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from vibeshift.api import shifters_router
from vibeshift.api.endpoints.shifters import STORE_FAILURE_MESSAGES
from vibeshift.core.errors import InvalidInput, StoreUnavailable
from vibeshift.core.logging import configure_logging
from vibeshift.core.settings import settings
from vibeshift.db.session import create_tables
from vibeshift.services.assignment import MISSING_FINGERPRINT

logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title=f"{settings.app_name} API",
    description="Fingerprint-deduplicated membership counter",
    version=settings.app_version,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# Add GZip middleware for compression
app.add_middleware(GZipMiddleware)

# Include API routers
app.include_router(shifters_router, prefix="/api")


@app.exception_handler(InvalidInput)
async def invalid_input_handler(request: Request, exc: InvalidInput) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": str(exc)})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Unparseable or fingerprint-less bodies are treated like an empty fingerprint.
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": MISSING_FINGERPRINT},
    )


@app.exception_handler(StoreUnavailable)
async def store_unavailable_handler(request: Request, exc: StoreUnavailable) -> JSONResponse:
    logger.error("%s %s failed: %s", request.method, request.url.path, exc, exc_info=exc)
    message = STORE_FAILURE_MESSAGES.get(request.url.path, "Internal server error")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": message},
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "%s %s raised unexpectedly: %s", request.method, request.url.path, exc, exc_info=exc
    )
    message = STORE_FAILURE_MESSAGES.get(request.url.path, "Internal server error")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": message},
    )


@app.on_event("startup")
async def on_startup() -> None:
    if settings.create_tables_on_startup:
        logger.info("Creating identity store tables")
        create_tables()


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "name": f"{settings.app_name} API",
        "version": settings.app_version,
        "description": "Fingerprint-deduplicated membership counter",
        "docs": "/docs",
        "redoc": "/redoc",
    }


def run() -> None:
    """Serve the API with uvicorn on the configured host and port."""
    import uvicorn

    configure_logging()
    logger.info("Server is live on http://localhost:%d", settings.port)
    uvicorn.run(
        "vibeshift.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
