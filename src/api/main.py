"""
FastAPI application factory and configuration.

This module creates the FastAPI application instance,
configures middleware, exception handlers, and lifespan events.
"""

import asyncio
import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import datetime, timezone

import uvicorn
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from src.adapters.smtp.smtp import SmtpEmailSender
from src.api.models import ApiInfoResponse, HealthResponse
from src.api.routes import router, validation_exception_handler
from src.config.settings import Settings, get_settings

logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"

# OpenAPI tags for documentation grouping
tags_metadata = [
    {
        "name": "registration",
        "description": "Prospective student registration with email confirmation",
    },
]


def log_configuration(settings: Settings) -> None:
    """Log the startup banner and configuration summary. Secrets are never logged."""
    logger.info("=" * 50)
    logger.info("Server running on http://localhost:%s", settings.port)
    logger.info("Send requests to http://localhost:%s/api/register", settings.port)
    logger.info("=" * 50)
    logger.info("Configuration:")
    logger.info("   EMAIL_USER: %s", "set" if settings.email_user else "not set")
    logger.info("   EMAIL_PASSWORD: %s", "set" if settings.email_password else "not set")
    logger.info("   SMTP_HOST: %s", settings.smtp_host)
    logger.info("   SMTP_PORT: %s", settings.smtp_port)
    logger.info("=" * 50)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    FastAPI lifespan context manager.

    Manages application startup and shutdown:
    - Builds the SMTP sender from the immutable transport configuration
    - Schedules the SMTP probe in the background (logged, never fatal)
    - Cancels a still-running probe on shutdown
    """
    settings = get_settings()

    logger.info("Starting application...")
    log_configuration(settings)

    email_sender = SmtpEmailSender(settings.transport_config())
    app.state.email_sender = email_sender

    probe: asyncio.Task[bool] | None = None
    if settings.smtp_verify_on_startup:
        # Requests are served while the probe runs
        probe = asyncio.create_task(asyncio.to_thread(email_sender.verify))
    app.state.smtp_probe = probe

    logger.info("Application startup complete")

    yield

    # Shutdown
    logger.info("Shutting down application...")
    if probe is not None and not probe.done():
        probe.cancel()


app = FastAPI(
    title="Tek School Backend API",
    description="Registration API - Accepts prospective students and sends a confirmation email",
    version=API_VERSION,
    openapi_tags=tags_metadata,
    lifespan=lifespan,
)

# Permissive CORS - all origins allowed
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(RequestValidationError, validation_exception_handler)

app.include_router(router, prefix="/api")


@app.get("/api/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Health check endpoint.

    Always returns 200 OK; independent of SMTP configuration or state.
    """
    timestamp = datetime.now(timezone.utc).isoformat(timespec="milliseconds")
    return HealthResponse(
        status="Server is running",
        timestamp=timestamp.replace("+00:00", "Z"),
    )


@app.get("/", response_model=ApiInfoResponse)
async def root() -> ApiInfoResponse:
    """Describe the API and its endpoints."""
    return ApiInfoResponse(
        message="Tek School Backend API",
        version=API_VERSION,
        endpoints={
            "register": "POST /api/register",
            "health": "GET /api/health",
        },
    )


def run() -> None:
    """Configure logging and serve the application with uvicorn."""
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
