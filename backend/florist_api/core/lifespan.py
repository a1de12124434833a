"""
Application lifespan handler.
Manages startup and shutdown events for the FastAPI application.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from shared.infrastructure.db import engine, SessionLocal
from shared.config.settings import settings
from shared.config.logging import setup_logging, florist_api_logger as logger
from florist_api.models import Base
from florist_api.seed import seed
from florist_api.services.clock import operating_zone


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.
    Runs on startup and shutdown.
    """
    setup_logging()

    # Validate production secrets before startup
    secret_errors = settings.validate_production_secrets()
    if secret_errors:
        for error in secret_errors:
            logger.error("Configuration error: %s", error)
        if settings.environment == "production":
            raise RuntimeError(
                f"Production configuration errors: {'; '.join(secret_errors)}. "
                "Server will not start with insecure configuration."
            )
        else:
            logger.warning(
                "Running with insecure defaults (acceptable for development only)"
            )

    # Fail fast on a misconfigured zone rather than on the first analytics call
    zone = operating_zone()

    logger.info(
        "Starting florist API",
        port=settings.rest_api_port,
        env=settings.environment,
        timezone=zone.key,
    )

    Base.metadata.create_all(bind=engine)
    logger.info("Database tables created/verified")

    with SessionLocal() as db:
        seed(db)

    yield

    logger.info("Shutting down florist API")
    engine.dispose()
