"""FastAPI application entry point."""

import logging
import structlog
from contextlib import asynccontextmanager
from fastapi import FastAPI

from src.api.v1.admin import router as admin_router
from src.api.v1.parts import router as parts_router
from src.config import settings

structlog.configure(
    processors=[
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.add_log_level,
        structlog.dev.ConsoleRenderer() if settings.environment == "development"
        else structlog.processors.JSONRenderer(),
    ],
    wrapper_class=structlog.make_filtering_bound_logger(
        getattr(logging, settings.log_level.upper(), logging.INFO)
    ),
)

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup and shutdown."""
    logger.info(
        "app_starting",
        environment=settings.environment,
        currency=settings.currency,
    )
    yield
    logger.info("app_shutting_down")


app = FastAPI(
    title="Parts Yard API",
    description="Auto-parts inventory: storefront prices and back-office pricing tools",
    version="0.1.0",
    lifespan=lifespan,
)

# Include routers
app.include_router(parts_router)
app.include_router(admin_router)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "name": "Parts Yard API",
        "version": "0.1.0",
        "status": "running",
    }
