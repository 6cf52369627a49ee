"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pickem.config import settings
from pickem.database import init_db
from pickem.api import health, leaderboard, awards, fantasy, admin

# Configure structured logging
logging.basicConfig(format="%(message)s", level=settings.log_level)

structlog.configure(
    processors=[
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.stdlib.add_log_level,
        structlog.processors.JSONRenderer(),
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
)

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan manager."""
    logger.info("Starting Pick'em Scoring API", environment=settings.environment)
    await init_db()

    yield

    logger.info("Shutting down Pick'em Scoring API")


app = FastAPI(
    title="Pick'em Scoring API",
    description="Pick scoring, weekly awards, leaderboards and fantasy points",
    version="0.1.0",
    lifespan=lifespan,
    docs_url="/docs" if not settings.is_production else None,
    redoc_url="/redoc" if not settings.is_production else None,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(health.router, tags=["Health"])
app.include_router(leaderboard.router, prefix=settings.api_v1_prefix, tags=["Leaderboard"])
app.include_router(awards.router, prefix=settings.api_v1_prefix, tags=["Awards"])
app.include_router(fantasy.router, prefix=settings.api_v1_prefix, tags=["Fantasy"])
app.include_router(admin.router, prefix=settings.api_v1_prefix, tags=["Admin"])


@app.get("/")
async def root() -> dict:
    """Root endpoint."""
    return {
        "name": "Pick'em Scoring API",
        "version": "0.1.0",
        "docs": "/docs",
    }
