"""
SUSE Backend - FastAPI Application

Main entry point for the backend API.
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from suse.core.config import settings
from suse.api.v1 import router as api_v1_router
from suse.services.analysis import get_analysis_service
from suse.services.decision import get_decision_service
from suse.services.indicators import get_indicator_service

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Environment: {settings.environment}")
    logger.info(
        f"Defaults: RSI({settings.rsi_period}) EMA{settings.ema_periods} "
        f"confidence floor {settings.confidence_floor}"
    )

    yield

    # Shutdown
    logger.info("Shutting down...")


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="""
    SUSE - Sistema Unificado de Suporte Estrategico

    ## Architecture
    - **Candle Normalizer**: Repairs malformed OHLCV input
    - **Indicator Engine**: RSI, EMA, VWAP, ATR, Bollinger, Fibonacci, volume (NumPy)
    - **Decision Engine**: Ordered rule table → BUY / SELL / HOLD

    ## Core Principles
    - Deterministic and stateless per request
    - Every decision carries its explanations and warnings
    - Low confidence always means HOLD
    """,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# CORS middleware - any localhost port plus configured origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_origin_regex=r"http://(localhost|127\.0\.0\.1)(:\d+)?",
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type"],
)

# Include API routes
app.include_router(api_v1_router, prefix="/api/v1")


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    services = {
        service.name: service.health_check()
        for service in (
            get_analysis_service(),
            get_indicator_service(),
            get_decision_service(),
        )
    }
    return {
        "status": "healthy" if all(services.values()) else "degraded",
        "app": settings.app_name,
        "version": settings.app_version,
        "environment": settings.environment,
        "services": services,
    }


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "SUSE Backend API",
        "docs": "/docs",
        "health": "/health",
        "analyze": "/api/v1/analysis/analyze",
    }
