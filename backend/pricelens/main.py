"""
PriceLens Backend - FastAPI Application

Main entry point for the backend API.
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pricelens.core.config import settings
from pricelens.api.v1 import router as api_v1_router
from pricelens.services.indicators import get_indicator_service


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    print(f"Starting {settings.app_name} v{settings.app_version}")
    print(f"Environment: {settings.environment}")

    defaults = get_indicator_service().default_config
    print(f"Indicator defaults: {defaults.model_dump()}")

    yield

    # Shutdown
    print("Shutting down...")


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="""
    PriceLens Technical Analysis API

    ## Indicator Engine
    - **Moving averages**: SMA (short/long), EMA building blocks
    - **Momentum**: RSI, MACD (line, signal, histogram)
    - **Volatility**: Bollinger Bands

    ## Core Principles
    - Pure, deterministic calculations (NumPy)
    - Every series is anchored to the newest bar and carries its offset
    - Short history is never an error: unavailable indicators are empty
    """,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# CORS middleware - allow both frontend ports
cors_origins = [
    "http://localhost:3000",
    "http://localhost:3001",
    "http://127.0.0.1:3000",
    "http://127.0.0.1:3001",
]
# Add any additional origins from settings
if settings.allowed_origins:
    cors_origins.extend([o for o in settings.allowed_origins if o not in cors_origins])

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routes
app.include_router(api_v1_router, prefix="/api/v1")


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    indicators_healthy = await get_indicator_service().health_check()
    return {
        "status": "healthy" if indicators_healthy else "degraded",
        "app": settings.app_name,
        "version": settings.app_version,
        "environment": settings.environment,
    }


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "PriceLens Backend API",
        "docs": "/docs",
        "health": "/health",
    }
