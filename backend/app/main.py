"""
Main Backend FastAPI application.
"""
import logging
import sys
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from .core.config import settings
from .core.pricing_policy import get_pricing_policy
from .api.v1.auth import router as auth_router
from .api.v1.rates import router as rates_router, limiter

log_level = logging.DEBUG if settings.debug else logging.INFO

logging.basicConfig(
    level=log_level,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    stream=sys.stdout
)

logging.getLogger("uvicorn.access").setLevel(logging.WARNING)  # Reduce access log noise
logging.getLogger("httpx").setLevel(logging.WARNING)  # Supabase client request logs

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifespan events.

    Builds the pricing policy at startup so a bad configuration fails fast.
    """
    logger.info("🚀 Starting Earner Rates API...")

    policy = get_pricing_policy()
    logger.info(
        f"✅ Pricing policy loaded: rates {policy.min_rate}-{policy.max_rate} credits, "
        f"consistency factor {policy.rate_consistency_factor}, "
        f"floor {policy.min_per_minute_rate} credits/min"
    )

    yield

    logger.info("🔴 Application shutdown complete")


def create_application() -> FastAPI:
    """Create and configure the FastAPI application."""

    app = FastAPI(
        title=settings.project_name,
        description="Earner call rate validation, derivation and persistence",
        version="1.0.0",
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )
    logger.info(f"🔒 CORS configured with {len(settings.allowed_origins)} origins")

    # Public rate cards are rate limited per IP
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    app.include_router(auth_router, prefix=settings.api_v1_str)
    app.include_router(rates_router, prefix=settings.api_v1_str)

    return app


# Create the FastAPI app instance
app = create_application()


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Earner Rates API",
        "version": "1.0.0",
        "status": "running",
        "docs": "/docs" if settings.debug else "disabled",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "service": "earner-rates-api",
        "environment": settings.environment,
        "debug": settings.debug,
    }
