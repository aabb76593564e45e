"""
DocuPicks Backend

FastAPI application entry point.
"""

import os
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded

from .config import get_settings
from .core.logging import setup_logging, get_logger
from .core.exceptions import register_exception_handlers
from .routers import docs_router, scheduler_router
from .services.scheduler import get_scheduler_service

# Initialize
settings = get_settings()
setup_logging()
logger = get_logger(__name__)

# Rate limiter
limiter = Limiter(key_func=get_remote_address)


def scheduler_enabled() -> bool:
    """Daily refresh runs in production unless disabled (serverless deploys)."""
    disabled = os.environ.get("DISABLE_SCHEDULER", "false").lower() == "true"
    return settings.environment == "production" and not disabled


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    logger.info(
        "app_startup",
        environment=settings.environment,
        debug=settings.debug
    )

    if scheduler_enabled():
        get_scheduler_service().start()
        logger.info("scheduler_auto_started")
    else:
        logger.info("scheduler_manual_mode")

    yield

    if scheduler_enabled():
        get_scheduler_service().stop()

    logger.info("app_shutdown")


# Create FastAPI app
# Swagger lives at /swagger because /docs is the documentary list
app = FastAPI(
    title="DocuPicks Backend",
    description="Daily curated documentaries from TMDB discovery and OMDb validation",
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/swagger" if settings.debug else None,
    redoc_url=None,
)

# Rate limiting
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)

# Register exception handlers
register_exception_handlers(app)

# Routers
app.include_router(docs_router)
app.include_router(scheduler_router)


@app.get("/")
async def root():
    """Service info."""
    return {
        "service": "DocuPicks Backend",
        "version": "1.0.0",
        "status": "running",
        "swagger": "/swagger" if settings.debug else "disabled",
        "scheduler": "enabled" if scheduler_enabled() else "manual",
    }


@app.get("/health")
async def health():
    """Health check for load balancers."""
    return {"status": "healthy"}
