"""
FastAPI application entry point for the Wecraft scoring service.
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .agents.analyst import SUPPORTED_ROLES
from .config import settings
from .routers import scores

logger = logging.getLogger("wecraft")
if not logger.handlers:
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
    logger.addHandler(handler)
logger.setLevel(settings.log_level.upper())


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown events."""
    logger.info("%s started (%d roles loaded)", settings.app_name, len(SUPPORTED_ROLES))
    yield
    logger.info("%s shutting down", settings.app_name)


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    description="Explainable engineer reputation scoring from public GitHub activity",
    version=__version__,
    debug=settings.debug,
    lifespan=lifespan,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(scores.router, prefix="/api/scores", tags=["scores"])


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "app": settings.app_name,
        "version": __version__,
    }


@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "message": f"Welcome to {settings.app_name}",
        "roles": list(SUPPORTED_ROLES),
        "docs": "/docs",
        "health": "/health",
    }
