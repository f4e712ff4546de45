"""Critic API - Figma design critique engine."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.routes import analyses_router, health_router, jobs_router, sessions_router
from config import settings

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Code before `yield` runs on startup.
    Code after `yield` runs on shutdown.
    """
    logger.info(f"Starting {settings.app_name}...")
    yield
    logger.info(f"Shutting down {settings.app_name}...")


app = FastAPI(
    title="Critic API",
    description="Design critique engine: validates Figma URLs and returns a scored critique report.",
    version="0.1.0",
    lifespan=lifespan,
    debug=settings.debug,
)

# Configure CORS (adjust origins for production)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routers
app.include_router(health_router, prefix="/api/v1")
app.include_router(analyses_router, prefix="/api/v1")
app.include_router(sessions_router, prefix="/api/v1")
app.include_router(jobs_router, prefix="/api/v1")


@app.get("/", include_in_schema=False)
async def root():
    """Service index."""
    return {
        "service": "Critic API",
        "docs": "/docs",
        "health": "/api/v1/health",
    }
