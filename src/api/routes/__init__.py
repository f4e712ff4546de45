"""API route exports."""

from api.routes.analyses import router as analyses_router
from api.routes.health import router as health_router
from api.routes.jobs import router as jobs_router
from api.routes.sessions import router as sessions_router

__all__ = ["analyses_router", "health_router", "jobs_router", "sessions_router"]
