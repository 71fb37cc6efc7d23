"""API route modules."""

from .analysis import router as analysis_router
from .health import router as health_router
from .sessions import router as sessions_router
from .writing import router as writing_router

__all__ = [
    "analysis_router",
    "health_router",
    "sessions_router",
    "writing_router",
]
