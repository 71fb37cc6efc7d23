"""API module for the document evolution workspace."""

from .routes import analysis_router, health_router, sessions_router, writing_router

__all__ = [
    "analysis_router",
    "health_router",
    "sessions_router",
    "writing_router",
]
