"""Health check endpoint."""

from fastapi import APIRouter
from pydantic import BaseModel

from ...config import get_settings
from ...services import get_session_store

router = APIRouter(tags=["Health"])


class ModelInfo(BaseModel):
    """Configured model names."""
    generation_model: str
    analysis_model: str


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    models: ModelInfo
    session_count: int


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Check API health status."""
    settings = get_settings()
    store = get_session_store()

    return HealthResponse(
        status="healthy",
        models=ModelInfo(
            generation_model=settings.generation_model,
            analysis_model=settings.analysis_model,
        ),
        session_count=len(store.list_sessions()),
    )
