"""FastAPI application entry point."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .api import analysis_router, health_router, sessions_router, writing_router
from .config import get_settings
from .core import (
    LLMError,
    NotFoundError,
    ProvocationsError,
    ValidationError,
    get_logger,
)

logger = get_logger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan: startup and shutdown logic."""
    logger.info(
        "Starting Provocations",
        ollama_url=settings.ollama_base_url,
        generation_model=settings.generation_model,
        analysis_model=settings.analysis_model,
    )
    settings.ensure_directories()
    yield
    logger.info("Shutting down Provocations")


app = FastAPI(
    title="Provocations",
    description="Document evolution workspace: lenses, provocations and instruction-driven rewriting",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _status_for(exc: ProvocationsError) -> int:
    if isinstance(exc, ValidationError):
        return 400
    if isinstance(exc, NotFoundError):
        return 404
    if isinstance(exc, LLMError):
        return 503
    return 500


# Global exception handler
@app.exception_handler(ProvocationsError)
async def provocations_exception_handler(request: Request, exc: ProvocationsError) -> JSONResponse:
    """Handle service errors that were not translated by a route."""
    logger.error(
        "Request error",
        path=request.url.path,
        error=exc.message,
        details=exc.details,
    )
    return JSONResponse(
        status_code=_status_for(exc),
        content={
            "error": exc.message,
            "details": exc.details,
        },
    )


# Include routers
app.include_router(health_router, prefix="/api")
app.include_router(analysis_router, prefix="/api")
app.include_router(writing_router, prefix="/api")
app.include_router(sessions_router, prefix="/api")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "provocations.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug,
    )
