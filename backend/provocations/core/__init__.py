"""Core utilities for the document evolution service."""

from .exceptions import (
    EvolutionError,
    GenerationError,
    LLMError,
    NotFoundError,
    OutlineItemNotFoundError,
    ProvocationNotFoundError,
    ProvocationsError,
    SessionNotFoundError,
    ValidationError,
    VersionNotFoundError,
)
from .logging import AuditLogger, get_logger

__all__ = [
    # Exceptions
    "EvolutionError",
    "GenerationError",
    "LLMError",
    "NotFoundError",
    "OutlineItemNotFoundError",
    "ProvocationNotFoundError",
    "ProvocationsError",
    "SessionNotFoundError",
    "ValidationError",
    "VersionNotFoundError",
    # Logging
    "AuditLogger",
    "get_logger",
]
