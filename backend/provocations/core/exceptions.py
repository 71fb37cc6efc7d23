"""Custom exceptions for the document evolution service.

These exceptions provide clear error categories for proper handling at the API layer.
"""


class ProvocationsError(Exception):
    """Base exception for all service errors."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class NotFoundError(ProvocationsError):
    """A session-scoped resource does not exist."""
    pass


class SessionNotFoundError(NotFoundError):
    """Workspace session was not found."""

    def __init__(self, session_id: str):
        super().__init__(
            f"Session not found: {session_id}",
            {"session_id": session_id},
        )


class VersionNotFoundError(NotFoundError):
    """Document version was not found in the session."""

    def __init__(self, session_id: str, version_id: str):
        super().__init__(
            f"Version not found: {version_id}",
            {"session_id": session_id, "version_id": version_id},
        )


class ProvocationNotFoundError(NotFoundError):
    """Provocation was not found in the session."""

    def __init__(self, session_id: str, provocation_id: str):
        super().__init__(
            f"Provocation not found: {provocation_id}",
            {"session_id": session_id, "provocation_id": provocation_id},
        )


class OutlineItemNotFoundError(NotFoundError):
    """Outline item was not found in the session."""

    def __init__(self, session_id: str, item_id: str):
        super().__init__(
            f"Outline item not found: {item_id}",
            {"session_id": session_id, "item_id": item_id},
        )


class GenerationError(ProvocationsError):
    """Errors related to content generation."""
    pass


class LLMError(GenerationError):
    """Error communicating with the LLM."""

    def __init__(self, message: str, model: str | None = None):
        super().__init__(
            message,
            {"model": model} if model else {},
        )


class EvolutionError(GenerationError):
    """The document could not be evolved.

    The original document is left untouched; the underlying cause is kept
    in details for diagnostics.
    """

    def __init__(self, cause: str, model: str | None = None):
        details = {"error": cause}
        if model:
            details["model"] = model
        super().__init__("Failed to evolve document", details)


class ValidationError(ProvocationsError):
    """Validation errors for requests or data."""

    def __init__(self, message: str, field: str | None = None):
        super().__init__(
            message,
            {"field": field} if field else {},
        )
