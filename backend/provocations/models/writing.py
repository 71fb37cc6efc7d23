"""Writing-related request and response models.

These models define the API contracts for document evolution, heading
expansion and passage refinement.
"""

from dataclasses import dataclass

from pydantic import BaseModel, Field, field_validator

from .analysis import ReferenceDocumentRequest
from .common import (
    ChangeAnalysis,
    ChangeType,
    DocumentVersion,
    EditHistoryEntry,
    InstructionType,
    LensType,
    ProvocationContext,
    ProvocationType,
    TargetLength,
    ToneOption,
)


def _require_text(value: str, label: str) -> str:
    if not value.strip():
        raise ValueError(f"{label} is required")
    return value


# Pydantic models for API request/response validation


class ProvocationContextRequest(BaseModel):
    """The provocation being addressed by a write request."""
    type: ProvocationType
    title: str
    content: str
    source_excerpt: str = ""

    def to_dataclass(self) -> ProvocationContext:
        return ProvocationContext(
            type=self.type,
            title=self.title,
            content=self.content,
            source_excerpt=self.source_excerpt,
        )


class EditHistoryEntryRequest(BaseModel):
    """Client-held edit history entry, used when no session is given."""
    instruction: str
    instruction_type: InstructionType
    summary: str = ""

    def to_dataclass(self) -> EditHistoryEntry:
        return EditHistoryEntry(
            instruction=self.instruction,
            instruction_type=self.instruction_type,
            summary=self.summary,
        )


class WriteRequest(BaseModel):
    """Request to evolve a document with a free-text instruction.

    When session_id is set, edit history, reference documents and the active
    lens default to the session's, and the result is recorded as a new version.
    """

    # Foundation
    document: str = Field(..., min_length=1, description="Current document text")
    objective: str = Field(..., min_length=1, description="What the document should achieve")

    # Intent
    instruction: str = Field(..., min_length=1, max_length=10000)

    # Focus
    selected_text: str | None = Field(default=None, description="Text to focus the edit on")

    # Context
    provocation: ProvocationContextRequest | None = None
    active_lens: LensType | None = None
    reference_documents: list[ReferenceDocumentRequest] | None = None
    edit_history: list[EditHistoryEntryRequest] | None = None

    # Style
    tone: ToneOption | None = None
    target_length: TargetLength | None = None

    session_id: str | None = Field(
        default=None,
        description="Workspace session to read history from and record the version in",
    )

    model_config = {"extra": "forbid"}

    @field_validator("document")
    @classmethod
    def _document_required(cls, value: str) -> str:
        return _require_text(value, "Document")

    @field_validator("objective")
    @classmethod
    def _objective_required(cls, value: str) -> str:
        return _require_text(value, "Objective")

    @field_validator("instruction")
    @classmethod
    def _instruction_required(cls, value: str) -> str:
        return _require_text(value, "Instruction")


class ChangeEntryResponse(BaseModel):
    """API response model for a change entry."""
    type: ChangeType
    description: str
    location: str | None = None


class VersionResponse(BaseModel):
    """API response model for a document version."""
    id: str
    text: str
    timestamp: str
    description: str

    @classmethod
    def from_dataclass(cls, version: DocumentVersion) -> "VersionResponse":
        return cls(
            id=version.id,
            text=version.text,
            timestamp=version.timestamp.isoformat(),
            description=version.description,
        )


class WriteResponse(BaseModel):
    """Response from a write (evolution) request."""
    document: str
    summary: str
    instruction_type: InstructionType
    changes: list[ChangeEntryResponse] = Field(default_factory=list)
    suggestions: list[str] = Field(default_factory=list)
    version: VersionResponse | None = None
    generation_time_ms: float


class ExpandRequest(BaseModel):
    """Request to draft content for an outline heading."""
    heading: str = Field(..., min_length=1, max_length=500)
    context: str | None = Field(default=None, description="Source text to ground the section")
    tone: ToneOption | None = None
    session_id: str | None = Field(
        default=None,
        description="Defaults context to the session document when context is omitted",
    )

    model_config = {"extra": "forbid"}

    @field_validator("heading")
    @classmethod
    def _heading_required(cls, value: str) -> str:
        return _require_text(value, "Heading")


class ExpandResponse(BaseModel):
    """Drafted section content."""
    content: str


class RefineRequest(BaseModel):
    """Request to rewrite a passage in a tone and length."""
    text: str = Field(..., min_length=1)
    tone: ToneOption | None = None
    target_length: TargetLength | None = None

    model_config = {"extra": "forbid"}

    @field_validator("text")
    @classmethod
    def _text_required(cls, value: str) -> str:
        return _require_text(value, "Text")


class RefineResponse(BaseModel):
    """Refined passage."""
    refined: str


# Internal result dataclass


@dataclass
class EvolutionResult:
    """Internal result of one evolution through the pipeline."""
    document: str
    instruction_type: InstructionType
    analysis: ChangeAnalysis
    version: DocumentVersion | None = None
    generation_time_ms: float = 0.0
    model_used: str = ""

    def to_response(self) -> WriteResponse:
        """Convert to API response model."""
        return WriteResponse(
            document=self.document,
            summary=self.analysis.summary,
            instruction_type=self.instruction_type,
            changes=[
                ChangeEntryResponse(
                    type=change.type,
                    description=change.description,
                    location=change.location,
                )
                for change in self.analysis.changes
            ],
            suggestions=self.analysis.suggestions,
            version=VersionResponse.from_dataclass(self.version) if self.version else None,
            generation_time_ms=self.generation_time_ms,
        )
