"""Source analysis request and response models.

These models define the API contracts for the analyze endpoint.
"""

from dataclasses import dataclass, field

from pydantic import BaseModel, Field

from .common import (
    AnalysisWarning,
    Lens,
    LensType,
    Provocation,
    ProvocationStatus,
    ProvocationType,
    ReferenceDocument,
    ReferenceDocumentType,
)


# Pydantic models for API request/response validation


class ReferenceDocumentRequest(BaseModel):
    """Reference material supplied with a request."""
    name: str = Field(..., min_length=1, max_length=200)
    content: str = Field(..., min_length=1)
    type: ReferenceDocumentType = ReferenceDocumentType.EXAMPLE

    def to_dataclass(self) -> ReferenceDocument:
        return ReferenceDocument(name=self.name, content=self.content, type=self.type)


class ReferenceDocumentResponse(BaseModel):
    """API response model for a reference document."""
    id: str
    name: str
    content: str
    type: ReferenceDocumentType

    @classmethod
    def from_dataclass(cls, reference: ReferenceDocument) -> "ReferenceDocumentResponse":
        return cls(
            id=reference.id,
            name=reference.name,
            content=reference.content,
            type=reference.type,
        )


class AnalyzeRequest(BaseModel):
    """Request to analyze source text into lenses and provocations."""
    text: str = Field(..., min_length=1, description="Source material to analyze")
    objective: str = Field(
        default="",
        max_length=2000,
        description="What the user wants the document to achieve",
    )
    selected_lenses: list[LensType] | None = Field(
        default=None,
        description="Lenses to generate. If None or empty, all lenses are generated.",
    )
    reference_documents: list[ReferenceDocumentRequest] = Field(default_factory=list)

    model_config = {"extra": "forbid"}


class LensResponse(BaseModel):
    """API response model for a lens."""
    id: str
    type: LensType
    title: str
    summary: str
    key_points: list[str] = Field(default_factory=list)
    is_active: bool = False

    @classmethod
    def from_dataclass(cls, lens: Lens) -> "LensResponse":
        return cls(
            id=lens.id,
            type=lens.type,
            title=lens.title,
            summary=lens.summary,
            key_points=lens.key_points,
            is_active=lens.is_active,
        )


class ProvocationResponse(BaseModel):
    """API response model for a provocation."""
    id: str
    type: ProvocationType
    title: str
    content: str
    source_excerpt: str
    status: ProvocationStatus

    @classmethod
    def from_dataclass(cls, provocation: Provocation) -> "ProvocationResponse":
        return cls(
            id=provocation.id,
            type=provocation.type,
            title=provocation.title,
            content=provocation.content,
            source_excerpt=provocation.source_excerpt,
            status=provocation.status,
        )


class AnalysisWarningResponse(BaseModel):
    """Non-fatal analysis warning."""
    type: str
    message: str


class AnalyzeResponse(BaseModel):
    """Response from the analyze endpoint."""
    session_id: str
    document_id: str
    lenses: list[LensResponse]
    provocations: list[ProvocationResponse]
    warnings: list[AnalysisWarningResponse] = Field(default_factory=list)
    generation_time_ms: float


# Internal result dataclass


@dataclass
class AnalysisResult:
    """Internal result from source analysis."""
    session_id: str
    document_id: str
    lenses: list[Lens]
    provocations: list[Provocation]
    warnings: list[AnalysisWarning] = field(default_factory=list)
    generation_time_ms: float = 0.0

    def to_response(self) -> AnalyzeResponse:
        """Convert to API response model."""
        return AnalyzeResponse(
            session_id=self.session_id,
            document_id=self.document_id,
            lenses=[LensResponse.from_dataclass(lens) for lens in self.lenses],
            provocations=[ProvocationResponse.from_dataclass(p) for p in self.provocations],
            warnings=[AnalysisWarningResponse(**w.to_dict()) for w in self.warnings],
            generation_time_ms=self.generation_time_ms,
        )
