"""Workspace session request and response models."""

from pydantic import BaseModel, Field

from .analysis import LensResponse, ProvocationResponse, ReferenceDocumentResponse
from .common import DiffLine, DiffLineType, LensType, OutlineItem, ProvocationStatus
from .session import SessionSummary, WorkspaceSession
from .writing import VersionResponse


class OutlineItemResponse(BaseModel):
    """API response model for an outline item."""
    id: str
    heading: str
    content: str
    order: int
    is_expanded: bool

    @classmethod
    def from_dataclass(cls, item: OutlineItem) -> "OutlineItemResponse":
        return cls(
            id=item.id,
            heading=item.heading,
            content=item.content,
            order=item.order,
            is_expanded=item.is_expanded,
        )


class EditHistoryEntryResponse(BaseModel):
    """API response model for an edit history entry."""
    instruction: str
    instruction_type: str
    summary: str
    timestamp: str


class SessionResponse(BaseModel):
    """Full workspace session."""
    session_id: str
    document_id: str
    document: str
    objective: str
    lenses: list[LensResponse]
    active_lens: LensType | None = None
    provocations: list[ProvocationResponse]
    outline: list[OutlineItemResponse]
    reference_documents: list[ReferenceDocumentResponse]
    version_count: int
    edit_history: list[EditHistoryEntryResponse]
    created_at: str
    updated_at: str

    @classmethod
    def from_dataclass(cls, session: WorkspaceSession) -> "SessionResponse":
        return cls(
            session_id=session.session_id,
            document_id=session.document.id,
            document=session.document.raw_text,
            objective=session.objective,
            lenses=[LensResponse.from_dataclass(lens) for lens in session.lenses],
            active_lens=session.active_lens,
            provocations=[ProvocationResponse.from_dataclass(p) for p in session.provocations],
            outline=[OutlineItemResponse.from_dataclass(i) for i in session.sorted_outline()],
            reference_documents=[
                ReferenceDocumentResponse.from_dataclass(r) for r in session.reference_documents
            ],
            version_count=len(session.versions),
            edit_history=[
                EditHistoryEntryResponse(**entry.to_dict()) for entry in session.edit_history
            ],
            created_at=session.created_at.isoformat(),
            updated_at=session.updated_at.isoformat(),
        )


class SessionSummaryResponse(BaseModel):
    """API response model for session summary (used in listings)."""
    session_id: str
    title: str
    version_count: int
    created_at: str
    updated_at: str

    @classmethod
    def from_dataclass(cls, summary: SessionSummary) -> "SessionSummaryResponse":
        return cls(
            session_id=summary.session_id,
            title=summary.title,
            version_count=summary.version_count,
            created_at=summary.created_at.isoformat(),
            updated_at=summary.updated_at.isoformat(),
        )


class VersionListResponse(BaseModel):
    """All versions of a session in creation order."""
    session_id: str
    versions: list[VersionResponse]


class DiffLineResponse(BaseModel):
    """One classified diff line."""
    type: DiffLineType
    content: str

    @classmethod
    def from_dataclass(cls, line: DiffLine) -> "DiffLineResponse":
        return cls(type=line.type, content=line.content)


class DiffResponse(BaseModel):
    """Line diff between two versions.

    available is False when the session has fewer than two versions; the
    remaining fields are then empty.
    """
    available: bool
    from_version: VersionResponse | None = None
    to_version: VersionResponse | None = None
    lines: list[DiffLineResponse] = Field(default_factory=list)
    added_count: int = 0
    removed_count: int = 0


class ActiveLensRequest(BaseModel):
    """Set or clear the active lens."""
    lens: LensType | None = None

    model_config = {"extra": "forbid"}


class ProvocationStatusRequest(BaseModel):
    """Change a provocation's status."""
    status: ProvocationStatus

    model_config = {"extra": "forbid"}


class OutlineItemCreateRequest(BaseModel):
    """Add an outline item at the end of the outline."""
    heading: str = Field(..., min_length=1, max_length=500)
    content: str = ""

    model_config = {"extra": "forbid"}


class OutlineItemUpdateRequest(BaseModel):
    """Partial update of an outline item."""
    heading: str | None = Field(default=None, min_length=1, max_length=500)
    content: str | None = None
    is_expanded: bool | None = None

    model_config = {"extra": "forbid"}


class OutlineReorderRequest(BaseModel):
    """New outline order as a list of item ids."""
    item_ids: list[str] = Field(..., min_length=1)

    model_config = {"extra": "forbid"}


class OutlineResponse(BaseModel):
    """The session outline in display order."""
    session_id: str
    items: list[OutlineItemResponse]

    @classmethod
    def from_session(cls, session: WorkspaceSession) -> "OutlineResponse":
        return cls(
            session_id=session.session_id,
            items=[OutlineItemResponse.from_dataclass(i) for i in session.sorted_outline()],
        )
