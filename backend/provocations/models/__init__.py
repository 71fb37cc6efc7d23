"""Data models for the document evolution service."""

from .analysis import (
    AnalysisResult,
    AnalyzeRequest,
    AnalyzeResponse,
    LensResponse,
    ProvocationResponse,
    ReferenceDocumentRequest,
    ReferenceDocumentResponse,
)
from .common import (
    AnalysisWarning,
    ChangeAnalysis,
    ChangeEntry,
    ChangeType,
    DiffLine,
    DiffLineType,
    Document,
    DocumentVersion,
    EditHistoryEntry,
    InstructionType,
    Lens,
    LensType,
    OutlineItem,
    Provocation,
    ProvocationContext,
    ProvocationStatus,
    ProvocationType,
    ReferenceDocument,
    ReferenceDocumentType,
    TargetLength,
    ToneOption,
    WarningType,
)
from .history import ORIGINAL_VERSION_DESCRIPTION, EditHistory, VersionStore
from .session import SessionSummary, WorkspaceSession
from .workspace import (
    ActiveLensRequest,
    DiffLineResponse,
    DiffResponse,
    OutlineItemCreateRequest,
    OutlineItemResponse,
    OutlineItemUpdateRequest,
    OutlineReorderRequest,
    OutlineResponse,
    ProvocationStatusRequest,
    SessionResponse,
    SessionSummaryResponse,
    VersionListResponse,
)
from .writing import (
    EditHistoryEntryRequest,
    EvolutionResult,
    ExpandRequest,
    ExpandResponse,
    ProvocationContextRequest,
    RefineRequest,
    RefineResponse,
    VersionResponse,
    WriteRequest,
    WriteResponse,
)

__all__ = [
    # Common
    "AnalysisWarning",
    "ChangeAnalysis",
    "ChangeEntry",
    "ChangeType",
    "DiffLine",
    "DiffLineType",
    "Document",
    "DocumentVersion",
    "EditHistoryEntry",
    "InstructionType",
    "Lens",
    "LensType",
    "OutlineItem",
    "Provocation",
    "ProvocationContext",
    "ProvocationStatus",
    "ProvocationType",
    "ReferenceDocument",
    "ReferenceDocumentType",
    "TargetLength",
    "ToneOption",
    "WarningType",
    # History
    "ORIGINAL_VERSION_DESCRIPTION",
    "EditHistory",
    "VersionStore",
    # Session
    "SessionSummary",
    "WorkspaceSession",
    # Analysis
    "AnalysisResult",
    "AnalyzeRequest",
    "AnalyzeResponse",
    "LensResponse",
    "ProvocationResponse",
    "ReferenceDocumentRequest",
    "ReferenceDocumentResponse",
    # Writing
    "EditHistoryEntryRequest",
    "EvolutionResult",
    "ExpandRequest",
    "ExpandResponse",
    "ProvocationContextRequest",
    "RefineRequest",
    "RefineResponse",
    "VersionResponse",
    "WriteRequest",
    "WriteResponse",
    # Workspace
    "ActiveLensRequest",
    "DiffLineResponse",
    "DiffResponse",
    "OutlineItemCreateRequest",
    "OutlineItemResponse",
    "OutlineItemUpdateRequest",
    "OutlineReorderRequest",
    "OutlineResponse",
    "ProvocationStatusRequest",
    "SessionResponse",
    "SessionSummaryResponse",
    "VersionListResponse",
]
