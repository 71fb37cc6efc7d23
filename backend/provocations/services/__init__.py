"""Services for the document evolution workspace."""

from .analysis import SourceAnalysisService, get_analysis_service
from .change_analysis import ChangeAnalyzer, get_change_analyzer
from .classifier import (
    INSTRUCTION_PATTERNS,
    InstructionClassifier,
    InstructionPattern,
    PatternInstructionClassifier,
    get_instruction_classifier,
)
from .context import ContextAssembler, EvolutionContext, get_context_assembler
from .evolution import DocumentEvolver, get_document_evolver
from .session_store import SessionStore, get_session_store
from .workspace import WorkspaceService, get_workspace_service
from .writing import WritingService, get_writing_service

__all__ = [
    "SourceAnalysisService",
    "get_analysis_service",
    "ChangeAnalyzer",
    "get_change_analyzer",
    "INSTRUCTION_PATTERNS",
    "InstructionClassifier",
    "InstructionPattern",
    "PatternInstructionClassifier",
    "get_instruction_classifier",
    "ContextAssembler",
    "EvolutionContext",
    "get_context_assembler",
    "DocumentEvolver",
    "get_document_evolver",
    "SessionStore",
    "get_session_store",
    "WorkspaceService",
    "get_workspace_service",
    "WritingService",
    "get_writing_service",
]
