"""Centralized fixtures and mocks for testing.

Provides a deterministic scripted text generator in place of Ollama,
temporary-directory settings and factory fixtures for common test data.
"""

from contextlib import ExitStack
from pathlib import Path
from typing import Any
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient
from provocations.config import Settings
from provocations.models import (
    EditHistoryEntry,
    InstructionType,
    Lens,
    LensType,
    Provocation,
    ProvocationType,
    ReferenceDocument,
    ReferenceDocumentType,
)

# Modules that read settings through their own `get_settings` import
SETTINGS_MODULES = [
    "provocations.services.analysis",
    "provocations.services.change_analysis",
    "provocations.services.context",
    "provocations.services.evolution",
    "provocations.services.session_store",
    "provocations.services.workspace",
    "provocations.services.writing",
    "provocations.api.routes.health",
]

# ============================================================================
# Mock Classes for External Services
# ============================================================================


class MockTextGenerator:
    """Scripted TextGenerator.

    Returns queued responses in order (an Exception in the queue is raised
    instead), then the default response. Every call is recorded.
    """

    def __init__(self, responses: list[Any] | None = None, model: str = "mock-model"):
        self.model = model
        self.responses: list[Any] = list(responses or [])
        self.default_response = ""
        self.stream_chunks: list[str] = []
        self.stream_error: Exception | None = None
        self.calls: list[dict[str, Any]] = []

    def queue(self, *responses: Any) -> None:
        """Append responses for the next calls."""
        self.responses.extend(responses)

    async def generate(
        self,
        system_prompt: str,
        user_prompt: str,
        max_output_tokens: int,
        temperature: float,
        json_mode: bool = False,
    ) -> str:
        self.calls.append(
            {
                "system_prompt": system_prompt,
                "user_prompt": user_prompt,
                "max_output_tokens": max_output_tokens,
                "temperature": temperature,
                "json_mode": json_mode,
            }
        )
        if self.responses:
            response = self.responses.pop(0)
            if isinstance(response, Exception):
                raise response
            return response
        return self.default_response

    async def stream(
        self,
        system_prompt: str,
        user_prompt: str,
        max_output_tokens: int,
        temperature: float,
    ):
        self.calls.append(
            {
                "system_prompt": system_prompt,
                "user_prompt": user_prompt,
                "max_output_tokens": max_output_tokens,
                "temperature": temperature,
                "stream": True,
            }
        )
        for chunk in self.stream_chunks:
            yield chunk
        if self.stream_error is not None:
            raise self.stream_error


# ============================================================================
# Configuration Fixtures
# ============================================================================


@pytest.fixture
def temp_data_dir(tmp_path: Path) -> Path:
    """Create a temporary data directory for tests."""
    data_dir = tmp_path / "data"
    (data_dir / "sessions").mkdir(parents=True, exist_ok=True)
    return data_dir


@pytest.fixture
def mock_settings(temp_data_dir: Path) -> Settings:
    """Create test settings with temporary directories."""
    return Settings(
        data_dir=temp_data_dir,
        sessions_dir=temp_data_dir / "sessions",
        ollama_base_url="http://localhost:11434",
        generation_model="mock-model",
        analysis_model="mock-model",
        log_level="WARNING",
    )


@pytest.fixture
def patched_settings(mock_settings: Settings):
    """Point every settings consumer at the temporary settings."""
    with ExitStack() as stack:
        for module in SETTINGS_MODULES:
            stack.enter_context(patch(f"{module}.get_settings", return_value=mock_settings))
        yield mock_settings


@pytest.fixture
def mock_generator() -> MockTextGenerator:
    """Create a scripted text generator."""
    return MockTextGenerator()


# ============================================================================
# Service Fixtures
# ============================================================================


@pytest.fixture
def session_store(patched_settings: Settings):
    """Session store writing to the temporary sessions directory."""
    from provocations.services.session_store import SessionStore

    return SessionStore(patched_settings.sessions_dir)


@pytest.fixture
def workspace_service(session_store):
    """Workspace service over the temporary session store."""
    from provocations.services.workspace import WorkspaceService

    return WorkspaceService(store=session_store)


@pytest.fixture
def writing_service(workspace_service, mock_generator: MockTextGenerator):
    """Writing service with every model call going to the mock generator."""
    from provocations.services.change_analysis import ChangeAnalyzer
    from provocations.services.context import ContextAssembler
    from provocations.services.evolution import DocumentEvolver
    from provocations.services.writing import WritingService

    return WritingService(
        assembler=ContextAssembler(),
        evolver=DocumentEvolver(generator=mock_generator),
        analyzer=ChangeAnalyzer(generator=mock_generator),
        workspace=workspace_service,
        generator=mock_generator,
    )


@pytest.fixture
def analysis_service(workspace_service, mock_generator: MockTextGenerator):
    """Source analysis service using the mock generator."""
    from provocations.services.analysis import SourceAnalysisService

    return SourceAnalysisService(generator=mock_generator, workspace=workspace_service)


# ============================================================================
# Entity Fixtures
# ============================================================================


@pytest.fixture
def sample_lenses() -> list[Lens]:
    """Two lenses as produced by analysis."""
    return [
        Lens(
            type=LensType.CONSUMER,
            title="Customer View",
            summary="Customers care about onboarding time.",
            key_points=["Onboarding is slow", "Pricing is unclear"],
        ),
        Lens(
            type=LensType.SKEPTIC,
            title="Skeptic View",
            summary="The growth claim lacks evidence.",
            key_points=["No baseline given"],
        ),
    ]


@pytest.fixture
def sample_provocations() -> list[Provocation]:
    """One provocation of each type."""
    return [
        Provocation(
            type=ProvocationType.OPPORTUNITY,
            title="Partner channel",
            content="Resellers could shorten the sales cycle.",
            source_excerpt="We sell direct only.",
        ),
        Provocation(
            type=ProvocationType.FALLACY,
            title="Survivorship bias",
            content="Only successful pilots are cited.",
            source_excerpt="All pilots succeeded.",
        ),
        Provocation(
            type=ProvocationType.ALTERNATIVE,
            title="Usage pricing",
            content="Seat pricing is not the only option.",
            source_excerpt="Priced per seat.",
        ),
    ]


@pytest.fixture
def sample_reference() -> ReferenceDocument:
    """A style guide reference."""
    return ReferenceDocument(
        name="House Style",
        content="Use short sentences. Prefer active voice.",
        type=ReferenceDocumentType.STYLE,
    )


@pytest.fixture
def edit_history_factory():
    """Factory for edit history entries."""

    def _create(count: int, instruction_type: InstructionType = InstructionType.GENERAL):
        return [
            EditHistoryEntry(
                instruction=f"instruction {i}",
                instruction_type=instruction_type,
                summary=f"summary {i}",
            )
            for i in range(count)
        ]

    return _create


@pytest.fixture
def sample_session(workspace_service, sample_lenses, sample_provocations):
    """A persisted session seeded with the original version."""
    return workspace_service.create_session(
        document_text="# Plan\n\nWe sell direct only.\nAll pilots succeeded.",
        objective="Pitch memo for the board",
        lenses=sample_lenses,
        provocations=sample_provocations,
    )


# ============================================================================
# API Test Client Fixtures
# ============================================================================


def _reset_singletons() -> None:
    import provocations.services.analysis as analysis_module
    import provocations.services.change_analysis as change_analysis_module
    import provocations.services.classifier as classifier_module
    import provocations.services.context as context_module
    import provocations.services.evolution as evolution_module
    import provocations.services.session_store as session_store_module
    import provocations.services.workspace as workspace_module
    import provocations.services.writing as writing_module

    analysis_module._analysis_service = None
    change_analysis_module._change_analyzer = None
    classifier_module._classifier = None
    context_module._context_assembler = None
    evolution_module._document_evolver = None
    session_store_module._session_store = None
    workspace_module._workspace_service = None
    writing_module._writing_service = None


@pytest.fixture
def test_client(patched_settings: Settings, mock_generator: MockTextGenerator):
    """Create a FastAPI test client with every model call scripted."""
    _reset_singletons()

    generator_targets = [
        "provocations.services.analysis.get_text_generator",
        "provocations.services.change_analysis.get_text_generator",
        "provocations.services.evolution.get_text_generator",
        "provocations.services.writing.get_text_generator",
    ]
    with ExitStack() as stack:
        for target in generator_targets:
            stack.enter_context(patch(target, return_value=mock_generator))

        from provocations.main import app

        with TestClient(app) as client:
            yield client

    _reset_singletons()
