"""Tests for data models."""

import pytest
from pydantic import ValidationError as PydanticValidationError

from provocations.models import (
    AnalyzeRequest,
    ChangeAnalysis,
    ChangeEntry,
    ChangeType,
    Document,
    DocumentVersion,
    EvolutionResult,
    InstructionType,
    Lens,
    LensType,
    OutlineItem,
    Provocation,
    ProvocationStatus,
    ProvocationType,
    ReferenceDocument,
    ReferenceDocumentRequest,
    ReferenceDocumentType,
    SessionResponse,
    SessionSummary,
    WorkspaceSession,
    WriteRequest,
)


class TestEntitySerialization:
    """Dataclass to_dict/from_dict."""

    def test_provocation_round_trip(self):
        provocation = Provocation(
            type=ProvocationType.ALTERNATIVE,
            title="Usage pricing",
            content="Consider metered billing.",
            source_excerpt="Priced per seat.",
            status=ProvocationStatus.HIGHLIGHTED,
        )

        assert Provocation.from_dict(provocation.to_dict()) == provocation

    def test_lens_defaults(self):
        lens = Lens.from_dict(
            {"id": "l1", "type": "executive", "title": "t", "summary": "s"}
        )

        assert lens.key_points == []
        assert lens.is_active is False

    def test_version_is_frozen(self):
        version = DocumentVersion(text="a", description="Original document")

        with pytest.raises(AttributeError):
            version.description = "changed"

    def test_change_entry_omits_empty_location(self):
        assert ChangeEntry(ChangeType.ADDED, "New section").to_dict() == {
            "type": "added",
            "description": "New section",
        }

    @pytest.mark.parametrize(
        "ref_type,label",
        [
            (ReferenceDocumentType.STYLE, "STYLE GUIDE"),
            (ReferenceDocumentType.TEMPLATE, "TEMPLATE"),
            (ReferenceDocumentType.EXAMPLE, "EXAMPLE"),
        ],
    )
    def test_reference_labels(self, ref_type, label):
        assert ReferenceDocument(name="n", content="c", type=ref_type).label == label


class TestWorkspaceSession:
    def test_round_trip(self, sample_lenses, sample_provocations, sample_reference):
        session = WorkspaceSession(
            document=Document(raw_text="Body"),
            objective="Memo",
            lenses=sample_lenses,
            active_lens=LensType.CONSUMER,
            provocations=sample_provocations,
            outline=[OutlineItem(heading="B", order=1), OutlineItem(heading="A", order=0)],
            reference_documents=[sample_reference],
        )
        session.versions.append("Body", "Original document")

        restored = WorkspaceSession.from_dict(session.to_dict())

        assert restored.to_dict() == session.to_dict()
        assert [item.heading for item in restored.sorted_outline()] == ["A", "B"]

    def test_summary_title_prefers_objective(self):
        session = WorkspaceSession(document=Document(raw_text="First line"), objective="Goal")

        assert SessionSummary.from_session(session).title == "Goal"

    def test_summary_title_for_empty_document(self):
        session = WorkspaceSession(document=Document(raw_text=""))

        assert SessionSummary.from_session(session).title == "Untitled document"

    def test_session_response_orders_outline(self):
        session = WorkspaceSession(
            document=Document(raw_text="Body"),
            outline=[OutlineItem(heading="B", order=1), OutlineItem(heading="A", order=0)],
        )

        response = SessionResponse.from_dataclass(session)

        assert [item.heading for item in response.outline] == ["A", "B"]


class TestRequestModels:
    """Pydantic request validation."""

    def test_write_request_minimal(self):
        request = WriteRequest(document="Doc", objective="Memo", instruction="go")

        assert request.session_id is None
        assert request.edit_history is None

    @pytest.mark.parametrize("field", ["document", "objective", "instruction"])
    def test_write_request_blank_fields(self, field):
        payload = {"document": "Doc", "objective": "Memo", "instruction": "go", field: "   "}

        with pytest.raises(PydanticValidationError):
            WriteRequest(**payload)

    def test_write_request_forbids_extra(self):
        with pytest.raises(PydanticValidationError):
            WriteRequest(document="Doc", objective="Memo", instruction="go", mode="fast")

    def test_write_request_rejects_unknown_tone(self):
        with pytest.raises(PydanticValidationError):
            WriteRequest(document="Doc", objective="Memo", instruction="go", tone="sarcastic")

    def test_analyze_request_defaults(self):
        request = AnalyzeRequest(text="Source")

        assert request.selected_lenses is None
        assert request.reference_documents == []

    def test_reference_request_to_dataclass(self):
        reference = ReferenceDocumentRequest(name="Guide", content="Be brief.").to_dataclass()

        assert reference.type == ReferenceDocumentType.EXAMPLE
        assert reference.content == "Be brief."


class TestEvolutionResult:
    def test_to_response(self):
        result = EvolutionResult(
            document="New",
            instruction_type=InstructionType.CLARIFY,
            analysis=ChangeAnalysis(
                summary="Simplified",
                changes=[ChangeEntry(ChangeType.MODIFIED, "Shorter sentences", "Intro")],
                suggestions=["Add an example"],
            ),
            version=DocumentVersion(text="New", description="Simplified"),
            generation_time_ms=12.5,
        )

        response = result.to_response()

        assert response.summary == "Simplified"
        assert response.changes[0].location == "Intro"
        assert response.version.description == "Simplified"
        assert response.instruction_type == InstructionType.CLARIFY
