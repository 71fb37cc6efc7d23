"""Workspace session model.

A session is the explicit context object passed through every core call:
the working document, its objective, analysis results, the outline, reference
material, the version log and the edit history window.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any
from uuid import uuid4

from .common import (
    Document,
    DocumentVersion,
    EditHistoryEntry,
    Lens,
    LensType,
    OutlineItem,
    Provocation,
    ReferenceDocument,
)
from .history import EditHistory, VersionStore


@dataclass
class WorkspaceSession:
    """State of one interactive editing session."""

    document: Document
    objective: str = ""
    session_id: str = field(default_factory=lambda: str(uuid4()))
    lenses: list[Lens] = field(default_factory=list)
    active_lens: LensType | None = None
    provocations: list[Provocation] = field(default_factory=list)
    outline: list[OutlineItem] = field(default_factory=list)
    reference_documents: list[ReferenceDocument] = field(default_factory=list)
    versions: VersionStore = field(default_factory=VersionStore)
    edit_history: EditHistory = field(default_factory=EditHistory)
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def touch(self) -> None:
        self.updated_at = datetime.now(UTC)

    def sorted_outline(self) -> list[OutlineItem]:
        return sorted(self.outline, key=lambda item: item.order)

    def to_dict(self) -> dict[str, Any]:
        return {
            "session_id": self.session_id,
            "document": self.document.to_dict(),
            "objective": self.objective,
            "lenses": [lens.to_dict() for lens in self.lenses],
            "active_lens": self.active_lens.value if self.active_lens else None,
            "provocations": [p.to_dict() for p in self.provocations],
            "outline": [item.to_dict() for item in self.outline],
            "reference_documents": [r.to_dict() for r in self.reference_documents],
            "versions": [v.to_dict() for v in self.versions],
            "edit_history": [e.to_dict() for e in self.edit_history],
            "edit_history_capacity": self.edit_history.capacity,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "WorkspaceSession":
        """Create WorkspaceSession from dictionary (for deserialization)."""
        active_lens = data.get("active_lens")
        return cls(
            session_id=data["session_id"],
            document=Document.from_dict(data["document"]),
            objective=data.get("objective", ""),
            lenses=[Lens.from_dict(lens) for lens in data.get("lenses", [])],
            active_lens=LensType(active_lens) if active_lens else None,
            provocations=[Provocation.from_dict(p) for p in data.get("provocations", [])],
            outline=[OutlineItem.from_dict(item) for item in data.get("outline", [])],
            reference_documents=[
                ReferenceDocument.from_dict(r) for r in data.get("reference_documents", [])
            ],
            versions=VersionStore(
                DocumentVersion.from_dict(v) for v in data.get("versions", [])
            ),
            edit_history=EditHistory(
                (EditHistoryEntry.from_dict(e) for e in data.get("edit_history", [])),
                capacity=data.get("edit_history_capacity", EditHistory.DEFAULT_CAPACITY),
            ),
            created_at=datetime.fromisoformat(data["created_at"]),
            updated_at=datetime.fromisoformat(data["updated_at"]),
        )


@dataclass
class SessionSummary:
    """Lightweight summary of a session for listing.

    Used in the session index to avoid loading full session data.
    """

    session_id: str
    title: str  # Objective or first line of the document, truncated
    version_count: int
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def to_dict(self) -> dict[str, Any]:
        return {
            "session_id": self.session_id,
            "title": self.title,
            "version_count": self.version_count,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SessionSummary":
        return cls(
            session_id=data["session_id"],
            title=data["title"],
            version_count=data["version_count"],
            created_at=datetime.fromisoformat(data["created_at"]),
            updated_at=datetime.fromisoformat(data["updated_at"]),
        )

    @classmethod
    def from_session(
        cls, session: WorkspaceSession, max_title_length: int = 50
    ) -> "SessionSummary":
        """Create summary from a full WorkspaceSession."""
        source = session.objective.strip()
        if not source:
            lines = session.document.raw_text.strip().splitlines()
            source = lines[0] if lines else "Untitled document"
        title = source[:max_title_length]
        if len(source) > max_title_length:
            title += "..."
        return cls(
            session_id=session.session_id,
            title=title,
            version_count=len(session.versions),
            created_at=session.created_at,
            updated_at=session.updated_at,
        )
