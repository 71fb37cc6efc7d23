"""Common data models used across the document evolution service.

Internal entities are plain dataclasses with explicit to_dict/from_dict
so they can be persisted as JSON and converted to API models at the edge.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any
from uuid import uuid4


def _new_id() -> str:
    return str(uuid4())


def _now() -> datetime:
    return datetime.now(UTC)


class LensType(str, Enum):
    """Fixed analytical perspectives applied to source text."""
    CONSUMER = "consumer"
    EXECUTIVE = "executive"
    TECHNICAL = "technical"
    FINANCIAL = "financial"
    STRATEGIC = "strategic"
    SKEPTIC = "skeptic"


class ProvocationType(str, Enum):
    """Categories of generated challenges."""
    OPPORTUNITY = "opportunity"
    FALLACY = "fallacy"
    ALTERNATIVE = "alternative"


class ProvocationStatus(str, Enum):
    """User-driven provocation status. No automatic expiry."""
    PENDING = "pending"
    ADDRESSED = "addressed"
    REJECTED = "rejected"
    HIGHLIGHTED = "highlighted"


class InstructionType(str, Enum):
    """Category of a free-text editing instruction."""
    EXPAND = "expand"
    CONDENSE = "condense"
    RESTRUCTURE = "restructure"
    CLARIFY = "clarify"
    STYLE = "style"
    CORRECT = "correct"
    GENERAL = "general"


class ToneOption(str, Enum):
    """Voices the writer can be asked to adopt."""
    INSPIRATIONAL = "inspirational"
    PRACTICAL = "practical"
    ANALYTICAL = "analytical"
    PERSUASIVE = "persuasive"
    CAUTIOUS = "cautious"


class TargetLength(str, Enum):
    """Requested output length relative to the current document."""
    SHORTER = "shorter"
    SAME = "same"
    LONGER = "longer"


class ReferenceDocumentType(str, Enum):
    """How a reference document should guide the writer."""
    STYLE = "style"
    TEMPLATE = "template"
    EXAMPLE = "example"


class ChangeType(str, Enum):
    """Kind of change reported by change analysis."""
    ADDED = "added"
    MODIFIED = "modified"
    REMOVED = "removed"
    RESTRUCTURED = "restructured"


class DiffLineType(str, Enum):
    """Classification of a single line in a version diff."""
    UNCHANGED = "unchanged"
    ADDED = "added"
    REMOVED = "removed"


@dataclass
class Document:
    """The working document. Superseded by evolutions, never deleted."""
    raw_text: str
    id: str = field(default_factory=_new_id)

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "raw_text": self.raw_text}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Document":
        return cls(id=data["id"], raw_text=data["raw_text"])


@dataclass(frozen=True)
class DocumentVersion:
    """Immutable snapshot of the document text."""
    text: str
    description: str
    id: str = field(default_factory=_new_id)
    timestamp: datetime = field(default_factory=_now)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "text": self.text,
            "timestamp": self.timestamp.isoformat(),
            "description": self.description,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DocumentVersion":
        return cls(
            id=data["id"],
            text=data["text"],
            timestamp=datetime.fromisoformat(data["timestamp"]),
            description=data["description"],
        )


@dataclass(frozen=True)
class EditHistoryEntry:
    """One applied instruction, kept to bias later evolutions toward consistency."""
    instruction: str
    instruction_type: InstructionType
    summary: str
    timestamp: datetime = field(default_factory=_now)

    def to_dict(self) -> dict[str, Any]:
        return {
            "instruction": self.instruction,
            "instruction_type": self.instruction_type.value,
            "summary": self.summary,
            "timestamp": self.timestamp.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "EditHistoryEntry":
        return cls(
            instruction=data["instruction"],
            instruction_type=InstructionType(data["instruction_type"]),
            summary=data.get("summary", ""),
            timestamp=datetime.fromisoformat(data["timestamp"]),
        )


@dataclass
class Lens:
    """Summary of the source text from one perspective."""
    type: LensType
    title: str
    summary: str
    key_points: list[str] = field(default_factory=list)
    is_active: bool = False
    id: str = field(default_factory=_new_id)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type.value,
            "title": self.title,
            "summary": self.summary,
            "key_points": self.key_points,
            "is_active": self.is_active,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Lens":
        return cls(
            id=data["id"],
            type=LensType(data["type"]),
            title=data["title"],
            summary=data["summary"],
            key_points=data.get("key_points", []),
            is_active=data.get("is_active", False),
        )


@dataclass
class Provocation:
    """A generated challenge. Only status changes after creation."""
    type: ProvocationType
    title: str
    content: str
    source_excerpt: str
    status: ProvocationStatus = ProvocationStatus.PENDING
    id: str = field(default_factory=_new_id)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type.value,
            "title": self.title,
            "content": self.content,
            "source_excerpt": self.source_excerpt,
            "status": self.status.value,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Provocation":
        return cls(
            id=data["id"],
            type=ProvocationType(data["type"]),
            title=data["title"],
            content=data["content"],
            source_excerpt=data.get("source_excerpt", ""),
            status=ProvocationStatus(data.get("status", "pending")),
        )


@dataclass(frozen=True)
class ProvocationContext:
    """The provocation a write request is addressing."""
    type: ProvocationType
    title: str
    content: str
    source_excerpt: str


@dataclass
class OutlineItem:
    """User-owned structural unit of the document."""
    heading: str
    order: int
    content: str = ""
    is_expanded: bool = False
    id: str = field(default_factory=_new_id)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "heading": self.heading,
            "content": self.content,
            "order": self.order,
            "is_expanded": self.is_expanded,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "OutlineItem":
        return cls(
            id=data["id"],
            heading=data["heading"],
            content=data.get("content", ""),
            order=data["order"],
            is_expanded=data.get("is_expanded", False),
        )


@dataclass(frozen=True)
class ReferenceDocument:
    """Read-only context injected into prompts."""
    name: str
    content: str
    type: ReferenceDocumentType
    id: str = field(default_factory=_new_id)

    @property
    def label(self) -> str:
        """Prompt label for this reference type."""
        return {
            ReferenceDocumentType.STYLE: "STYLE GUIDE",
            ReferenceDocumentType.TEMPLATE: "TEMPLATE",
            ReferenceDocumentType.EXAMPLE: "EXAMPLE",
        }[self.type]

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "content": self.content,
            "type": self.type.value,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ReferenceDocument":
        return cls(
            id=data["id"],
            name=data["name"],
            content=data["content"],
            type=ReferenceDocumentType(data["type"]),
        )


@dataclass(frozen=True)
class ChangeEntry:
    """One change reported by change analysis. Never persisted."""
    type: ChangeType
    description: str
    location: str | None = None

    def to_dict(self) -> dict[str, Any]:
        result = {"type": self.type.value, "description": self.description}
        if self.location:
            result["location"] = self.location
        return result


@dataclass
class ChangeAnalysis:
    """Structured summary of an evolution.

    changes holds at most 3 entries and suggestions at most 2.
    """
    summary: str
    changes: list[ChangeEntry] = field(default_factory=list)
    suggestions: list[str] = field(default_factory=list)
    is_fallback: bool = False


@dataclass(frozen=True)
class DiffLine:
    """A single classified line of a version diff."""
    type: DiffLineType
    content: str

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type.value, "content": self.content}


@dataclass
class AnalysisWarning:
    """Non-fatal condition reported alongside analysis results."""
    type: str
    message: str

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "message": self.message}


@dataclass
class WarningType:
    """Predefined warning types for consistency."""
    TEXT_TRUNCATED = "text_truncated"
