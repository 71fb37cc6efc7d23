"""Workspace session service.

Owns the lifecycle of editing sessions: creation from an analysis, lens and
provocation state, reference material, the outline, and the version log with
its diffs. Every mutation is saved through the session store before returning.
"""

from collections.abc import Sequence

from ..config import get_settings
from ..core import (
    OutlineItemNotFoundError,
    ProvocationNotFoundError,
    SessionNotFoundError,
    ValidationError,
    VersionNotFoundError,
    get_logger,
)
from ..editing import compute_diff
from ..models import (
    ORIGINAL_VERSION_DESCRIPTION,
    DiffLine,
    Document,
    DocumentVersion,
    EditHistory,
    EditHistoryEntry,
    InstructionType,
    Lens,
    LensType,
    OutlineItem,
    Provocation,
    ProvocationStatus,
    ReferenceDocument,
    SessionSummary,
    WorkspaceSession,
)
from .session_store import SessionStore, get_session_store

logger = get_logger(__name__)


class WorkspaceService:
    """Session-level operations over the session store."""

    def __init__(self, store: SessionStore | None = None):
        self.settings = get_settings()
        self.store = store or get_session_store()

    # Lifecycle

    def create_session(
        self,
        document_text: str,
        objective: str = "",
        lenses: Sequence[Lens] = (),
        provocations: Sequence[Provocation] = (),
        reference_documents: Sequence[ReferenceDocument] = (),
    ) -> WorkspaceSession:
        """Create and persist a new session.

        The version log is seeded with the input text so the first evolution
        already has something to diff against.
        """
        session = WorkspaceSession(
            document=Document(raw_text=document_text),
            objective=objective,
            lenses=list(lenses),
            provocations=list(provocations),
            reference_documents=list(reference_documents),
            edit_history=EditHistory(capacity=self.settings.edit_history_capacity),
        )
        session.versions.append(document_text, ORIGINAL_VERSION_DESCRIPTION)
        self.store.save_session(session)

        logger.audit(
            action="session_created",
            resource_type="session",
            resource_id=session.session_id,
            document_length=len(document_text),
            lens_count=len(session.lenses),
            provocation_count=len(session.provocations),
            reference_count=len(session.reference_documents),
        )
        return session

    def get_session(self, session_id: str) -> WorkspaceSession:
        """Load a session.

        Raises:
            SessionNotFoundError: If the session does not exist
        """
        return self.store.require_session(session_id)

    def list_sessions(self) -> list[SessionSummary]:
        return self.store.list_sessions()

    def delete_session(self, session_id: str) -> None:
        """Delete a session.

        Raises:
            SessionNotFoundError: If the session does not exist
        """
        if not self.store.delete_session(session_id):
            raise SessionNotFoundError(session_id)
        logger.audit(action="session_deleted", resource_type="session", resource_id=session_id)

    def _save(self, session: WorkspaceSession) -> WorkspaceSession:
        session.touch()
        self.store.save_session(session)
        return session

    # Lenses and provocations

    def set_active_lens(self, session_id: str, lens: LensType | None) -> WorkspaceSession:
        """Make one lens active, or clear the active lens with None."""
        session = self.get_session(session_id)
        session.active_lens = lens
        for item in session.lenses:
            item.is_active = lens is not None and item.type == lens
        logger.audit(
            action="active_lens_changed",
            resource_type="session",
            resource_id=session_id,
            lens=lens.value if lens else None,
        )
        return self._save(session)

    def update_provocation_status(
        self,
        session_id: str,
        provocation_id: str,
        status: ProvocationStatus,
    ) -> Provocation:
        """Set the status of one provocation.

        Raises:
            SessionNotFoundError: If the session does not exist
            ProvocationNotFoundError: If the provocation is not in the session
        """
        session = self.get_session(session_id)
        for provocation in session.provocations:
            if provocation.id == provocation_id:
                provocation.status = status
                self._save(session)
                logger.audit(
                    action="provocation_status_changed",
                    resource_type="provocation",
                    resource_id=provocation_id,
                    session_id=session_id,
                    status=status.value,
                )
                return provocation
        raise ProvocationNotFoundError(session_id, provocation_id)

    def add_reference_document(
        self, session_id: str, reference: ReferenceDocument
    ) -> WorkspaceSession:
        session = self.get_session(session_id)
        session.reference_documents.append(reference)
        logger.audit(
            action="reference_added",
            resource_type="reference_document",
            resource_id=reference.id,
            session_id=session_id,
            reference_type=reference.type.value,
            content_length=len(reference.content),
        )
        return self._save(session)

    # Outline

    def add_outline_item(self, session_id: str, heading: str, content: str = "") -> OutlineItem:
        """Append an outline item after the existing ones."""
        if not heading.strip():
            raise ValidationError("Heading is required", field="heading")
        session = self.get_session(session_id)
        next_order = max((item.order for item in session.outline), default=-1) + 1
        item = OutlineItem(heading=heading, order=next_order, content=content)
        session.outline.append(item)
        self._save(session)
        logger.debug("Outline item added", session_id=session_id, item_id=item.id)
        return item

    def update_outline_item(
        self,
        session_id: str,
        item_id: str,
        heading: str | None = None,
        content: str | None = None,
        is_expanded: bool | None = None,
    ) -> OutlineItem:
        """Update the given fields of an outline item; None leaves a field as is."""
        session = self.get_session(session_id)
        item = self._find_outline_item(session, item_id)
        if heading is not None:
            if not heading.strip():
                raise ValidationError("Heading is required", field="heading")
            item.heading = heading
        if content is not None:
            item.content = content
        if is_expanded is not None:
            item.is_expanded = is_expanded
        self._save(session)
        return item

    def remove_outline_item(self, session_id: str, item_id: str) -> None:
        session = self.get_session(session_id)
        item = self._find_outline_item(session, item_id)
        session.outline.remove(item)
        self._save(session)
        logger.debug("Outline item removed", session_id=session_id, item_id=item_id)

    def reorder_outline(self, session_id: str, item_ids: Sequence[str]) -> list[OutlineItem]:
        """Reassign orders 0..n-1 following item_ids.

        Raises:
            ValidationError: If item_ids is not a permutation of the outline's ids
        """
        session = self.get_session(session_id)
        by_id = {item.id: item for item in session.outline}
        if len(item_ids) != len(by_id) or set(item_ids) != set(by_id):
            raise ValidationError(
                "Item ids must list every outline item exactly once",
                field="item_ids",
            )
        for order, item_id in enumerate(item_ids):
            by_id[item_id].order = order
        self._save(session)
        return session.sorted_outline()

    def _find_outline_item(self, session: WorkspaceSession, item_id: str) -> OutlineItem:
        for item in session.outline:
            if item.id == item_id:
                return item
        raise OutlineItemNotFoundError(session.session_id, item_id)

    # Versions

    def record_evolution(
        self,
        session: WorkspaceSession,
        document_text: str,
        instruction: str,
        instruction_type: InstructionType,
        summary: str,
    ) -> DocumentVersion:
        """Make document_text the session's current document.

        Appends a version described by the change summary and an edit history
        entry for the instruction through the session store, then refreshes
        the given session from what was persisted.
        """
        session.document.raw_text = document_text
        self._save(session)

        version_id = self.store.append_version(session.session_id, document_text, summary)
        self.store.append_edit_history_entry(
            session.session_id,
            EditHistoryEntry(
                instruction=instruction,
                instruction_type=instruction_type,
                summary=summary,
            ),
        )

        stored = self.store.require_session(session.session_id)
        session.versions = stored.versions
        session.edit_history = stored.edit_history
        session.updated_at = stored.updated_at
        version = session.versions.get(version_id)

        logger.audit(
            action="version_recorded",
            resource_type="document_version",
            resource_id=version_id,
            session_id=session.session_id,
            instruction_type=instruction_type.value,
            version_count=len(session.versions),
        )
        return version

    def list_versions(self, session_id: str) -> list[DocumentVersion]:
        return self.store.list_versions(session_id)

    def get_edit_history(self, session_id: str, limit: int | None = None) -> list[EditHistoryEntry]:
        return self.store.get_edit_history(session_id, limit)

    def diff(
        self,
        session_id: str,
        from_version: str | None = None,
        to_version: str | None = None,
    ) -> tuple[DocumentVersion, DocumentVersion, list[DiffLine]] | None:
        """Diff two versions of a session.

        With no ids the latest pair is compared. A missing end defaults to the
        previous (from) or current (to) version.

        Returns:
            (from, to, lines), or None when the session has fewer than two versions

        Raises:
            SessionNotFoundError: If the session does not exist
            VersionNotFoundError: If a given version id is unknown
        """
        session = self.get_session(session_id)
        pair = session.versions.latest_pair()
        if pair is None:
            return None

        old, new = pair
        if from_version is not None:
            old = self._require_version(session, from_version)
        if to_version is not None:
            new = self._require_version(session, to_version)

        return old, new, compute_diff(old.text, new.text)

    def _require_version(self, session: WorkspaceSession, version_id: str) -> DocumentVersion:
        version = session.versions.get(version_id)
        if version is None:
            raise VersionNotFoundError(session.session_id, version_id)
        return version


# Singleton instance
_workspace_service: WorkspaceService | None = None


def get_workspace_service() -> WorkspaceService:
    """Get the singleton workspace service instance."""
    global _workspace_service
    if _workspace_service is None:
        _workspace_service = WorkspaceService()
    return _workspace_service
