"""Workspace session persistence service.

File-based storage for editing sessions. Each session file carries the full
version log and edit history window, so a reloaded session diffs and evolves
exactly as it did before the restart.

Storage layout:
    data/sessions/
    ├── sessions.json       # Lightweight index (id, title, version count, timestamps)
    └── {session_id}.json   # Full session data per file
"""

import json
from pathlib import Path

from ..config import get_settings
from ..core import SessionNotFoundError, get_logger
from ..models import DocumentVersion, EditHistoryEntry, SessionSummary, WorkspaceSession

logger = get_logger(__name__)


class SessionStore:
    """File-based workspace session persistence.

    Maintains a lightweight index for fast listing and individual
    files for full session data. Version and history appends save
    the session immediately.
    """

    def __init__(self, sessions_dir: Path):
        """Initialize the session store.

        Args:
            sessions_dir: Directory to store session files
        """
        self.sessions_dir = sessions_dir
        self.index_file = sessions_dir / "sessions.json"
        self._index: dict[str, SessionSummary] = {}
        self._ensure_directory()
        self._load_index()

    def _ensure_directory(self) -> None:
        self.sessions_dir.mkdir(parents=True, exist_ok=True)

    def _load_index(self) -> None:
        """Load session index from disk."""
        if not self.index_file.exists():
            return
        try:
            with open(self.index_file, "r", encoding="utf-8") as f:
                for item in json.load(f):
                    summary = SessionSummary.from_dict(item)
                    self._index[summary.session_id] = summary
            logger.info("Loaded session index", session_count=len(self._index))
        except Exception as e:
            logger.warning("Failed to load session index", error=str(e))
            self._index = {}

    def _save_index(self) -> None:
        try:
            with open(self.index_file, "w", encoding="utf-8") as f:
                json.dump([s.to_dict() for s in self._index.values()], f, indent=2)
        except Exception as e:
            logger.error("Failed to save session index", error=str(e))

    def _get_session_path(self, session_id: str) -> Path:
        return self.sessions_dir / f"{session_id}.json"

    def save_session(self, session: WorkspaceSession) -> None:
        """Save full session and update index.

        Args:
            session: The session to save
        """
        try:
            with open(self._get_session_path(session.session_id), "w", encoding="utf-8") as f:
                json.dump(session.to_dict(), f, indent=2)

            self._index[session.session_id] = SessionSummary.from_session(session)
            self._save_index()

            logger.debug(
                "Saved session",
                session_id=session.session_id,
                version_count=len(session.versions),
            )
        except Exception as e:
            logger.error(
                "Failed to save session",
                session_id=session.session_id,
                error=str(e),
            )
            raise

    def load_session(self, session_id: str) -> WorkspaceSession | None:
        """Load full session from disk.

        Args:
            session_id: The session ID to load

        Returns:
            The loaded session, or None if not found or unreadable
        """
        path = self._get_session_path(session_id)
        if not path.exists():
            logger.debug("Session file not found", session_id=session_id)
            return None

        try:
            with open(path, "r", encoding="utf-8") as f:
                return WorkspaceSession.from_dict(json.load(f))
        except Exception as e:
            logger.error("Failed to load session", session_id=session_id, error=str(e))
            return None

    def require_session(self, session_id: str) -> WorkspaceSession:
        """Load a session or raise SessionNotFoundError."""
        session = self.load_session(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        return session

    def list_sessions(self) -> list[SessionSummary]:
        """List all sessions sorted by updated_at (newest first)."""
        summaries = list(self._index.values())
        summaries.sort(key=lambda s: s.updated_at, reverse=True)
        return summaries

    def delete_session(self, session_id: str) -> bool:
        """Delete session file and remove from index.

        Returns:
            True if deleted, False if not found
        """
        if session_id not in self._index:
            return False

        try:
            del self._index[session_id]
            self._save_index()

            path = self._get_session_path(session_id)
            if path.exists():
                path.unlink()

            logger.info("Deleted session", session_id=session_id)
            return True
        except Exception as e:
            logger.error("Failed to delete session", session_id=session_id, error=str(e))
            return False

    def exists(self, session_id: str) -> bool:
        return session_id in self._index

    def get_summary(self, session_id: str) -> SessionSummary | None:
        """Get session summary without loading the full session."""
        return self._index.get(session_id)

    # Version log

    def append_version(self, session_id: str, text: str, description: str) -> str:
        """Append a document snapshot to a session's version log.

        Args:
            session_id: Owning session
            text: Full document text
            description: Short note on how this version came about

        Returns:
            The new version's id

        Raises:
            SessionNotFoundError: If the session does not exist
        """
        session = self.require_session(session_id)
        version_id = session.versions.append(text, description)
        session.touch()
        self.save_session(session)
        return version_id

    def list_versions(self, session_id: str) -> list[DocumentVersion]:
        """All versions of a session in creation order.

        Raises:
            SessionNotFoundError: If the session does not exist
        """
        return self.require_session(session_id).versions.list()

    # Edit history

    def append_edit_history_entry(self, session_id: str, entry: EditHistoryEntry) -> None:
        """Record an applied instruction, evicting the oldest entry when full.

        Raises:
            SessionNotFoundError: If the session does not exist
        """
        session = self.require_session(session_id)
        session.edit_history.append(entry)
        session.touch()
        self.save_session(session)

    def get_edit_history(self, session_id: str, limit: int | None = None) -> list[EditHistoryEntry]:
        """Most recent edit history entries, oldest first.

        Raises:
            SessionNotFoundError: If the session does not exist
        """
        return self.require_session(session_id).edit_history.recent(limit)


# Singleton instance
_session_store: SessionStore | None = None


def get_session_store() -> SessionStore:
    """Get the singleton session store instance."""
    global _session_store
    if _session_store is None:
        _session_store = SessionStore(get_settings().sessions_dir)
    return _session_store
