"""Version log and edit history containers for a workspace session."""

from collections import deque
from collections.abc import Iterable, Iterator

from .common import DocumentVersion, EditHistoryEntry

ORIGINAL_VERSION_DESCRIPTION = "Original document"


class VersionStore:
    """Append-only log of document snapshots.

    There are no update or delete operations. The current version is always
    the last element; the previous one is second to last.
    """

    def __init__(self, versions: Iterable[DocumentVersion] | None = None):
        self._versions: list[DocumentVersion] = list(versions or [])

    def append(self, text: str, description: str) -> str:
        """Append a new snapshot and return its id."""
        version = DocumentVersion(text=text, description=description)
        self._versions.append(version)
        return version.id

    def list(self) -> list[DocumentVersion]:
        """All versions in creation order (a copy)."""
        return list(self._versions)

    def get(self, version_id: str) -> DocumentVersion | None:
        for version in self._versions:
            if version.id == version_id:
                return version
        return None

    @property
    def current(self) -> DocumentVersion | None:
        return self._versions[-1] if self._versions else None

    def latest_pair(self) -> tuple[DocumentVersion, DocumentVersion] | None:
        """Return (previous, current), or None when fewer than two versions exist."""
        if len(self._versions) < 2:
            return None
        return self._versions[-2], self._versions[-1]

    def __len__(self) -> int:
        return len(self._versions)

    def __iter__(self) -> Iterator[DocumentVersion]:
        return iter(list(self._versions))


class EditHistory:
    """Bounded trailing window of applied instructions.

    Holds at most `capacity` entries; appending beyond that silently drops
    the oldest. This is a consistency hint for later prompts, not an audit log.
    """

    DEFAULT_CAPACITY = 10

    def __init__(
        self,
        entries: Iterable[EditHistoryEntry] | None = None,
        capacity: int = DEFAULT_CAPACITY,
    ):
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self.capacity = capacity
        self._entries: deque[EditHistoryEntry] = deque(entries or [], maxlen=capacity)

    def append(self, entry: EditHistoryEntry) -> None:
        self._entries.append(entry)

    def recent(self, limit: int | None = None) -> list[EditHistoryEntry]:
        """Most recent entries, oldest first. limit=None returns the whole window."""
        entries = list(self._entries)
        if limit is None:
            return entries
        if limit <= 0:
            return []
        return entries[-limit:]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[EditHistoryEntry]:
        return iter(list(self._entries))

    def __bool__(self) -> bool:
        return bool(self._entries)
