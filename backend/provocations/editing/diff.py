"""Line-level diff between two document versions.

This is a readable two-pointer walk with set membership, not a minimal
(LCS/Myers) diff. Reordered lines that exist on both sides show up as a
removed/added pair, and intra-line edits are not detected. The branch order
below is fixed so output is reproducible.
"""

from dataclasses import dataclass

from ..models import DiffLine, DiffLineType


@dataclass(frozen=True)
class DiffSummary:
    """Counts derived from a diff."""
    added: int
    removed: int
    unchanged: int


def compute_diff(old_text: str, new_text: str) -> list[DiffLine]:
    """Classify every line of two texts as unchanged, added or removed.

    Args:
        old_text: Previous version text
        new_text: Current version text

    Returns:
        Diff lines in display order
    """
    old_lines = old_text.split("\n")
    new_lines = new_text.split("\n")
    old_set = set(old_lines)
    new_set = set(new_lines)

    result: list[DiffLine] = []
    i = j = 0

    while i < len(old_lines) or j < len(new_lines):
        if i >= len(old_lines):
            result.append(DiffLine(DiffLineType.ADDED, new_lines[j]))
            j += 1
        elif j >= len(new_lines):
            result.append(DiffLine(DiffLineType.REMOVED, old_lines[i]))
            i += 1
        elif old_lines[i] == new_lines[j]:
            result.append(DiffLine(DiffLineType.UNCHANGED, old_lines[i]))
            i += 1
            j += 1
        elif old_lines[i] not in new_set:
            result.append(DiffLine(DiffLineType.REMOVED, old_lines[i]))
            i += 1
        elif new_lines[j] not in old_set:
            result.append(DiffLine(DiffLineType.ADDED, new_lines[j]))
            j += 1
        else:
            # Both lines exist elsewhere on the other side but are out of alignment
            result.append(DiffLine(DiffLineType.REMOVED, old_lines[i]))
            result.append(DiffLine(DiffLineType.ADDED, new_lines[j]))
            i += 1
            j += 1

    return result


def summarize_diff(lines: list[DiffLine]) -> DiffSummary:
    """Count lines by type."""
    return DiffSummary(
        added=sum(1 for line in lines if line.type == DiffLineType.ADDED),
        removed=sum(1 for line in lines if line.type == DiffLineType.REMOVED),
        unchanged=sum(1 for line in lines if line.type == DiffLineType.UNCHANGED),
    )
