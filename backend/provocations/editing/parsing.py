"""Boundary parsing for model output.

Every generation response is untrusted. These helpers turn raw model text
into typed entities, substituting a default for each missing or malformed
field instead of failing.
"""

import json
from typing import Any

from ..models import (
    ChangeAnalysis,
    ChangeEntry,
    ChangeType,
    Lens,
    LensType,
    Provocation,
    ProvocationType,
)

MAX_CHANGES = 3
MAX_SUGGESTIONS = 2

PROVOCATION_TYPE_ORDER = list(ProvocationType)


class ModelOutputError(ValueError):
    """Model output is not a JSON object."""


def strip_code_fences(raw_output: str) -> str:
    """Remove a leading ``` / ```json fence and a trailing ``` fence."""
    cleaned = raw_output.strip()
    if cleaned.startswith("```json"):
        cleaned = cleaned[7:]
    elif cleaned.startswith("```"):
        cleaned = cleaned[3:]
    if cleaned.endswith("```"):
        cleaned = cleaned[:-3]
    return cleaned.strip()


def parse_json_object(raw_output: str) -> dict[str, Any]:
    """Parse model output as a JSON object.

    Raises:
        ModelOutputError: If the text is not valid JSON or not an object
    """
    try:
        parsed = json.loads(strip_code_fences(raw_output))
    except json.JSONDecodeError as e:
        raise ModelOutputError(f"Invalid JSON: {e.msg}") from e

    if not isinstance(parsed, dict):
        raise ModelOutputError(f"Expected a JSON object, got {type(parsed).__name__}")
    return parsed


def _string_or(value: Any, default: str) -> str:
    return value if isinstance(value, str) else default


def _first_key(item: dict[str, Any], *keys: str) -> Any:
    """Value of the first present key; accepts camelCase and snake_case spellings."""
    for key in keys:
        if key in item:
            return item[key]
    return None


def fallback_summary(instruction: str) -> str:
    """Templated summary used when change analysis is unavailable."""
    summary = f"Applied: {instruction[:100]}"
    if len(instruction) > 100:
        summary += "..."
    return summary


def coerce_change_analysis(data: dict[str, Any], instruction: str) -> ChangeAnalysis:
    """Validate a change-analysis object field by field.

    Unknown change types become "modified"; changes are clamped to 3 and
    suggestions to 2.
    """
    summary = _string_or(data.get("summary"), fallback_summary(instruction))

    changes: list[ChangeEntry] = []
    raw_changes = data.get("changes")
    if isinstance(raw_changes, list):
        for raw in raw_changes[:MAX_CHANGES]:
            item = raw if isinstance(raw, dict) else {}
            try:
                change_type = ChangeType(item.get("type"))
            except ValueError:
                change_type = ChangeType.MODIFIED
            location = item.get("location")
            changes.append(
                ChangeEntry(
                    type=change_type,
                    description=_string_or(item.get("description"), "Document updated"),
                    location=location if isinstance(location, str) else None,
                )
            )

    suggestions: list[str] = []
    raw_suggestions = data.get("suggestions")
    if isinstance(raw_suggestions, list):
        suggestions = [s for s in raw_suggestions if isinstance(s, str)][:MAX_SUGGESTIONS]

    return ChangeAnalysis(summary=summary, changes=changes, suggestions=suggestions)


def coerce_lenses(data: dict[str, Any], lens_types: list[LensType]) -> list[Lens]:
    """Build one Lens per requested type from a {"lenses": [...]} object.

    Each lens is matched by its type, then by position.
    """
    raw_lenses = data.get("lenses")
    items = [x if isinstance(x, dict) else {} for x in raw_lenses] if isinstance(raw_lenses, list) else []

    lenses = []
    for idx, lens_type in enumerate(lens_types):
        item = next((x for x in items if x.get("type") == lens_type.value), None)
        if item is None:
            item = items[idx] if idx < len(items) else {}

        key_points = _first_key(item, "keyPoints", "key_points")
        lenses.append(
            Lens(
                type=lens_type,
                title=_string_or(item.get("title"), f"{lens_type.value} Analysis"),
                summary=_string_or(item.get("summary"), "Analysis not available"),
                key_points=[p for p in key_points if isinstance(p, str)]
                if isinstance(key_points, list)
                else [],
            )
        )
    return lenses


def unavailable_lenses(lens_types: list[LensType]) -> list[Lens]:
    """Placeholder lenses used when the lens call fails outright."""
    return [
        Lens(
            type=lens_type,
            title=f"{lens_type.value} Analysis",
            summary="Analysis could not be generated",
        )
        for lens_type in lens_types
    ]


def coerce_provocations(data: dict[str, Any]) -> list[Provocation]:
    """Build provocations from a {"provocations": [...]} object.

    Unknown types rotate through the categories by position.
    """
    raw = data.get("provocations")
    if not isinstance(raw, list):
        return []

    provocations = []
    for idx, entry in enumerate(raw):
        item = entry if isinstance(entry, dict) else {}
        try:
            provocation_type = ProvocationType(item.get("type"))
        except ValueError:
            provocation_type = PROVOCATION_TYPE_ORDER[idx % len(PROVOCATION_TYPE_ORDER)]

        provocations.append(
            Provocation(
                type=provocation_type,
                title=_string_or(item.get("title"), "Untitled Provocation"),
                content=_string_or(item.get("content"), ""),
                source_excerpt=_string_or(
                    _first_key(item, "sourceExcerpt", "source_excerpt"), ""
                ),
            )
        )
    return provocations
