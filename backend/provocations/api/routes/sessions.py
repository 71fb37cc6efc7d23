"""Workspace session endpoints: versions, diffs, lenses, provocations, outline."""

from fastapi import APIRouter, HTTPException

from ...core import NotFoundError, ValidationError
from ...editing import summarize_diff
from ...models import (
    ActiveLensRequest,
    DiffLineResponse,
    DiffResponse,
    OutlineItemCreateRequest,
    OutlineItemResponse,
    OutlineItemUpdateRequest,
    OutlineReorderRequest,
    OutlineResponse,
    ProvocationResponse,
    ProvocationStatusRequest,
    ReferenceDocumentRequest,
    ReferenceDocumentResponse,
    SessionResponse,
    SessionSummaryResponse,
    VersionListResponse,
    VersionResponse,
)
from ...services import get_workspace_service

router = APIRouter(prefix="/sessions", tags=["Sessions"])


@router.get("", response_model=list[SessionSummaryResponse])
async def list_sessions() -> list[SessionSummaryResponse]:
    """List all sessions, most recently updated first."""
    service = get_workspace_service()
    return [SessionSummaryResponse.from_dataclass(s) for s in service.list_sessions()]


@router.get("/{session_id}", response_model=SessionResponse)
async def get_session(session_id: str) -> SessionResponse:
    """Get a session with its document, analysis results and outline."""
    service = get_workspace_service()

    try:
        return SessionResponse.from_dataclass(service.get_session(session_id))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)


@router.delete("/{session_id}")
async def delete_session(session_id: str) -> dict:
    """Delete a session and its version log."""
    service = get_workspace_service()

    try:
        service.delete_session(session_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)

    return {"message": "Session deleted successfully"}


@router.get("/{session_id}/versions", response_model=VersionListResponse)
async def list_versions(session_id: str) -> VersionListResponse:
    """List document versions in creation order."""
    service = get_workspace_service()

    try:
        versions = service.list_versions(session_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)

    return VersionListResponse(
        session_id=session_id,
        versions=[VersionResponse.from_dataclass(v) for v in versions],
    )


@router.get("/{session_id}/diff", response_model=DiffResponse)
async def diff_versions(
    session_id: str,
    from_version: str | None = None,
    to_version: str | None = None,
) -> DiffResponse:
    """Line diff between two versions.

    Without ids the previous and current versions are compared. A session
    with fewer than two versions returns available=false instead of an error.

    Args:
        session_id: The session ID
        from_version: Optional older version id
        to_version: Optional newer version id
    """
    service = get_workspace_service()

    try:
        result = service.diff(session_id, from_version=from_version, to_version=to_version)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)

    if result is None:
        return DiffResponse(available=False)

    old, new, lines = result
    summary = summarize_diff(lines)
    return DiffResponse(
        available=True,
        from_version=VersionResponse.from_dataclass(old),
        to_version=VersionResponse.from_dataclass(new),
        lines=[DiffLineResponse.from_dataclass(line) for line in lines],
        added_count=summary.added,
        removed_count=summary.removed,
    )


@router.put("/{session_id}/active-lens", response_model=SessionResponse)
async def set_active_lens(session_id: str, request: ActiveLensRequest) -> SessionResponse:
    """Set the active lens, or clear it with a null lens."""
    service = get_workspace_service()

    try:
        session = service.set_active_lens(session_id, request.lens)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)

    return SessionResponse.from_dataclass(session)


@router.patch("/{session_id}/provocations/{provocation_id}", response_model=ProvocationResponse)
async def update_provocation_status(
    session_id: str,
    provocation_id: str,
    request: ProvocationStatusRequest,
) -> ProvocationResponse:
    """Mark a provocation as addressed, rejected, highlighted or pending."""
    service = get_workspace_service()

    try:
        provocation = service.update_provocation_status(session_id, provocation_id, request.status)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)

    return ProvocationResponse.from_dataclass(provocation)


@router.post("/{session_id}/references", response_model=ReferenceDocumentResponse)
async def add_reference_document(
    session_id: str,
    request: ReferenceDocumentRequest,
) -> ReferenceDocumentResponse:
    """Attach a style guide, template or example to the session."""
    service = get_workspace_service()
    reference = request.to_dataclass()

    try:
        service.add_reference_document(session_id, reference)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)

    return ReferenceDocumentResponse.from_dataclass(reference)


# Outline


@router.post("/{session_id}/outline", response_model=OutlineItemResponse)
async def add_outline_item(
    session_id: str,
    request: OutlineItemCreateRequest,
) -> OutlineItemResponse:
    """Append an item to the outline."""
    service = get_workspace_service()

    try:
        item = service.add_outline_item(session_id, request.heading, request.content)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)

    return OutlineItemResponse.from_dataclass(item)


@router.patch("/{session_id}/outline/{item_id}", response_model=OutlineItemResponse)
async def update_outline_item(
    session_id: str,
    item_id: str,
    request: OutlineItemUpdateRequest,
) -> OutlineItemResponse:
    """Update an outline item's heading, content or expanded state."""
    service = get_workspace_service()

    try:
        item = service.update_outline_item(
            session_id,
            item_id,
            heading=request.heading,
            content=request.content,
            is_expanded=request.is_expanded,
        )
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)

    return OutlineItemResponse.from_dataclass(item)


@router.delete("/{session_id}/outline/{item_id}")
async def remove_outline_item(session_id: str, item_id: str) -> dict:
    """Remove an item from the outline."""
    service = get_workspace_service()

    try:
        service.remove_outline_item(session_id, item_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)

    return {"message": "Outline item removed successfully"}


@router.put("/{session_id}/outline/order", response_model=OutlineResponse)
async def reorder_outline(session_id: str, request: OutlineReorderRequest) -> OutlineResponse:
    """Reorder the outline; item_ids must list every item exactly once."""
    service = get_workspace_service()

    try:
        service.reorder_outline(session_id, request.item_ids)
        session = service.get_session(session_id)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)

    return OutlineResponse.from_session(session)
