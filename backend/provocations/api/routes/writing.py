"""Writing endpoints: document evolution, heading expansion and refinement."""

import json
from collections.abc import AsyncIterator
from typing import Any

from fastapi import APIRouter, HTTPException
from fastapi.responses import StreamingResponse

from ...core import GenerationError, LLMError, NotFoundError, ValidationError
from ...models import (
    ExpandRequest,
    ExpandResponse,
    RefineRequest,
    RefineResponse,
    WriteRequest,
    WriteResponse,
)
from ...services import get_writing_service

router = APIRouter(tags=["Writing"])


def _evolution_kwargs(request: WriteRequest) -> dict[str, Any]:
    """Convert a write request into service keyword arguments."""
    return {
        "document": request.document,
        "objective": request.objective,
        "instruction": request.instruction,
        "selected_text": request.selected_text,
        "provocation": request.provocation.to_dataclass() if request.provocation else None,
        "active_lens": request.active_lens,
        "reference_documents": (
            [ref.to_dataclass() for ref in request.reference_documents]
            if request.reference_documents is not None
            else None
        ),
        "edit_history": (
            [entry.to_dataclass() for entry in request.edit_history]
            if request.edit_history is not None
            else None
        ),
        "tone": request.tone,
        "target_length": request.target_length,
        "session_id": request.session_id,
    }


def _format_event(event: dict[str, Any]) -> str:
    return f"data: {json.dumps(event)}\n\n"


@router.post("/write", response_model=WriteResponse)
async def write(request: WriteRequest) -> WriteResponse:
    """Evolve a document with a free-text instruction.

    The pipeline:
    1. The instruction is classified (expand, condense, restructure, ...)
    2. Strategy, recent edits, references, lens, provocation, tone and
       length are assembled into a context block
    3. The model rewrites the full document
    4. A second call summarizes what changed (best effort)
    5. With a session_id, the result is recorded as a new version

    Args:
        request: Document, objective, instruction and optional context

    Returns:
        The evolved document with change summary and instruction type
    """
    service = get_writing_service()

    try:
        result = await service.evolve(**_evolution_kwargs(request))
        return result.to_response()

    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except LLMError as e:
        raise HTTPException(
            status_code=503,
            detail=f"LLM service error: {e.message}. Ensure Ollama is running.",
        )
    except GenerationError as e:
        raise HTTPException(status_code=500, detail={"error": e.message, "details": e.details})


@router.post("/write/stream")
async def write_stream(request: WriteRequest) -> StreamingResponse:
    """Evolve a document and stream the result as server-sent events.

    Events are JSON objects in `data:` lines:
    - meta: {"type": "meta", "instruction_type": ...}
    - content: {"type": "content", "content": <chunk>}
    - done: {"type": "done", "summary": ..., "instruction_type": ...}
    - error: {"type": "error", "error": ..., "details": ...}

    Validation and unknown sessions fail before the stream opens.
    """
    service = get_writing_service()
    events = service.evolve_stream(**_evolution_kwargs(request))

    try:
        first_event = await anext(events)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)

    async def event_stream() -> AsyncIterator[str]:
        yield _format_event(first_event)
        async for event in events:
            yield _format_event(event)

    return StreamingResponse(
        event_stream(),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache", "Connection": "keep-alive"},
    )


@router.post("/expand", response_model=ExpandResponse)
async def expand_heading(request: ExpandRequest) -> ExpandResponse:
    """Draft section content for an outline heading."""
    service = get_writing_service()

    try:
        content = await service.expand_heading(
            heading=request.heading,
            context=request.context,
            tone=request.tone,
            session_id=request.session_id,
        )
        return ExpandResponse(content=content)

    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except LLMError as e:
        raise HTTPException(
            status_code=503,
            detail=f"LLM service error: {e.message}. Ensure Ollama is running.",
        )


@router.post("/refine", response_model=RefineResponse)
async def refine_text(request: RefineRequest) -> RefineResponse:
    """Rewrite a passage in a tone and target length."""
    service = get_writing_service()

    try:
        refined = await service.refine_text(
            text=request.text,
            tone=request.tone,
            target_length=request.target_length,
        )
        return RefineResponse(refined=refined)

    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except LLMError as e:
        raise HTTPException(
            status_code=503,
            detail=f"LLM service error: {e.message}. Ensure Ollama is running.",
        )
