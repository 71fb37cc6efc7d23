"""Source analysis endpoint."""

from fastapi import APIRouter

from ...models import AnalyzeRequest, AnalyzeResponse
from ...services import get_analysis_service

router = APIRouter(tags=["Analysis"])


@router.post("/analyze", response_model=AnalyzeResponse)
async def analyze_text(request: AnalyzeRequest) -> AnalyzeResponse:
    """Analyze source text into lenses and provocations.

    Runs one lens call and one provocation call, then opens a workspace
    session seeded with the text as its original version. Model failures
    degrade to placeholder lenses or an empty provocation list rather than
    failing the request.

    Args:
        request: Source text, objective, lens selection and references

    Returns:
        Lenses, provocations, warnings and the new session's id
    """
    service = get_analysis_service()

    result = await service.analyze_text(
        text=request.text,
        objective=request.objective,
        selected_lenses=request.selected_lenses,
        reference_documents=[ref.to_dataclass() for ref in request.reference_documents],
    )

    return result.to_response()
