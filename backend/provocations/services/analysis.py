"""Source analysis service.

Turns pasted source material into lens summaries and provocations, then opens
a workspace session for it. The two model calls run one after the other and
fail independently. A failed lens call yields placeholder lenses and malformed
lens JSON yields per-field defaults. A failed provocation call yields no
provocations. Neither call is retried.
"""

import time
from collections.abc import Sequence

from ..config import get_settings
from ..core import get_logger
from ..editing import (
    ModelOutputError,
    TextGenerator,
    build_lens_prompt,
    build_provocation_prompt,
    coerce_lenses,
    coerce_provocations,
    get_text_generator,
    parse_json_object,
    unavailable_lenses,
)
from ..models import (
    AnalysisResult,
    AnalysisWarning,
    Lens,
    LensType,
    Provocation,
    ReferenceDocument,
    WarningType,
)
from .workspace import WorkspaceService, get_workspace_service

logger = get_logger(__name__)


class SourceAnalysisService:
    """Service for lens and provocation analysis of source text."""

    def __init__(
        self,
        generator: TextGenerator | None = None,
        workspace: WorkspaceService | None = None,
    ):
        self.settings = get_settings()
        self.generator = generator or get_text_generator(self.settings.analysis_model)
        self.workspace = workspace or get_workspace_service()

    async def analyze_text(
        self,
        text: str,
        objective: str = "",
        selected_lenses: Sequence[LensType] | None = None,
        reference_documents: Sequence[ReferenceDocument] | None = None,
    ) -> AnalysisResult:
        """Analyze source text and create a workspace session for it.

        Args:
            text: Source material
            objective: What the user wants the document to achieve
            selected_lenses: Lenses to generate; None or empty means all
            reference_documents: Optional target-quality references

        Returns:
            AnalysisResult with the new session's id
        """
        start_time = time.time()
        lens_types = list(selected_lenses) if selected_lenses else list(LensType)
        references = list(reference_documents or [])

        warnings: list[AnalysisWarning] = []
        limit = self.settings.max_analysis_chars
        analysis_text = text
        if len(text) > limit:
            analysis_text = text[:limit]
            warnings.append(
                AnalysisWarning(
                    type=WarningType.TEXT_TRUNCATED,
                    message=(
                        f"Your text ({len(text)} characters) was truncated to {limit} "
                        "characters for analysis. The full document is preserved."
                    ),
                )
            )

        logger.audit(
            action="analysis_started",
            resource_type="analysis",
            text_length=len(text),
            truncated=bool(warnings),
            lens_types=[t.value for t in lens_types],
            reference_count=len(references),
        )

        lenses = await self.generate_lenses(analysis_text, lens_types)
        provocations = await self.generate_provocations(analysis_text, references)

        session = self.workspace.create_session(
            document_text=text,
            objective=objective,
            lenses=lenses,
            provocations=provocations,
            reference_documents=references,
        )

        generation_time_ms = (time.time() - start_time) * 1000
        logger.audit(
            action="analysis_completed",
            resource_type="analysis",
            resource_id=session.session_id,
            lens_count=len(lenses),
            provocation_count=len(provocations),
            generation_time_ms=generation_time_ms,
        )

        return AnalysisResult(
            session_id=session.session_id,
            document_id=session.document.id,
            lenses=lenses,
            provocations=provocations,
            warnings=warnings,
            generation_time_ms=generation_time_ms,
        )

    async def generate_lenses(self, text: str, lens_types: list[LensType]) -> list[Lens]:
        """One JSON call covering every requested lens."""
        system_prompt, user_prompt = build_lens_prompt(text, lens_types)
        try:
            raw_output = await self.generator.generate(
                system_prompt,
                user_prompt,
                max_output_tokens=self.settings.lens_max_tokens,
                temperature=self.settings.analysis_temperature,
                json_mode=True,
            )
            return coerce_lenses(parse_json_object(raw_output), lens_types)
        except ModelOutputError as e:
            logger.warning("Lens analysis returned malformed JSON", error=str(e))
            return coerce_lenses({}, lens_types)
        except Exception as e:
            logger.error("Lens analysis failed", error=str(e))
        return unavailable_lenses(lens_types)

    async def generate_provocations(
        self,
        text: str,
        references: list[ReferenceDocument],
    ) -> list[Provocation]:
        """One JSON call for provocations across all categories."""
        system_prompt, user_prompt = build_provocation_prompt(
            text,
            references=references,
            reference_chars=self.settings.reference_analyze_chars,
        )
        try:
            raw_output = await self.generator.generate(
                system_prompt,
                user_prompt,
                max_output_tokens=self.settings.provocation_max_tokens,
                temperature=self.settings.analysis_temperature,
                json_mode=True,
            )
            return coerce_provocations(parse_json_object(raw_output))
        except ModelOutputError as e:
            logger.warning("Provocation generation returned malformed JSON", error=str(e))
        except Exception as e:
            logger.error("Provocation generation failed", error=str(e))
        return []


# Singleton instance
_analysis_service: SourceAnalysisService | None = None


def get_analysis_service() -> SourceAnalysisService:
    """Get the singleton source analysis service instance."""
    global _analysis_service
    if _analysis_service is None:
        _analysis_service = SourceAnalysisService()
    return _analysis_service
