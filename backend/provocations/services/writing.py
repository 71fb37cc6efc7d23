"""Writing service: the document evolution pipeline.

One write request runs classify -> assemble context -> evolve -> analyze
changes, then records the result in the workspace session when one is given.
Also hosts the outline helpers that draft a section for a heading and refine
a passage in a tone and length.
"""

import time
from collections.abc import AsyncIterator, Sequence
from typing import Any

from ..config import get_settings
from ..core import EvolutionError, ValidationError, get_logger
from ..editing import (
    TextGenerator,
    build_expand_prompt,
    build_refine_prompt,
    fallback_summary,
    get_text_generator,
)
from ..models import (
    EditHistory,
    EditHistoryEntry,
    EvolutionResult,
    LensType,
    ProvocationContext,
    ReferenceDocument,
    TargetLength,
    ToneOption,
    WorkspaceSession,
)
from .change_analysis import ChangeAnalyzer, get_change_analyzer
from .classifier import InstructionClassifier, get_instruction_classifier
from .context import ContextAssembler, EvolutionContext, get_context_assembler
from .evolution import DocumentEvolver, get_document_evolver
from .workspace import WorkspaceService, get_workspace_service

logger = get_logger(__name__)


def _require(value: str, label: str, field: str) -> None:
    if not value or not value.strip():
        raise ValidationError(f"{label} is required", field=field)


class WritingService:
    """Service orchestrating document evolution and outline drafting."""

    def __init__(
        self,
        classifier: InstructionClassifier | None = None,
        assembler: ContextAssembler | None = None,
        evolver: DocumentEvolver | None = None,
        analyzer: ChangeAnalyzer | None = None,
        workspace: WorkspaceService | None = None,
        generator: TextGenerator | None = None,
    ):
        """Initialize the writing service.

        Args:
            classifier: Instruction classifier strategy
            assembler: Context block builder
            evolver: Document evolver
            analyzer: Change analyzer
            workspace: Session service used to record versions
            generator: Text generator for expand and refine calls
        """
        self.settings = get_settings()
        self.classifier = classifier or get_instruction_classifier()
        self.assembler = assembler or get_context_assembler()
        self.evolver = evolver or get_document_evolver()
        self.analyzer = analyzer or get_change_analyzer()
        self.workspace = workspace or get_workspace_service()
        self.generator = generator or get_text_generator(self.settings.generation_model)

    def _build_context(
        self,
        session: WorkspaceSession | None,
        edit_history: Sequence[EditHistoryEntry] | None,
        reference_documents: Sequence[ReferenceDocument] | None,
        active_lens: LensType | None,
        provocation: ProvocationContext | None,
        tone: ToneOption | None,
        target_length: TargetLength | None,
    ) -> EvolutionContext:
        """Merge request context over session state; request values win."""
        window = self.settings.edit_history_prompt_window
        if edit_history is not None:
            edit_history = EditHistory(
                edit_history, capacity=self.settings.edit_history_capacity
            ).recent(window)
        if session is not None:
            if edit_history is None:
                edit_history = self.workspace.get_edit_history(session.session_id, window)
            if reference_documents is None:
                reference_documents = session.reference_documents
            if active_lens is None:
                active_lens = session.active_lens

        return EvolutionContext(
            edit_history=list(edit_history or []),
            reference_documents=list(reference_documents or []),
            active_lens=active_lens,
            provocation=provocation,
            tone=tone,
            target_length=target_length,
        )

    async def evolve(
        self,
        document: str,
        objective: str,
        instruction: str,
        selected_text: str | None = None,
        provocation: ProvocationContext | None = None,
        active_lens: LensType | None = None,
        reference_documents: Sequence[ReferenceDocument] | None = None,
        edit_history: Sequence[EditHistoryEntry] | None = None,
        tone: ToneOption | None = None,
        target_length: TargetLength | None = None,
        session_id: str | None = None,
    ) -> EvolutionResult:
        """Evolve a document in response to an instruction.

        Args:
            document: Current document text
            objective: What the document should achieve
            instruction: Free-text instruction
            selected_text: Optional focus area
            provocation: Provocation being addressed
            active_lens: Perspective to apply
            reference_documents: Style/template/example material
            edit_history: Client-held history; defaults to the session's
            tone: Voice to write in
            target_length: Desired length relative to the current document
            session_id: Session to read context from and record the version in

        Returns:
            EvolutionResult with the new document and its change analysis

        Raises:
            ValidationError: If document, objective or instruction is blank
            SessionNotFoundError: If session_id is unknown
            EvolutionError: If the evolution call fails
        """
        _require(document, "Document", "document")
        _require(objective, "Objective", "objective")
        _require(instruction, "Instruction", "instruction")

        start_time = time.time()
        session = self.workspace.get_session(session_id) if session_id else None

        instruction_type = self.classifier.classify(instruction)
        context = self._build_context(
            session, edit_history, reference_documents, active_lens, provocation, tone, target_length
        )
        context_block = self.assembler.build(instruction_type, context)

        logger.audit(
            action="evolution_started",
            resource_type="document",
            resource_id=session.document.id if session else None,
            session_id=session_id,
            instruction_type=instruction_type.value,
            document_length=len(document),
            has_selection=bool(selected_text),
            history_count=len(context.edit_history),
            reference_count=len(context.reference_documents),
        )

        evolved = await self.evolver.evolve(
            document=document,
            objective=objective,
            instruction=instruction,
            context_block=context_block,
            selected_text=selected_text or None,
        )

        analysis = await self.analyzer.analyze(document, evolved, instruction)

        version = None
        if session is not None:
            version = self.workspace.record_evolution(
                session,
                document_text=evolved,
                instruction=instruction,
                instruction_type=instruction_type,
                summary=analysis.summary,
            )

        generation_time_ms = (time.time() - start_time) * 1000
        logger.audit(
            action="evolution_completed",
            resource_type="document",
            resource_id=session.document.id if session else None,
            session_id=session_id,
            instruction_type=instruction_type.value,
            evolved_length=len(evolved),
            changes_count=len(analysis.changes),
            analysis_fallback=analysis.is_fallback,
            generation_time_ms=generation_time_ms,
        )

        return EvolutionResult(
            document=evolved,
            instruction_type=instruction_type,
            analysis=analysis,
            version=version,
            generation_time_ms=generation_time_ms,
            model_used=self.evolver.generator.model,
        )

    async def evolve_stream(
        self,
        document: str,
        objective: str,
        instruction: str,
        selected_text: str | None = None,
        provocation: ProvocationContext | None = None,
        active_lens: LensType | None = None,
        reference_documents: Sequence[ReferenceDocument] | None = None,
        edit_history: Sequence[EditHistoryEntry] | None = None,
        tone: ToneOption | None = None,
        target_length: TargetLength | None = None,
        session_id: str | None = None,
    ) -> AsyncIterator[dict[str, Any]]:
        """Stream an evolution as events.

        Yields a "meta" event with the instruction type, one "content" event
        per text chunk, then either "done" (with a templated summary, since no
        change analysis runs on the streamed path) or "error".

        Raises:
            ValidationError: If document, objective or instruction is blank
            SessionNotFoundError: If session_id is unknown
        """
        _require(document, "Document", "document")
        _require(objective, "Objective", "objective")
        _require(instruction, "Instruction", "instruction")

        session = self.workspace.get_session(session_id) if session_id else None
        instruction_type = self.classifier.classify(instruction)
        context = self._build_context(
            session, edit_history, reference_documents, active_lens, provocation, tone, target_length
        )
        context_block = self.assembler.build(instruction_type, context)

        yield {"type": "meta", "instruction_type": instruction_type.value}

        chunks: list[str] = []
        try:
            async for chunk in self.evolver.evolve_stream(
                document=document,
                objective=objective,
                instruction=instruction,
                context_block=context_block,
                selected_text=selected_text or None,
            ):
                if chunk:
                    chunks.append(chunk)
                    yield {"type": "content", "content": chunk}
        except EvolutionError as e:
            logger.error("Streamed evolution failed", **e.details)
            yield {"type": "error", "error": e.message, "details": e.details}
            return

        summary = fallback_summary(instruction)
        evolved = "".join(chunks).strip()
        done: dict[str, Any] = {
            "type": "done",
            "summary": summary,
            "instruction_type": instruction_type.value,
        }

        if session is not None and evolved:
            version = self.workspace.record_evolution(
                session,
                document_text=evolved,
                instruction=instruction,
                instruction_type=instruction_type,
                summary=summary,
            )
            done["version_id"] = version.id

        yield done

    async def expand_heading(
        self,
        heading: str,
        context: str | None = None,
        tone: ToneOption | None = None,
        session_id: str | None = None,
    ) -> str:
        """Draft section content for an outline heading.

        When context is omitted and a session is given, the session's
        document grounds the draft.
        """
        _require(heading, "Heading", "heading")
        if context is None and session_id:
            context = self.workspace.get_session(session_id).document.raw_text

        system_prompt, user_prompt = build_expand_prompt(heading, context=context, tone=tone)
        logger.info("Expanding outline heading", has_context=bool(context))
        content = await self.generator.generate(
            system_prompt,
            user_prompt,
            max_output_tokens=self.settings.expand_max_tokens,
            temperature=self.settings.evolution_temperature,
        )
        return content.strip()

    async def refine_text(
        self,
        text: str,
        tone: ToneOption | None = None,
        target_length: TargetLength | None = None,
    ) -> str:
        """Rewrite a passage in a tone and length. An empty reply returns the input."""
        _require(text, "Text", "text")
        system_prompt, user_prompt = build_refine_prompt(text, tone=tone, target_length=target_length)
        logger.info(
            "Refining passage",
            text_length=len(text),
            tone=tone.value if tone else None,
            target_length=target_length.value if target_length else None,
        )
        refined = await self.generator.generate(
            system_prompt,
            user_prompt,
            max_output_tokens=self.settings.refine_max_tokens,
            temperature=self.settings.refine_temperature,
        )
        if not refined or not refined.strip():
            logger.warning("Empty refine response, returning input unchanged")
            return text
        return refined.strip()


# Singleton instance
_writing_service: WritingService | None = None


def get_writing_service() -> WritingService:
    """Get the singleton writing service instance."""
    global _writing_service
    if _writing_service is None:
        _writing_service = WritingService()
    return _writing_service
