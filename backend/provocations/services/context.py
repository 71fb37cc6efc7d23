"""Context assembly for document evolution.

Collects everything that should steer one evolution (strategy, recent edits,
reference material, perspective, provocation, tone, length) into a single
labelled text block. Block order is fixed so the same inputs always give the
same prompt.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field

from ..config import get_settings
from ..editing import (
    INSTRUCTION_STRATEGIES,
    LENGTH_INSTRUCTIONS,
    LENS_DESCRIPTIONS,
    format_reference_summary,
    truncate,
)
from ..models import (
    EditHistory,
    EditHistoryEntry,
    InstructionType,
    LensType,
    ProvocationContext,
    ReferenceDocument,
    TargetLength,
    ToneOption,
)

HISTORY_INSTRUCTION_CHARS = 80


@dataclass
class EvolutionContext:
    """Optional steering inputs for one evolution."""
    edit_history: Sequence[EditHistoryEntry] = field(default_factory=list)
    reference_documents: Sequence[ReferenceDocument] = field(default_factory=list)
    active_lens: LensType | None = None
    provocation: ProvocationContext | None = None
    tone: ToneOption | None = None
    target_length: TargetLength | None = None


class ContextAssembler:
    """Builds the CONTEXT block of the evolution system prompt."""

    def __init__(
        self,
        history_window: int | None = None,
        reference_chars: int | None = None,
    ):
        settings = get_settings()
        if history_window is None:
            history_window = settings.edit_history_prompt_window
        if reference_chars is None:
            reference_chars = settings.reference_write_chars
        self.history_window = history_window
        self.reference_chars = reference_chars

    def build(self, instruction_type: InstructionType, context: EvolutionContext) -> str:
        """Render the context block.

        Args:
            instruction_type: Classified instruction category
            context: Optional steering inputs

        Returns:
            Context blocks joined by blank lines; never empty since the
            strategy block is always present
        """
        blocks = [self._strategy_block(instruction_type)]

        history = EditHistory(context.edit_history, capacity=max(len(context.edit_history), 1))
        recent = history.recent(self.history_window)
        if recent:
            blocks.append(self._history_block(recent))
        if context.reference_documents:
            blocks.append(self._reference_block(context.reference_documents))
        if context.active_lens:
            blocks.append(self._lens_block(context.active_lens))
        if context.provocation:
            blocks.append(self._provocation_block(context.provocation))
        if context.tone:
            blocks.append(f"TONE: Write in a {context.tone.value} voice")
        if context.target_length:
            blocks.append(f"LENGTH: {LENGTH_INSTRUCTIONS[context.target_length]}")

        return "\n\n".join(blocks)

    def _strategy_block(self, instruction_type: InstructionType) -> str:
        return (
            f"INSTRUCTION TYPE: {instruction_type.value}\n"
            f"STRATEGY: {INSTRUCTION_STRATEGIES[instruction_type]}"
        )

    def _history_block(self, recent: list[EditHistoryEntry]) -> str:
        lines = "\n".join(
            f"- [{entry.instruction_type.value}] "
            f"{truncate(entry.instruction, HISTORY_INSTRUCTION_CHARS)}"
            for entry in recent
        )
        return (
            "RECENT EDIT HISTORY (maintain consistency with previous changes):\n"
            f"{lines}"
        )

    def _reference_block(self, references: Sequence[ReferenceDocument]) -> str:
        summaries = format_reference_summary(
            list(references),
            self.reference_chars,
            separator="\n\n---\n\n",
        )
        return (
            "REFERENCE DOCUMENTS (use these to guide tone, style, and structure):\n"
            f"{summaries}\n\n"
            "Analyze the style, structure, and voice of these references. Match the target "
            "document's quality, formatting patterns, and professional standards where "
            "appropriate."
        )

    def _lens_block(self, lens: LensType) -> str:
        return f"PERSPECTIVE: Apply the {lens.value} lens ({LENS_DESCRIPTIONS[lens]})"

    def _provocation_block(self, provocation: ProvocationContext) -> str:
        return (
            "PROVOCATION BEING ADDRESSED:\n"
            f"Type: {provocation.type.value}\n"
            f"Challenge: {provocation.title}\n"
            f"Details: {provocation.content}\n"
            f'Relevant excerpt: "{provocation.source_excerpt}"'
        )


# Singleton instance
_context_assembler: ContextAssembler | None = None


def get_context_assembler() -> ContextAssembler:
    """Get the singleton context assembler instance."""
    global _context_assembler
    if _context_assembler is None:
        _context_assembler = ContextAssembler()
    return _context_assembler
