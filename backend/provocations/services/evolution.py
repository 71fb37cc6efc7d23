"""Document evolution service.

One generation call turns the current document plus an instruction into a
complete new document body. An empty model reply leaves the document
unchanged; a failed call is surfaced once, without retry.
"""

from collections.abc import AsyncIterator

from ..config import get_settings
from ..core import EvolutionError, LLMError, get_logger
from ..editing import TextGenerator, build_evolution_prompt, get_text_generator

logger = get_logger(__name__)


class DocumentEvolver:
    """Service for rewriting a document in response to an instruction."""

    def __init__(self, generator: TextGenerator | None = None):
        """Initialize the evolver.

        Args:
            generator: Text generator. Defaults to the shared generation model client.
        """
        self.settings = get_settings()
        self.generator = generator or get_text_generator(self.settings.generation_model)

    async def evolve(
        self,
        document: str,
        objective: str,
        instruction: str,
        context_block: str,
        selected_text: str | None = None,
    ) -> str:
        """Produce the evolved document.

        Args:
            document: Current document text
            objective: What the document should achieve
            instruction: The user's instruction
            context_block: Assembled steering context
            selected_text: Optional focus area within the document

        Returns:
            The stripped model text, or the input document if the reply was empty

        Raises:
            EvolutionError: If the generation call fails
        """
        system_prompt, user_prompt = build_evolution_prompt(
            document=document,
            objective=objective,
            instruction=instruction,
            context_block=context_block,
            selected_text=selected_text,
        )

        logger.info(
            "Evolving document",
            model=self.generator.model,
            document_length=len(document),
            has_selection=selected_text is not None,
        )

        try:
            evolved = await self.generator.generate(
                system_prompt,
                user_prompt,
                max_output_tokens=self.settings.evolution_max_tokens,
                temperature=self.settings.evolution_temperature,
            )
        except Exception as e:
            cause = e.message if isinstance(e, LLMError) else str(e)
            raise EvolutionError(cause, self.generator.model) from e

        if not evolved or not evolved.strip():
            logger.warning("Empty evolution response, keeping document unchanged")
            return document

        return evolved.strip()

    async def evolve_stream(
        self,
        document: str,
        objective: str,
        instruction: str,
        context_block: str,
        selected_text: str | None = None,
    ) -> AsyncIterator[str]:
        """Stream the evolved document as text chunks.

        Raises:
            EvolutionError: If the generation call fails
        """
        system_prompt, user_prompt = build_evolution_prompt(
            document=document,
            objective=objective,
            instruction=instruction,
            context_block=context_block,
            selected_text=selected_text,
        )

        logger.info(
            "Streaming document evolution",
            model=self.generator.model,
            document_length=len(document),
        )

        try:
            async for chunk in self.generator.stream(
                system_prompt,
                user_prompt,
                max_output_tokens=self.settings.evolution_max_tokens,
                temperature=self.settings.evolution_temperature,
            ):
                yield chunk
        except Exception as e:
            cause = e.message if isinstance(e, LLMError) else str(e)
            raise EvolutionError(cause, self.generator.model) from e


# Singleton instance
_document_evolver: DocumentEvolver | None = None


def get_document_evolver() -> DocumentEvolver:
    """Get the singleton document evolver instance."""
    global _document_evolver
    if _document_evolver is None:
        _document_evolver = DocumentEvolver()
    return _document_evolver
