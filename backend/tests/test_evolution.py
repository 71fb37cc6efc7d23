"""Tests for the document evolver."""

import pytest

from provocations.core import EvolutionError, LLMError
from provocations.services.evolution import DocumentEvolver


@pytest.fixture
def evolver(patched_settings, mock_generator) -> DocumentEvolver:
    return DocumentEvolver(generator=mock_generator)


class TestEvolve:
    """Single-call evolution."""

    @pytest.mark.asyncio
    async def test_returns_model_text(self, evolver, mock_generator):
        mock_generator.queue("  # Plan\n\nA sharper plan.\n")

        result = await evolver.evolve(
            document="# Plan\n\nA plan.",
            objective="Board memo",
            instruction="sharpen it",
            context_block="INSTRUCTION TYPE: general\nSTRATEGY: ...",
        )

        assert result == "# Plan\n\nA sharper plan."

    @pytest.mark.asyncio
    async def test_prompt_contents(self, evolver, mock_generator, patched_settings):
        mock_generator.queue("evolved")

        await evolver.evolve(
            document="DOC BODY",
            objective="OBJECTIVE TEXT",
            instruction="INSTRUCTION TEXT",
            context_block="CONTEXT BLOCK",
            selected_text="SELECTED PART",
        )

        call = mock_generator.calls[0]
        assert "OBJECTIVE TEXT" in call["system_prompt"]
        assert "CONTEXT BLOCK" in call["system_prompt"]
        assert "DOC BODY" in call["user_prompt"]
        assert "SELECTED PART" in call["user_prompt"]
        assert "INSTRUCTION TEXT" in call["user_prompt"]
        assert call["json_mode"] is False
        assert call["max_output_tokens"] == patched_settings.evolution_max_tokens
        assert call["temperature"] == patched_settings.evolution_temperature

    @pytest.mark.asyncio
    async def test_selection_changes_focus_guideline(self, evolver, mock_generator):
        mock_generator.queue("a", "b")

        await evolver.evolve("doc", "obj", "do it", "ctx")
        await evolver.evolve("doc", "obj", "do it", "ctx", selected_text="part")

        assert mock_generator.calls[0]["system_prompt"] != mock_generator.calls[1]["system_prompt"]
        assert "SELECTED TEXT" not in mock_generator.calls[0]["user_prompt"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("reply", ["", "   \n\t  "])
    async def test_empty_reply_keeps_document(self, evolver, mock_generator, reply):
        mock_generator.queue(reply)
        document = "Original text\n"

        result = await evolver.evolve(document, "obj", "expand", "ctx")

        assert result == document

    @pytest.mark.asyncio
    async def test_llm_failure_surfaces_once(self, evolver, mock_generator):
        mock_generator.queue(LLMError("connection refused", "mock-model"), "never used")

        with pytest.raises(EvolutionError) as exc_info:
            await evolver.evolve("doc", "obj", "expand", "ctx")

        assert exc_info.value.message == "Failed to evolve document"
        assert exc_info.value.details == {"error": "connection refused", "model": "mock-model"}
        assert len(mock_generator.calls) == 1

    @pytest.mark.asyncio
    async def test_unexpected_failure_wrapped(self, evolver, mock_generator):
        mock_generator.queue(RuntimeError("boom"))

        with pytest.raises(EvolutionError) as exc_info:
            await evolver.evolve("doc", "obj", "expand", "ctx")

        assert exc_info.value.details["error"] == "boom"


class TestEvolveStream:
    """Streaming variant of evolution."""

    @pytest.mark.asyncio
    async def test_yields_chunks(self, evolver, mock_generator):
        mock_generator.stream_chunks = ["# Pl", "an\n", "Body"]

        chunks = [c async for c in evolver.evolve_stream("doc", "obj", "go", "ctx")]

        assert chunks == ["# Pl", "an\n", "Body"]
        assert mock_generator.calls[0]["stream"] is True

    @pytest.mark.asyncio
    async def test_stream_failure_wrapped(self, evolver, mock_generator):
        mock_generator.stream_chunks = ["partial"]
        mock_generator.stream_error = LLMError("dropped", "mock-model")

        received = []
        with pytest.raises(EvolutionError) as exc_info:
            async for chunk in evolver.evolve_stream("doc", "obj", "go", "ctx"):
                received.append(chunk)

        assert received == ["partial"]
        assert exc_info.value.details["error"] == "dropped"
