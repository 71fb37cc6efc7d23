"""Tests for change analysis.

The analyzer never raises: malformed JSON gets exactly one retry, and
anything else ends in the templated fallback summary.
"""

import json

import pytest

from provocations.core import LLMError
from provocations.editing import JSON_RETRY_SUFFIX
from provocations.models import ChangeType
from provocations.services.change_analysis import ChangeAnalyzer

VALID_ANALYSIS = json.dumps(
    {
        "summary": "Expanded the market section",
        "changes": [
            {"type": "added", "description": "New market sizing", "location": "Market"},
        ],
        "suggestions": ["Cite the sizing source"],
    }
)


@pytest.fixture
def analyzer(patched_settings, mock_generator) -> ChangeAnalyzer:
    return ChangeAnalyzer(generator=mock_generator)


class TestChangeAnalysis:
    """Successful analysis."""

    @pytest.mark.asyncio
    async def test_valid_json(self, analyzer, mock_generator):
        mock_generator.queue(VALID_ANALYSIS)

        result = await analyzer.analyze("old", "new", "expand the market section")

        assert result.summary == "Expanded the market section"
        assert result.changes[0].type == ChangeType.ADDED
        assert result.changes[0].location == "Market"
        assert result.suggestions == ["Cite the sizing source"]
        assert result.is_fallback is False
        assert len(mock_generator.calls) == 1

    @pytest.mark.asyncio
    async def test_json_mode_and_limits(self, analyzer, mock_generator, patched_settings):
        mock_generator.queue(VALID_ANALYSIS)

        await analyzer.analyze("o" * 3000, "n" * 3000, "expand")

        call = mock_generator.calls[0]
        assert call["json_mode"] is True
        assert call["max_output_tokens"] == patched_settings.change_analysis_max_tokens
        assert call["temperature"] == patched_settings.analysis_temperature
        assert "o" * 2000 + "..." in call["user_prompt"]
        assert "o" * 2001 not in call["user_prompt"]

    @pytest.mark.asyncio
    async def test_fenced_json_accepted(self, analyzer, mock_generator):
        mock_generator.queue(f"```json\n{VALID_ANALYSIS}\n```")

        result = await analyzer.analyze("old", "new", "expand")

        assert result.summary == "Expanded the market section"

    @pytest.mark.asyncio
    async def test_clamps_and_coerces(self, analyzer, mock_generator):
        mock_generator.queue(
            json.dumps(
                {
                    "summary": "Many changes",
                    "changes": [
                        {"type": "rewritten", "description": "a"},
                        {"type": "removed", "description": 7},
                        {"type": "added", "description": "c"},
                        {"type": "added", "description": "d"},
                    ],
                    "suggestions": ["one", "two", "three"],
                }
            )
        )

        result = await analyzer.analyze("old", "new", "rework")

        assert len(result.changes) == 3
        assert result.changes[0].type == ChangeType.MODIFIED
        assert result.changes[1].description == "Document updated"
        assert result.suggestions == ["one", "two"]


class TestChangeAnalysisRetry:
    """Exactly one retry on malformed JSON."""

    @pytest.mark.asyncio
    async def test_retry_then_success(self, analyzer, mock_generator):
        mock_generator.queue("not json at all", VALID_ANALYSIS)

        result = await analyzer.analyze("old", "new", "expand")

        assert result.summary == "Expanded the market section"
        assert len(mock_generator.calls) == 2
        assert mock_generator.calls[1]["user_prompt"].endswith(JSON_RETRY_SUFFIX)
        assert not mock_generator.calls[0]["user_prompt"].endswith(JSON_RETRY_SUFFIX)

    @pytest.mark.asyncio
    async def test_two_failures_fall_back(self, analyzer, mock_generator):
        mock_generator.queue("{broken", "[1, 2, 3]", VALID_ANALYSIS)

        result = await analyzer.analyze("old", "new", "tighten the intro")

        assert result.is_fallback is True
        assert result.summary == "Applied: tighten the intro"
        assert result.changes == []
        assert result.suggestions == []
        # The third queued response is never requested
        assert len(mock_generator.calls) == 2

    @pytest.mark.asyncio
    async def test_generation_error_falls_back_without_retry(self, analyzer, mock_generator):
        mock_generator.queue(LLMError("timeout", "mock-model"), VALID_ANALYSIS)

        result = await analyzer.analyze("old", "new", "expand")

        assert result.is_fallback is True
        assert len(mock_generator.calls) == 1

    @pytest.mark.asyncio
    async def test_fallback_is_deterministic(self, analyzer, mock_generator):
        instruction = "i" * 150
        mock_generator.queue("bad", "bad", "bad", "bad")

        first = await analyzer.analyze("old", "new", instruction)
        second = await analyzer.analyze("old", "new", instruction)

        assert first.summary == second.summary == "Applied: " + "i" * 100 + "..."
