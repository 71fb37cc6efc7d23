"""Change analysis service.

Asks the model to describe what an evolution changed as a small JSON record.
This is best-effort annotation: malformed output gets exactly one retry, and
after that a templated summary is returned. Nothing here raises to the caller.
"""

from ..config import get_settings
from ..core import get_logger
from ..editing import (
    JSON_RETRY_SUFFIX,
    ModelOutputError,
    TextGenerator,
    build_change_analysis_prompt,
    coerce_change_analysis,
    fallback_summary,
    get_text_generator,
    parse_json_object,
)
from ..models import ChangeAnalysis

logger = get_logger(__name__)

# Parse failures are retried this many times before falling back
JSON_RETRIES = 1


class ChangeAnalyzer:
    """Service for summarizing the difference between two documents."""

    def __init__(self, generator: TextGenerator | None = None):
        """Initialize the analyzer.

        Args:
            generator: Text generator. Defaults to the shared analysis model client.
        """
        self.settings = get_settings()
        self.generator = generator or get_text_generator(self.settings.analysis_model)

    async def analyze(self, original: str, evolved: str, instruction: str) -> ChangeAnalysis:
        """Summarize the change from original to evolved.

        Args:
            original: Document before the evolution
            evolved: Document after the evolution
            instruction: The instruction that was applied

        Returns:
            ChangeAnalysis; is_fallback is set when the templated default was used
        """
        system_prompt, user_prompt = build_change_analysis_prompt(
            original=original,
            evolved=evolved,
            instruction=instruction,
            excerpt_chars=self.settings.change_analysis_chars,
        )

        for attempt in range(JSON_RETRIES + 1):
            prompt = user_prompt if attempt == 0 else user_prompt + JSON_RETRY_SUFFIX
            try:
                raw_output = await self.generator.generate(
                    system_prompt,
                    prompt,
                    max_output_tokens=self.settings.change_analysis_max_tokens,
                    temperature=self.settings.analysis_temperature,
                    json_mode=True,
                )
            except Exception as e:
                # Not a parse failure; the single retry is reserved for malformed JSON
                logger.warning(
                    "Change analysis call failed, using fallback summary",
                    error=str(e),
                    attempt=attempt + 1,
                )
                break

            try:
                data = parse_json_object(raw_output)
            except ModelOutputError as e:
                logger.warning(
                    "Change analysis returned malformed JSON",
                    error=str(e),
                    attempt=attempt + 1,
                    response=raw_output,
                )
                continue

            analysis = coerce_change_analysis(data, instruction)
            logger.info(
                "Change analysis completed",
                attempt=attempt + 1,
                changes_count=len(analysis.changes),
                suggestions_count=len(analysis.suggestions),
            )
            return analysis

        return ChangeAnalysis(summary=fallback_summary(instruction), is_fallback=True)


# Singleton instance
_change_analyzer: ChangeAnalyzer | None = None


def get_change_analyzer() -> ChangeAnalyzer:
    """Get the singleton change analyzer instance."""
    global _change_analyzer
    if _change_analyzer is None:
        _change_analyzer = ChangeAnalyzer()
    return _change_analyzer
