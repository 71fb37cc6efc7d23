"""Editing components: LLM client, prompts, output parsing and diffing."""

from .diff import DiffSummary, compute_diff, summarize_diff
from .llm import OllamaTextGenerator, TextGenerator, get_text_generator
from .parsing import (
    ModelOutputError,
    coerce_change_analysis,
    coerce_lenses,
    coerce_provocations,
    fallback_summary,
    parse_json_object,
    strip_code_fences,
    unavailable_lenses,
)
from .prompts import (
    INSTRUCTION_STRATEGIES,
    JSON_RETRY_SUFFIX,
    LENGTH_INSTRUCTIONS,
    LENS_DESCRIPTIONS,
    PromptTemplates,
    build_change_analysis_prompt,
    build_evolution_prompt,
    build_expand_prompt,
    build_lens_prompt,
    build_provocation_prompt,
    build_refine_prompt,
    format_reference_summary,
    truncate,
)

__all__ = [
    # Diff
    "DiffSummary",
    "compute_diff",
    "summarize_diff",
    # LLM
    "OllamaTextGenerator",
    "TextGenerator",
    "get_text_generator",
    # Parsing
    "ModelOutputError",
    "coerce_change_analysis",
    "coerce_lenses",
    "coerce_provocations",
    "fallback_summary",
    "parse_json_object",
    "strip_code_fences",
    "unavailable_lenses",
    # Prompts
    "INSTRUCTION_STRATEGIES",
    "JSON_RETRY_SUFFIX",
    "LENGTH_INSTRUCTIONS",
    "LENS_DESCRIPTIONS",
    "PromptTemplates",
    "build_change_analysis_prompt",
    "build_evolution_prompt",
    "build_expand_prompt",
    "build_lens_prompt",
    "build_provocation_prompt",
    "build_refine_prompt",
    "format_reference_summary",
    "truncate",
]
