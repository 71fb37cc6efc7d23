"""Prompt templates for document evolution and source analysis.

Key principle: the writer returns the complete document, and every analysis
call asks for a fixed JSON shape that is validated on the way back in.
"""

from dataclasses import dataclass

from ..models import (
    InstructionType,
    LensType,
    ProvocationType,
    ReferenceDocument,
    TargetLength,
    ToneOption,
)

INSTRUCTION_STRATEGIES: dict[InstructionType, str] = {
    InstructionType.EXPAND: (
        "Add depth, examples, supporting details, and elaboration. "
        "Develop ideas more fully while maintaining coherence."
    ),
    InstructionType.CONDENSE: (
        "Remove redundancy, tighten prose, eliminate filler words. "
        "Preserve core meaning while reducing length."
    ),
    InstructionType.RESTRUCTURE: (
        "Reorganize content for better flow. Add or modify headings, "
        "reorder sections, improve logical progression."
    ),
    InstructionType.CLARIFY: (
        "Simplify language, add transitions, break down complex ideas. "
        "Make the text more accessible without losing meaning."
    ),
    InstructionType.STYLE: (
        "Adjust the voice and tone. Maintain the content while shifting "
        "the register, formality, or emotional quality."
    ),
    InstructionType.CORRECT: (
        "Fix errors in grammar, spelling, facts, or logic. "
        "Make precise corrections without unnecessary changes."
    ),
    InstructionType.GENERAL: (
        "Make targeted improvements based on the specific instruction. "
        "Balance multiple considerations appropriately."
    ),
}

# Short perspective descriptions used when a lens is active during writing
LENS_DESCRIPTIONS: dict[LensType, str] = {
    LensType.CONSUMER: "end-user/customer perspective - focusing on user needs and experience",
    LensType.EXECUTIVE: "strategic leadership perspective - focusing on business impact",
    LensType.TECHNICAL: "technical implementation perspective - focusing on feasibility",
    LensType.FINANCIAL: "financial perspective - focusing on costs and ROI",
    LensType.STRATEGIC: "competitive positioning perspective - focusing on market advantage",
    LensType.SKEPTIC: "critical perspective - questioning assumptions and risks",
}

# Analysis instructions used when generating lens summaries
LENS_PROMPTS: dict[LensType, str] = {
    LensType.CONSUMER: (
        "Analyze from a consumer/end-user perspective. What matters to customers? "
        "What pain points or delights exist?"
    ),
    LensType.EXECUTIVE: (
        "Analyze from a leadership/executive perspective. What are the strategic "
        "implications, risks, and opportunities?"
    ),
    LensType.TECHNICAL: (
        "Analyze from a technical implementation perspective. What's feasible, "
        "what are the constraints, what technical debt exists?"
    ),
    LensType.FINANCIAL: (
        "Analyze from a financial perspective. What are the costs, revenues, "
        "ROI implications, and budget considerations?"
    ),
    LensType.STRATEGIC: (
        "Analyze from a long-term strategic perspective. How does this affect "
        "competitive positioning and market presence?"
    ),
    LensType.SKEPTIC: (
        "Analyze with healthy skepticism. What assumptions are being made? "
        "What could go wrong? What's being overlooked?"
    ),
}

PROVOCATION_PROMPTS: dict[ProvocationType, str] = {
    ProvocationType.OPPORTUNITY: (
        "Identify potential opportunities for growth, innovation, or improvement "
        "that might be missed."
    ),
    ProvocationType.FALLACY: (
        "Identify logical fallacies, weak arguments, unsupported claims, or gaps in reasoning."
    ),
    ProvocationType.ALTERNATIVE: (
        "Suggest alternative approaches, different perspectives, or lateral thinking opportunities."
    ),
}

LENGTH_INSTRUCTIONS: dict[TargetLength, str] = {
    TargetLength.SHORTER: "Make it more concise (60-70% of current length)",
    TargetLength.SAME: "Maintain similar length",
    TargetLength.LONGER: "Expand with more detail (130-150% of current length)",
}

FOCUS_SELECTION = (
    "The user has selected specific text to focus on. Apply the instruction primarily "
    "to this selection, but ensure it integrates well with the rest of the document."
)
FOCUS_HOLISTIC = "Apply the instruction to improve the document holistically."

JSON_RETRY_SUFFIX = (
    "\n\nYour previous reply could not be parsed. "
    "Respond with ONLY valid JSON matching the schema above: "
    "no markdown, no code fences, no commentary."
)


@dataclass
class PromptTemplates:
    """Collection of prompt templates for the different generation tasks."""

    EVOLUTION_SYSTEM = """You are an expert document editor helping a user iteratively shape their document.

DOCUMENT OBJECTIVE: {objective}

Your role is to evolve the document based on the user's instruction while always keeping the objective in mind. The document should get better with each iteration - clearer, more compelling, better structured.

Guidelines:
1. {focus_instruction}
2. Preserve the document's voice and structure unless explicitly asked to change it
3. Make targeted improvements, not wholesale rewrites
4. The output should be the complete evolved document (not just the changed parts)
5. Use markdown formatting for structure (headers, lists, emphasis) where appropriate
{context_section}

Output only the evolved document text. No explanations or meta-commentary."""

    EVOLUTION_USER = """CURRENT DOCUMENT:
{document}
{selection}
INSTRUCTION: {instruction}

Please evolve the document according to this instruction."""

    CHANGE_ANALYSIS_SYSTEM = """You are a document change analyzer. Compare the original and evolved documents and provide a brief structured analysis.

Respond with a JSON object containing:
- summary: A one-sentence summary of what changed (max 100 chars)
- changes: An array of 1-3 change objects, each with:
  - type: "added" | "modified" | "removed" | "restructured"
  - description: What changed (max 60 chars)
  - location: Where in the document (e.g., "Introduction", "Second paragraph") (optional)
- suggestions: An array of 0-2 strings with potential next improvements (max 60 chars each)

Output only valid JSON, no markdown."""

    CHANGE_ANALYSIS_USER = """ORIGINAL DOCUMENT:
{original}

EVOLVED DOCUMENT:
{evolved}

INSTRUCTION APPLIED: {instruction}"""

    LENS_SYSTEM = """You are an analytical assistant helping users understand text through multiple perspectives.

Analyze the given text through each of these lenses:
{lens_descriptions}

Respond with a JSON object containing a "lenses" array. For each lens, provide:
- type: The lens type ({lens_types})
- title: A brief title for this lens analysis (max 50 chars)
- summary: A 2-3 sentence summary from this perspective
- keyPoints: An array of 3-5 key observations (each max 30 chars)

Output only valid JSON, no markdown."""

    LENS_USER = """Analyze this text through the following lenses ({lens_types}):

{text}"""

    PROVOCATION_SYSTEM = """You are a critical thinking partner. Challenge assumptions and push thinking deeper.

Generate provocations in these categories:
{provocation_descriptions}
{reference_context}

Respond with a JSON object containing a "provocations" array. Generate 2-3 provocations per category (6-9 total).
For each provocation:
- type: The category (opportunity, fallacy, or alternative)
- title: A punchy headline (max 60 chars)
- content: A 2-3 sentence explanation
- sourceExcerpt: A relevant quote from the source text (max 150 chars)

Output only valid JSON, no markdown."""

    PROVOCATION_USER = """Generate provocations (opportunities, fallacies, and alternatives) for this text:

{text}"""

    EXPAND_SYSTEM = """You are a writing assistant drafting one section of a larger document.

Write the body of the section for the given heading. Ground it in the provided context where possible and do not invent facts the context contradicts.
{tone_instruction}
Output only the section body in markdown. Do not repeat the heading. No preamble or meta-commentary."""

    EXPAND_USER = """SECTION HEADING: {heading}

CONTEXT:
{context}"""

    REFINE_SYSTEM = """You are an expert editor. Rewrite the given text while preserving its meaning.
{tone_instruction}
{length_instruction}

Output only the rewritten text. No explanations or meta-commentary."""

    REFINE_USER = """TEXT TO REFINE:
{text}"""


def truncate(text: str, limit: int) -> str:
    """Cut text to limit characters, appending an ellipsis when shortened."""
    if len(text) <= limit:
        return text
    return text[:limit] + "..."


def build_evolution_prompt(
    document: str,
    objective: str,
    instruction: str,
    context_block: str,
    selected_text: str | None = None,
) -> tuple[str, str]:
    """Build the prompt pair for one document evolution.

    Returns:
        Tuple of (system_prompt, user_prompt)
    """
    focus_instruction = FOCUS_SELECTION if selected_text else FOCUS_HOLISTIC
    context_section = f"\nCONTEXT:\n{context_block}" if context_block else ""

    system_prompt = PromptTemplates.EVOLUTION_SYSTEM.format(
        objective=objective,
        focus_instruction=focus_instruction,
        context_section=context_section,
    )
    selection = f'\nSELECTED TEXT (focus area):\n"{selected_text}"\n' if selected_text else ""
    user_prompt = PromptTemplates.EVOLUTION_USER.format(
        document=document,
        selection=selection,
        instruction=instruction,
    )
    return system_prompt, user_prompt


def build_change_analysis_prompt(
    original: str,
    evolved: str,
    instruction: str,
    excerpt_chars: int = 2000,
) -> tuple[str, str]:
    """Build the prompt pair for change analysis.

    Both documents are truncated to excerpt_chars.

    Returns:
        Tuple of (system_prompt, user_prompt)
    """
    user_prompt = PromptTemplates.CHANGE_ANALYSIS_USER.format(
        original=truncate(original, excerpt_chars),
        evolved=truncate(evolved, excerpt_chars),
        instruction=instruction,
    )
    return PromptTemplates.CHANGE_ANALYSIS_SYSTEM, user_prompt


def build_lens_prompt(text: str, lens_types: list[LensType]) -> tuple[str, str]:
    """Build the batched prompt for all requested lenses.

    Returns:
        Tuple of (system_prompt, user_prompt)
    """
    descriptions = "\n".join(f"- {t.value}: {LENS_PROMPTS[t]}" for t in lens_types)
    names = ", ".join(t.value for t in lens_types)
    system_prompt = PromptTemplates.LENS_SYSTEM.format(
        lens_descriptions=descriptions,
        lens_types=names,
    )
    user_prompt = PromptTemplates.LENS_USER.format(lens_types=names, text=text)
    return system_prompt, user_prompt


def format_reference_summary(
    references: list[ReferenceDocument],
    limit: int,
    separator: str = "\n\n",
) -> str:
    """Render reference documents as labelled, truncated excerpts."""
    return separator.join(
        f"[{ref.label}: {ref.name}]\n{truncate(ref.content, limit)}" for ref in references
    )


def build_provocation_prompt(
    text: str,
    references: list[ReferenceDocument] | None = None,
    reference_chars: int = 500,
) -> tuple[str, str]:
    """Build the batched prompt for all provocation categories.

    Reference documents, when given, are described as the target quality
    so gaps against them surface as provocations.

    Returns:
        Tuple of (system_prompt, user_prompt)
    """
    reference_context = ""
    if references:
        summary = format_reference_summary(references, reference_chars)
        reference_context = (
            "\nThe user has provided reference documents that represent their target quality:\n"
            f"{summary}\n\nCompare the source text against these references to identify gaps."
        )

    descriptions = "\n".join(f"- {t.value}: {PROVOCATION_PROMPTS[t]}" for t in ProvocationType)
    system_prompt = PromptTemplates.PROVOCATION_SYSTEM.format(
        provocation_descriptions=descriptions,
        reference_context=reference_context,
    )
    return system_prompt, PromptTemplates.PROVOCATION_USER.format(text=text)


def build_expand_prompt(
    heading: str,
    context: str | None = None,
    tone: ToneOption | None = None,
) -> tuple[str, str]:
    """Build the prompt pair for drafting an outline section.

    Returns:
        Tuple of (system_prompt, user_prompt)
    """
    tone_instruction = f"Write in a {tone.value} voice." if tone else ""
    system_prompt = PromptTemplates.EXPAND_SYSTEM.format(tone_instruction=tone_instruction)
    user_prompt = PromptTemplates.EXPAND_USER.format(
        heading=heading,
        context=context or "No additional context provided.",
    )
    return system_prompt, user_prompt


def build_refine_prompt(
    text: str,
    tone: ToneOption | None = None,
    target_length: TargetLength | None = None,
) -> tuple[str, str]:
    """Build the prompt pair for refining a passage.

    Returns:
        Tuple of (system_prompt, user_prompt)
    """
    tone_instruction = f"Write in a {tone.value} voice." if tone else "Keep the current voice."
    length_instruction = LENGTH_INSTRUCTIONS[target_length or TargetLength.SAME] + "."
    system_prompt = PromptTemplates.REFINE_SYSTEM.format(
        tone_instruction=tone_instruction,
        length_instruction=length_instruction,
    )
    return system_prompt, PromptTemplates.REFINE_USER.format(text=text)
