"""Instruction classification service.

Pattern-based detection of what kind of edit an instruction asks for:
- EXPAND: add depth and detail
- CONDENSE: shorten and tighten
- RESTRUCTURE: reorder, split, add headings
- CLARIFY: simplify and make plainer
- STYLE: change tone or register
- CORRECT: fix errors
- GENERAL: anything else (default)

The category only selects the strategy text added to the evolution prompt,
so a misclassification degrades guidance, never correctness.
"""

import re
from dataclasses import dataclass
from typing import Protocol

from ..core import get_logger
from ..models import InstructionType

logger = get_logger(__name__)


class InstructionClassifier(Protocol):
    """Anything that maps an instruction to an InstructionType."""

    def classify(self, instruction: str) -> InstructionType:
        ...


@dataclass(frozen=True)
class InstructionPattern:
    """Patterns for one instruction category."""
    instruction_type: InstructionType
    patterns: tuple[str, ...]


# Declaration order is the tie-break: the first category with any match wins,
# however many patterns a later category would also match.
INSTRUCTION_PATTERNS: tuple[InstructionPattern, ...] = (
    InstructionPattern(
        InstructionType.EXPAND,
        (
            r"expand",
            r"elaborate",
            r"add.*detail",
            r"develop",
            r"flesh out",
            r"more about",
            r"tell me more",
            r"explain.*further",
        ),
    ),
    InstructionPattern(
        InstructionType.CONDENSE,
        (
            r"condense",
            r"shorten",
            r"shorter",
            r"summarize",
            r"brief",
            r"concise",
            r"cut",
            r"reduce",
            r"tighten",
            r"trim",
        ),
    ),
    InstructionPattern(
        InstructionType.RESTRUCTURE,
        (
            r"restructure",
            r"reorganize",
            r"reorder",
            r"move",
            r"rearrange",
            r"add.*section",
            r"add.*heading",
            r"split",
            r"merge.*section",
        ),
    ),
    InstructionPattern(
        InstructionType.CLARIFY,
        (
            r"clarify",
            r"simplify",
            r"clearer",
            r"easier.*understand",
            r"plain",
            r"straightforward",
            r"confus",
        ),
    ),
    InstructionPattern(
        InstructionType.STYLE,
        (
            r"tone",
            r"voice",
            r"formal",
            r"informal",
            r"professional",
            r"casual",
            r"friendly",
            r"academic",
            r"style",
        ),
    ),
    InstructionPattern(
        InstructionType.CORRECT,
        (
            r"fix",
            r"correct",
            r"error",
            r"mistake",
            r"typo",
            r"grammar",
            r"spelling",
            r"wrong",
            r"inaccurate",
        ),
    ),
)


class PatternInstructionClassifier:
    """Find-first classifier over an ordered (category, patterns) table."""

    def __init__(self, patterns: tuple[InstructionPattern, ...] = INSTRUCTION_PATTERNS):
        """Initialize with compiled patterns.

        Args:
            patterns: Ordered pattern table. GENERAL entries are ignored
                since GENERAL is the fallback.
        """
        self._patterns = [
            (group.instruction_type, [re.compile(p, re.IGNORECASE) for p in group.patterns])
            for group in patterns
            if group.instruction_type != InstructionType.GENERAL
        ]

    def classify(self, instruction: str) -> InstructionType:
        """Classify an instruction.

        Args:
            instruction: Free-text editing instruction

        Returns:
            The first matching category, or GENERAL
        """
        for instruction_type, compiled in self._patterns:
            if any(pattern.search(instruction) for pattern in compiled):
                logger.debug(
                    "Instruction classified",
                    instruction_type=instruction_type.value,
                    instruction_length=len(instruction),
                )
                return instruction_type

        logger.debug(
            "No instruction patterns matched, defaulting to GENERAL",
            instruction_length=len(instruction),
        )
        return InstructionType.GENERAL


# Singleton instance
_classifier: PatternInstructionClassifier | None = None


def get_instruction_classifier() -> PatternInstructionClassifier:
    """Get the singleton instruction classifier instance."""
    global _classifier
    if _classifier is None:
        _classifier = PatternInstructionClassifier()
    return _classifier
