"""
Composite scoring: total score and RAG classification.
"""

import logging
from typing import Any, Mapping, Union

from scorecard.core.errors import ErrorCode, ScoringInputError
from scorecard.scoring.rules import (
    MAX_TOTAL_SCORE,
    RAG_THRESHOLDS,
    SECTION_CONFIG,
    RagStatus,
    Section,
)

logger = logging.getLogger(__name__)


def _section_items(section_scores: Union[Mapping[Any, int], Any]) -> dict[Section, int]:
    """Normalize a SectionScoreSet or a mapping keyed by Section/str."""
    if hasattr(section_scores, "as_dict"):
        return section_scores.as_dict()

    if not isinstance(section_scores, Mapping):
        raise ScoringInputError(
            f"Section scores must be a mapping, got {type(section_scores).__name__}",
            ErrorCode.INVALID_SCORE,
        )

    items = {}
    for key, value in section_scores.items():
        try:
            section = Section(key)
        except ValueError:
            raise ScoringInputError(f"Unknown section {key!r}", ErrorCode.INVALID_SCORE) from None
        items[section] = value
    return items


def compute_total(section_scores: Union[Mapping[Any, int], Any]) -> int:
    """
    Sum section scores into the composite score.

    Args:
        section_scores: SectionScoreSet, or mapping of Section (or its value) to points

    Returns:
        Total score (0-100)

    Raises:
        ScoringInputError: If a section is unknown, missing, fractional or outside [0, max]
    """
    items = _section_items(section_scores)

    missing = [section.value for section in Section if section not in items]
    if missing:
        raise ScoringInputError(f"Missing section scores: {', '.join(missing)}", ErrorCode.INVALID_SCORE)

    total = 0
    for section, score in items.items():
        max_score = SECTION_CONFIG[section].max_score
        if isinstance(score, bool) or not isinstance(score, int):
            raise ScoringInputError(
                f"{section.value} score must be an integer, got {score!r}",
                ErrorCode.INVALID_SCORE,
            )
        if score < 0 or score > max_score:
            raise ScoringInputError(
                f"{section.value} score {score} outside 0-{max_score}",
                ErrorCode.INVALID_SCORE,
            )
        total += score

    return total


def classify_rag(total_score: int) -> RagStatus:
    """
    Get RAG (Red/Amber/Green) status from total score.

    Thresholds:
    - Green: >= 75
    - Amber: >= 60
    - Red: < 60

    Args:
        total_score: Total score (0-100)

    Returns:
        RAG status

    Raises:
        ScoringInputError: If total_score is not a number in [0, 100]
    """
    if isinstance(total_score, bool) or not isinstance(total_score, (int, float)):
        raise ScoringInputError(f"Total score must be a number, got {total_score!r}", ErrorCode.INVALID_SCORE)
    if not 0 <= total_score <= MAX_TOTAL_SCORE:
        raise ScoringInputError(
            f"Total score {total_score} outside 0-{MAX_TOTAL_SCORE}",
            ErrorCode.INVALID_SCORE,
        )

    for status, minimum in RAG_THRESHOLDS:
        if total_score >= minimum:
            return status

    # Unreachable: the lowest threshold is 0
    return RagStatus.RED
