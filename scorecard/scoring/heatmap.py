"""
Heatmap intensity mapping for portfolio visualization.

Buckets a section score by percentage of its maximum. The bands form a
display gradient independent of the RAG thresholds.
"""

from typing import Optional

from scorecard.core.errors import ErrorCode, ScoringInputError
from scorecard.scoring.rules import HEATMAP_THRESHOLDS, HeatmapBand
from scorecard.scoring.utils import ensure_finite


def _validate_max(max_score: float) -> float:
    max_value = ensure_finite(max_score, "max_score")
    if max_value < 0:
        raise ScoringInputError(f"max_score must not be negative, got {max_score}", ErrorCode.INVALID_MAX_SCORE)
    return max_value


def _validate_score(score: float, max_value: float) -> float:
    score_value = ensure_finite(score, "score")
    if score_value < 0:
        raise ScoringInputError(f"score must not be negative, got {score}", ErrorCode.INVALID_SCORE)
    if score_value > max_value:
        raise ScoringInputError(f"score {score} exceeds max_score {max_value:g}", ErrorCode.INVALID_SCORE)
    return score_value


def percent_of_max(score: float, max_score: float) -> Optional[float]:
    """
    Score as a percentage of the section maximum.

    Args:
        score: Section score
        max_score: Maximum possible score for the section

    Returns:
        Percentage (0-100), or None when max_score is 0 (score is not checked)
    """
    max_value = _validate_max(max_score)
    if max_value == 0:
        return None
    return _validate_score(score, max_value) / max_value * 100


def heatmap_band(score: float, max_score: float) -> HeatmapBand:
    """
    Get the heatmap band for a score.

    Args:
        score: Section score
        max_score: Maximum possible score for the section

    Returns:
        HeatmapBand; EMPTY when max_score is 0 regardless of score
    """
    percent = percent_of_max(score, max_score)
    if percent is None:
        return HeatmapBand.EMPTY

    for band, minimum in HEATMAP_THRESHOLDS:
        if percent >= minimum:
            return band

    return HeatmapBand.CRITICAL
