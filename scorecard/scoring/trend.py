"""
Trend calculation between adjacent monthly scorecards.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from scorecard.config import get_settings
from scorecard.core.errors import ErrorCode, ScoringInputError
from scorecard.scoring.rules import MAX_TOTAL_SCORE
from scorecard.scoring.schemas import Scorecard, TrendSummary
from scorecard.scoring.utils import ensure_finite, previous_month

logger = logging.getLogger(__name__)


class TrendDirection(str, Enum):
    """Direction of score movement versus the prior month."""
    UP = "up"
    DOWN = "down"
    SAME = "same"


@dataclass(frozen=True)
class TrendData:
    """Trend versus prior month. change is always non-negative."""
    direction: TrendDirection
    change: int

    def to_summary(self) -> TrendSummary:
        return TrendSummary(direction=self.direction.value, change=self.change)


def _check_score(score: int, name: str) -> int:
    value = ensure_finite(score, name)
    if not 0 <= value <= MAX_TOTAL_SCORE or value != int(value):
        raise ScoringInputError(
            f"{name} must be an integer in 0-{MAX_TOTAL_SCORE}, got {score}",
            ErrorCode.INVALID_SCORE,
        )
    return int(value)


def compute_trend(current: int, previous: Optional[int]) -> Optional[TrendData]:
    """
    Calculate trend from two composite scores.

    Args:
        current: This month's total score
        previous: Prior month's total score, or None if there is no prior month

    Returns:
        TrendData, or None when no comparison is available
    """
    current_score = _check_score(current, "current")
    if previous is None:
        return None
    previous_score = _check_score(previous, "previous")

    difference = current_score - previous_score
    if difference > 0:
        direction = TrendDirection.UP
    elif difference < 0:
        direction = TrendDirection.DOWN
    else:
        direction = TrendDirection.SAME

    return TrendData(direction=direction, change=abs(difference))


def is_adjacent_month(current_month: str, prior_month: str) -> bool:
    """
    Check whether prior_month is the calendar month immediately before current_month.

    Args:
        current_month: Month string (YYYY-MM)
        prior_month: Month string (YYYY-MM)

    Returns:
        True only for exactly one month apart
    """
    return previous_month(current_month) == prior_month


def trend_between(current: Scorecard, prior: Optional[Scorecard]) -> Optional[TrendData]:
    """
    Calculate trend between two scorecards of the same business.

    A gap month (prior not immediately adjacent) yields no trend rather than
    comparing against an older baseline.

    Args:
        current: Current month scorecard
        prior: Most recent earlier scorecard, or None

    Returns:
        TrendData, or None if there is no adjacent prior month

    Raises:
        ScoringInputError: If the scorecards belong to different businesses
    """
    if prior is None:
        return None

    if prior.business_id != current.business_id:
        raise ScoringInputError(
            f"Cannot compare {current.business_id} with {prior.business_id}",
            ErrorCode.BUSINESS_MISMATCH,
        )

    if not is_adjacent_month(current.month, prior.month):
        logger.debug(
            "No trend for %s %s: prior scorecard is %s, not the adjacent month",
            current.business_id,
            current.month,
            prior.month,
        )
        return None

    return compute_trend(current.total_score, prior.total_score)


def is_anomaly(trend: Optional[TrendData], drop_points: Optional[int] = None) -> bool:
    """
    Flag a significant score drop.

    Args:
        trend: Trend versus prior month (None means no comparison)
        drop_points: Minimum drop to flag (defaults to settings.anomaly_drop_points)

    Returns:
        True if the score fell by at least drop_points
    """
    if trend is None:
        return False
    if drop_points is None:
        drop_points = get_settings().anomaly_drop_points
    return trend.direction == TrendDirection.DOWN and trend.change >= drop_points
