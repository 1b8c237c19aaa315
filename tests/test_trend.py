"""Unit tests for month-over-month trend calculation."""
import pytest

from scorecard.core.errors import ErrorCode, ScoringInputError
from scorecard.scoring.trend import (
    TrendData,
    TrendDirection,
    compute_trend,
    is_adjacent_month,
    is_anomaly,
    trend_between,
)
from scorecard.scoring.utils import previous_month


class TestComputeTrend:
    """Test trend direction and magnitude."""

    def test_up(self):
        assert compute_trend(80, 70) == TrendData(TrendDirection.UP, 10)

    def test_down(self):
        """Magnitude stays positive; direction carries the sign."""
        assert compute_trend(70, 80) == TrendData(TrendDirection.DOWN, 10)

    def test_same(self):
        assert compute_trend(75, 75) == TrendData(TrendDirection.SAME, 0)

    def test_no_previous(self):
        """No prior period is None, never a fabricated 'same' trend."""
        assert compute_trend(75, None) is None

    def test_zero_previous_is_a_real_trend(self):
        assert compute_trend(40, 0) == TrendData(TrendDirection.UP, 40)

    @pytest.mark.parametrize("current,previous", [(101, 50), (50, -1), (50.5, 50)])
    def test_invalid_scores_rejected(self, current, previous):
        with pytest.raises(ScoringInputError) as exc_info:
            compute_trend(current, previous)
        assert exc_info.value.error_code == ErrorCode.INVALID_SCORE

    def test_idempotent(self):
        assert compute_trend(62, 71) == compute_trend(62, 71)
        assert compute_trend(62, None) == compute_trend(62, None)

    def test_summary(self):
        summary = compute_trend(70, 80).to_summary()
        assert summary.direction == "down"
        assert summary.change == 10


class TestMonthAdjacency:
    """Test immediate-prior-month detection."""

    def test_previous_month(self):
        assert previous_month("2026-03") == "2026-02"
        assert previous_month("2026-01") == "2025-12"

    def test_adjacent(self):
        assert is_adjacent_month("2026-02", "2026-01") is True
        assert is_adjacent_month("2026-01", "2025-12") is True

    def test_not_adjacent(self):
        assert is_adjacent_month("2026-03", "2026-01") is False
        assert is_adjacent_month("2026-01", "2026-02") is False
        assert is_adjacent_month("2026-01", "2025-01") is False

    @pytest.mark.parametrize("month", ["2026-1", "2026-00", "26-01", "2026/01", ""])
    def test_invalid_month(self, month):
        with pytest.raises(ScoringInputError) as exc_info:
            previous_month(month)
        assert exc_info.value.error_code == ErrorCode.INVALID_MONTH


class TestTrendBetweenScorecards:
    """Test trend resolution from scorecard records."""

    def test_adjacent_months(self, make_scorecard):
        current = make_scorecard("biz-1", "2026-01", (30, 15, 10, 10, 5, 10))
        prior = make_scorecard("biz-1", "2025-12", (30, 15, 10, 5, 5, 5))
        assert trend_between(current, prior) == TrendData(TrendDirection.UP, 10)

    def test_gap_month_has_no_trend(self, make_scorecard):
        """A missing intermediate month means no comparison."""
        current = make_scorecard("biz-1", "2026-03", (30, 15, 10, 10, 5, 10))
        prior = make_scorecard("biz-1", "2026-01", (30, 15, 10, 5, 5, 5))
        assert trend_between(current, prior) is None

    def test_first_submission(self, make_scorecard):
        current = make_scorecard("biz-1", "2026-03", (30, 15, 10, 10, 5, 10))
        assert trend_between(current, None) is None

    def test_different_business_rejected(self, make_scorecard):
        current = make_scorecard("biz-1", "2026-02", (30, 15, 10, 10, 5, 10))
        prior = make_scorecard("biz-2", "2026-01", (30, 15, 10, 5, 5, 5))
        with pytest.raises(ScoringInputError) as exc_info:
            trend_between(current, prior)
        assert exc_info.value.error_code == ErrorCode.BUSINESS_MISMATCH


class TestAnomaly:
    """Test significant drop detection."""

    def test_drop_at_threshold(self):
        assert is_anomaly(TrendData(TrendDirection.DOWN, 10), drop_points=10) is True

    def test_drop_below_threshold(self):
        assert is_anomaly(TrendData(TrendDirection.DOWN, 9), drop_points=10) is False

    def test_rise_never_anomalous(self):
        assert is_anomaly(TrendData(TrendDirection.UP, 30), drop_points=10) is False

    def test_no_trend(self):
        assert is_anomaly(None) is False

    def test_default_threshold_from_settings(self):
        assert is_anomaly(TrendData(TrendDirection.DOWN, 10)) is True
