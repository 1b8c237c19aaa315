"""Shared fixtures for scoring engine tests."""
from datetime import datetime, timezone

import pytest

from scorecard.config import Settings
from scorecard.scoring.schemas import (
    FinancialInputs,
    QualitativeInputs,
    Scorecard,
    SectionScoreSet,
    Submission,
)


SECTION_ORDER = ("financial", "people", "market", "product", "suppliers", "sales")


@pytest.fixture
def make_scorecard():
    """Factory building a Scorecard from a tuple of six section scores."""
    def _make(business_id, month, sections):
        scores = SectionScoreSet(**dict(zip(SECTION_ORDER, sections)))
        return Scorecard(
            business_id=business_id,
            month=month,
            section_scores=scores,
            total_score=sum(sections),
        )
    return _make


@pytest.fixture
def full_financials():
    """Financial inputs where every metric beats target by 10% or more."""
    return FinancialInputs(
        revenue_actual=110000,
        revenue_target=100000,
        gross_profit_actual=55000,
        gross_profit_target=50000,
        overheads_actual=27000,
        overheads_budget=30000,
        total_wages=20000,
        productivity_benchmark=2.0,
    )


@pytest.fixture
def qualitative():
    """Mixed qualitative answers (market section sums to 12.5)."""
    return QualitativeInputs(
        leadership="aligned",
        market_demand="strong",
        marketing="activity",
        product_strength="adequate",
        supplier_strength="acceptable",
        sales_execution="onTarget",
    )


@pytest.fixture
def submission(full_financials, qualitative):
    return Submission(
        business_id="biz-001",
        month="2026-02",
        financial=full_financials,
        qualitative=qualitative,
    )


@pytest.fixture
def fixed_now():
    return datetime(2026, 3, 1, 9, 30, tzinfo=timezone.utc)


@pytest.fixture
def test_settings():
    """Settings independent of the environment."""
    return Settings(anomaly_drop_points=10, weak_section_pct=50.0, debug=False, log_level="INFO")
