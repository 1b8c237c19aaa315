"""
Section Scorer

Maps normalized variances and qualitative choices to integer section scores:
- Financial (40 points): revenue, gross profit, overheads, net profit (10 each)
- People (20 points): productivity vs benchmark (10) + leadership (10)
- Market (15 points): demand (7.5) + marketing (7.5)
- Product (10 points)
- Suppliers (5 points)
- Sales (10 points)

Missing inputs earn zero points and are reported with status "missing" so a
partially complete submission still scores, conservatively.

Each section score is the round-half-up of the sum of its metric points.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping, Optional

from scorecard.core.errors import ErrorCode, ScoringInputError
from scorecard.scoring.composite import compute_total
from scorecard.scoring.rules import (
    FINANCIAL_BANDS,
    LEADERSHIP_CHOICES,
    MARKET_DEMAND_CHOICES,
    MARKETING_CHOICES,
    METRIC_MAX_POINTS,
    PRODUCT_CHOICES,
    PRODUCTIVITY_BANDS,
    SALES_CHOICES,
    SECTION_CONFIG,
    SUPPLIER_CHOICES,
    VARIANCE_MAX,
    VARIANCE_MIN,
    Band,
    Choice,
    Section,
)
from scorecard.scoring.schemas import ScorecardInputs, SectionScoreSet
from scorecard.scoring.utils import ensure_finite, round_half_up
from scorecard.scoring.variance import VarianceNormalizer

logger = logging.getLogger(__name__)


class MetricStatus(str, Enum):
    """Status of a metric calculation."""
    OK = "ok"              # Calculated successfully
    MISSING = "missing"    # Data not available


@dataclass(frozen=True)
class SubScore:
    """Individual metric sub-score."""
    metric_id: str
    name: str
    section: Section
    max_points: float
    points_awarded: float
    status: MetricStatus
    value: Optional[float] = None
    rule: str = ""


@dataclass(frozen=True)
class SectionBreakdown:
    """Section scores plus the metric sub-scores that produced them."""
    scores: SectionScoreSet
    sub_scores: tuple[SubScore, ...] = field(default_factory=tuple)

    @property
    def total(self) -> int:
        return compute_total(self.scores)

    def for_section(self, section: Section) -> list[SubScore]:
        """Sub-scores contributing to one section."""
        return [sub for sub in self.sub_scores if sub.section == section]


def score_band(variance: Optional[float], bands: tuple[Band, ...]) -> tuple[int, str]:
    """
    Score a variance against a band table.

    Args:
        variance: Variance percentage in [-100, 100], or None if missing
        bands: Band table ordered from highest min_variance to lowest

    Returns:
        Tuple of (points, rule text); (0, top rule) when variance is missing

    Raises:
        ScoringInputError: If variance is non-finite or outside [-100, 100]
    """
    if variance is None:
        return 0, bands[0].rule

    value = ensure_finite(variance, "variance")
    if not VARIANCE_MIN <= value <= VARIANCE_MAX:
        raise ScoringInputError(
            f"Variance {value} outside [{VARIANCE_MIN}, {VARIANCE_MAX}]",
            ErrorCode.INVALID_VARIANCE,
        )

    for band in bands:
        if value >= band.min_variance:
            return band.points, band.rule

    return 0, bands[-1].rule


class SectionScorer:
    """
    Calculates per-section scores from scorecard inputs.

    All tables come from scorecard.scoring.rules; nothing here hard-codes a
    threshold.
    """

    FINANCIAL_METRICS = (
        ("revenue", "Revenue vs Target", "revenue_variance"),
        ("gross_profit", "Gross Profit vs Target", "gross_profit_variance"),
        ("overheads", "Overheads vs Budget", "overheads_variance"),
        ("net_profit", "Net Profit vs Target", "net_profit_variance"),
    )

    @staticmethod
    def _variance_sub_score(
        metric_id: str,
        name: str,
        section: Section,
        variance: Optional[float],
        bands: tuple[Band, ...],
    ) -> SubScore:
        points, rule = score_band(variance, bands)
        return SubScore(
            metric_id=metric_id,
            name=name,
            section=section,
            max_points=METRIC_MAX_POINTS,
            points_awarded=points,
            status=MetricStatus.MISSING if variance is None else MetricStatus.OK,
            value=variance,
            rule=rule,
        )

    @staticmethod
    def _choice_sub_score(
        metric_id: str,
        name: str,
        section: Section,
        value: Optional[str],
        choices: tuple[Choice, ...],
    ) -> SubScore:
        max_points = max(choice.points for choice in choices)
        selected = next((choice for choice in choices if choice.value == value), None)

        if selected is None:
            if value is not None:
                raise ScoringInputError(f"Unknown {metric_id} choice {value!r}", ErrorCode.VALIDATION_ERROR)
            return SubScore(
                metric_id=metric_id,
                name=name,
                section=section,
                max_points=max_points,
                points_awarded=0,
                status=MetricStatus.MISSING,
            )

        return SubScore(
            metric_id=metric_id,
            name=name,
            section=section,
            max_points=max_points,
            points_awarded=selected.points,
            status=MetricStatus.OK,
            rule=f"{selected.label} → {selected.points:g}",
        )

    @staticmethod
    def score_financial(inputs: ScorecardInputs) -> list[SubScore]:
        """Score the four financial metrics (10 pts max each)."""
        return [
            SectionScorer._variance_sub_score(
                metric_id, name, Section.FINANCIAL, getattr(inputs, attr), FINANCIAL_BANDS
            )
            for metric_id, name, attr in SectionScorer.FINANCIAL_METRICS
        ]

    @staticmethod
    def productivity_variance(inputs: ScorecardInputs) -> Optional[float]:
        """
        Productivity variance from benchmark and actual GP/wages ratios.

        A zero benchmark carries no information and is treated as missing.
        """
        if not inputs.productivity_benchmark:
            return None
        return VarianceNormalizer.compute_variance(inputs.productivity_actual, inputs.productivity_benchmark)

    @staticmethod
    def score_people(inputs: ScorecardInputs) -> list[SubScore]:
        """Score productivity (10 pts) and leadership (10 pts)."""
        return [
            SectionScorer._variance_sub_score(
                "productivity",
                "Productivity vs Benchmark",
                Section.PEOPLE,
                SectionScorer.productivity_variance(inputs),
                PRODUCTIVITY_BANDS,
            ),
            SectionScorer._choice_sub_score(
                "leadership", "Leadership / Alignment", Section.PEOPLE,
                inputs.qualitative.leadership, LEADERSHIP_CHOICES,
            ),
        ]

    @staticmethod
    def score_market(inputs: ScorecardInputs) -> list[SubScore]:
        """Score market demand (7.5 pts) and marketing (7.5 pts)."""
        return [
            SectionScorer._choice_sub_score(
                "market_demand", "Market Demand", Section.MARKET,
                inputs.qualitative.market_demand, MARKET_DEMAND_CHOICES,
            ),
            SectionScorer._choice_sub_score(
                "marketing", "Marketing Effectiveness", Section.MARKET,
                inputs.qualitative.marketing, MARKETING_CHOICES,
            ),
        ]

    @staticmethod
    def score_single_choice_sections(inputs: ScorecardInputs) -> list[SubScore]:
        """Score product (10 pts), suppliers (5 pts) and sales (10 pts)."""
        qualitative = inputs.qualitative
        return [
            SectionScorer._choice_sub_score(
                "product_strength", "Product/Service Strength", Section.PRODUCT,
                qualitative.product_strength, PRODUCT_CHOICES,
            ),
            SectionScorer._choice_sub_score(
                "supplier_strength", "Suppliers/Purchasing Strength", Section.SUPPLIERS,
                qualitative.supplier_strength, SUPPLIER_CHOICES,
            ),
            SectionScorer._choice_sub_score(
                "sales_execution", "Sales Execution", Section.SALES,
                qualitative.sales_execution, SALES_CHOICES,
            ),
        ]

    @staticmethod
    def _section_total(sub_scores: list[SubScore], section: Section) -> int:
        raw = sum(sub.points_awarded for sub in sub_scores if sub.section == section)
        score = round_half_up(raw)
        max_score = SECTION_CONFIG[section].max_score
        if score > max_score:
            raise ScoringInputError(
                f"{section.value} scored {score}, above its maximum {max_score}",
                ErrorCode.INVALID_SCORE,
            )
        return score

    @staticmethod
    def compute(inputs: ScorecardInputs) -> SectionBreakdown:
        """
        Calculate all section scores.

        Args:
            inputs: Scorecard inputs (variances and qualitative choices)

        Returns:
            SectionBreakdown with integer section scores and metric sub-scores
        """
        sub_scores = (
            SectionScorer.score_financial(inputs)
            + SectionScorer.score_people(inputs)
            + SectionScorer.score_market(inputs)
            + SectionScorer.score_single_choice_sections(inputs)
        )

        scores: Mapping[str, int] = {
            section.value: SectionScorer._section_total(sub_scores, section)
            for section in Section
        }

        missing = [sub.metric_id for sub in sub_scores if sub.status == MetricStatus.MISSING]
        if missing:
            logger.warning("Scoring with missing inputs (zero credit): %s", ", ".join(missing))

        logger.debug("Section scores: %s", scores)

        return SectionBreakdown(scores=SectionScoreSet(**scores), sub_scores=tuple(sub_scores))


def compute_section_scores(inputs: ScorecardInputs) -> SectionBreakdown:
    """Calculate section scores for a scorecard's inputs."""
    return SectionScorer.compute(inputs)
