"""
Portfolio aggregation over resolved scorecards.

Builds per-business summaries (latest score, RAG, trend, anomaly flag,
heatmap row) and a compact portfolio aggregate:
- RAG distribution counts
- Score statistics (average, range)
- Section-level weakness ranking
- Anomalies (significant score drops)
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, Mapping, Optional

from scorecard.config import Settings, get_settings
from scorecard.core.errors import ErrorCode, ScoringInputError
from scorecard.scoring.heatmap import heatmap_band, percent_of_max
from scorecard.scoring.rules import SECTION_CONFIG, HeatmapBand, RagStatus, Section
from scorecard.scoring.schemas import Scorecard
from scorecard.scoring.trend import TrendData, is_anomaly, trend_between
from scorecard.scoring.utils import round_half_up

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BusinessSummary:
    """Latest position of one business."""
    business_id: str
    business_name: str
    month: str
    latest_score: int
    rag_status: RagStatus
    trend: Optional[TrendData]
    is_anomaly: bool
    heatmap: Mapping[Section, HeatmapBand]
    weakest_section: Section
    scorecard: Scorecard


@dataclass(frozen=True)
class SectionWeakness:
    """Portfolio-wide standing of one section."""
    section: Section
    label: str
    avg_score: float
    percent_of_max: float
    businesses_below_threshold: int


@dataclass(frozen=True)
class PortfolioAggregate:
    """Aggregated portfolio view."""
    total_businesses: int
    analysis_month: Optional[str]
    distribution: Mapping[RagStatus, int]
    average_score: int
    score_range: tuple[int, int]
    weakest_sections: list[SectionWeakness] = field(default_factory=list)
    anomalies: list[BusinessSummary] = field(default_factory=list)
    businesses: list[BusinessSummary] = field(default_factory=list)


class PortfolioAggregator:
    """
    Aggregates scorecards across a portfolio of businesses.

    Each business is summarized independently; output ordering is by
    business name so repeated runs produce identical results.
    """

    def __init__(self, config: Optional[Settings] = None):
        self.config = config or get_settings()

    @staticmethod
    def _weakest_section(scorecard: Scorecard) -> Section:
        """Section with the lowest percentage of its maximum (first in display order on ties)."""
        lowest = None
        weakest = Section.FINANCIAL
        for section, score in scorecard.section_scores.as_dict().items():
            percent = percent_of_max(score, SECTION_CONFIG[section].max_score)
            if percent is None:
                continue
            if lowest is None or percent < lowest:
                lowest = percent
                weakest = section
        return weakest

    def summarize_business(
        self,
        business_name: str,
        scorecards: Iterable[Scorecard],
    ) -> Optional[BusinessSummary]:
        """
        Summarize one business from its scorecards.

        Args:
            business_name: Display name of the business
            scorecards: All scorecards for the business, any order

        Returns:
            BusinessSummary for the latest month, or None if there are no scorecards

        Raises:
            ScoringInputError: If scorecards span businesses or repeat a month
        """
        ordered = sorted(scorecards, key=lambda sc: sc.month, reverse=True)
        if not ordered:
            return None

        latest = ordered[0]
        months = set()
        for scorecard in ordered:
            if scorecard.business_id != latest.business_id:
                raise ScoringInputError(
                    f"Scorecards for {business_name} span businesses "
                    f"{latest.business_id} and {scorecard.business_id}",
                    ErrorCode.BUSINESS_MISMATCH,
                )
            if scorecard.month in months:
                raise ScoringInputError(
                    f"Duplicate scorecard for {scorecard.business_id} {scorecard.month}",
                    ErrorCode.INVALID_MONTH,
                )
            months.add(scorecard.month)

        prior = ordered[1] if len(ordered) > 1 else None
        trend = trend_between(latest, prior)

        heatmap = {
            section: heatmap_band(score, SECTION_CONFIG[section].max_score)
            for section, score in latest.section_scores.as_dict().items()
        }

        return BusinessSummary(
            business_id=latest.business_id,
            business_name=business_name,
            month=latest.month,
            latest_score=latest.total_score,
            rag_status=latest.rag_status,
            trend=trend,
            is_anomaly=is_anomaly(trend, self.config.anomaly_drop_points),
            heatmap=heatmap,
            weakest_section=self._weakest_section(latest),
            scorecard=latest,
        )

    def summarize(
        self,
        business_names: Mapping[str, str],
        scorecards: Iterable[Scorecard],
    ) -> list[BusinessSummary]:
        """
        Summarize every business that has at least one scorecard.

        Args:
            business_names: Mapping of business_id to display name
            scorecards: Scorecards across the portfolio

        Returns:
            Business summaries sorted by name
        """
        grouped: dict[str, list[Scorecard]] = {}
        for scorecard in scorecards:
            grouped.setdefault(scorecard.business_id, []).append(scorecard)

        summaries = []
        for business_id, business_scorecards in grouped.items():
            name = business_names.get(business_id)
            if name is None:
                logger.warning("Skipping scorecards for unknown business %s", business_id)
                continue
            summary = self.summarize_business(name, business_scorecards)
            if summary is not None:
                summaries.append(summary)

        return sorted(summaries, key=lambda s: (s.business_name, s.business_id))

    def _rank_sections(self, summaries: list[BusinessSummary]) -> list[SectionWeakness]:
        threshold = self.config.weak_section_pct
        ranked = []

        for section in Section:
            config = SECTION_CONFIG[section]
            if config.max_score == 0:
                continue
            values = [s.scorecard.section_scores.as_dict()[section] for s in summaries]
            avg_score = sum(values) / len(values)
            ranked.append(SectionWeakness(
                section=section,
                label=config.label,
                avg_score=avg_score,
                percent_of_max=avg_score / config.max_score * 100,
                businesses_below_threshold=sum(
                    1 for value in values if value / config.max_score * 100 < threshold
                ),
            ))

        return sorted(ranked, key=lambda w: w.percent_of_max)

    def aggregate(self, summaries: list[BusinessSummary]) -> PortfolioAggregate:
        """
        Aggregate business summaries into a portfolio view.

        Args:
            summaries: Output of summarize()

        Returns:
            PortfolioAggregate (zeroed when the portfolio is empty)
        """
        distribution = {status: 0 for status in RagStatus}

        if not summaries:
            return PortfolioAggregate(
                total_businesses=0,
                analysis_month=None,
                distribution=distribution,
                average_score=0,
                score_range=(0, 0),
            )

        for summary in summaries:
            distribution[summary.rag_status] += 1

        scores = [summary.latest_score for summary in summaries]
        anomalies = [summary for summary in summaries if summary.is_anomaly]

        logger.info(
            "Aggregated %d businesses: %d green, %d amber, %d red, %d anomalies",
            len(summaries),
            distribution[RagStatus.GREEN],
            distribution[RagStatus.AMBER],
            distribution[RagStatus.RED],
            len(anomalies),
        )

        return PortfolioAggregate(
            total_businesses=len(summaries),
            analysis_month=max(summary.month for summary in summaries),
            distribution=distribution,
            average_score=round_half_up(sum(scores) / len(scores)),
            score_range=(min(scores), max(scores)),
            weakest_sections=self._rank_sections(summaries),
            anomalies=anomalies,
            businesses=list(summaries),
        )
