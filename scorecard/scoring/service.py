"""
Scorecard Service
Orchestrates scoring of monthly submissions and builds export reports.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from scorecard.scoring.composite import classify_rag, compute_total
from scorecard.scoring.heatmap import heatmap_band, percent_of_max
from scorecard.scoring.rules import MAX_TOTAL_SCORE, SECTION_CONFIG, RagStatus
from scorecard.scoring.schemas import (
    Scorecard,
    ScorecardInputs,
    ScorecardReport,
    SectionReportRow,
    Submission,
)
from scorecard.scoring.section_scorer import SectionBreakdown, compute_section_scores
from scorecard.scoring.trend import trend_between
from scorecard.scoring.variance import VarianceNormalizer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScoringResult:
    """Section breakdown, composite score and RAG band for one set of inputs."""
    breakdown: SectionBreakdown
    total_score: int
    rag_status: RagStatus


class ScorecardService:
    """
    Service for scoring submissions.

    Takes resolved submission data from the persistence layer and returns
    scored, immutable Scorecard records and read-only reports. Performs no
    I/O of its own.
    """

    @staticmethod
    def score_inputs(inputs: ScorecardInputs) -> ScoringResult:
        """
        Score persisted scorecard inputs.

        Args:
            inputs: Variances and qualitative choices

        Returns:
            ScoringResult with section breakdown, total and RAG status
        """
        breakdown = compute_section_scores(inputs)
        total = compute_total(breakdown.scores)

        return ScoringResult(
            breakdown=breakdown,
            total_score=total,
            rag_status=classify_rag(total),
        )

    @staticmethod
    def score_submission(submission: Submission, now: Optional[datetime] = None) -> Scorecard:
        """
        Score a raw monthly submission into a Scorecard.

        Args:
            submission: Raw financial and qualitative submission
            now: Timestamp for created_at/updated_at (defaults to current UTC time)

        Returns:
            Scorecard for the submission's business and month
        """
        inputs = VarianceNormalizer.to_scorecard_inputs(submission.financial, submission.qualitative)
        result = ScorecardService.score_inputs(inputs)

        timestamp = now or datetime.now(timezone.utc)

        logger.info(
            "Scored %s %s: %d (%s)",
            submission.business_id,
            submission.month,
            result.total_score,
            result.rag_status.value,
        )

        return Scorecard(
            business_id=submission.business_id,
            month=submission.month,
            section_scores=result.breakdown.scores,
            total_score=result.total_score,
            created_at=timestamp,
            updated_at=timestamp,
        )

    @staticmethod
    def build_report(scorecard: Scorecard, previous: Optional[Scorecard] = None) -> ScorecardReport:
        """
        Build the read-only report consumed by export collaborators.

        Args:
            scorecard: Scorecard to report on
            previous: Most recent earlier scorecard for the same business, if any

        Returns:
            ScorecardReport with total, RAG label, section rows and trend
        """
        rows = []
        for section, score in scorecard.section_scores.as_dict().items():
            config = SECTION_CONFIG[section]
            rows.append(SectionReportRow(
                section=section,
                label=config.label,
                score=score,
                max_score=config.max_score,
                percent_of_max=percent_of_max(score, config.max_score),
                heatmap_band=heatmap_band(score, config.max_score),
            ))

        trend = trend_between(scorecard, previous)

        return ScorecardReport(
            business_id=scorecard.business_id,
            month=scorecard.month,
            total_score=scorecard.total_score,
            max_total_score=MAX_TOTAL_SCORE,
            rag_status=scorecard.rag_status,
            sections=rows,
            trend=trend.to_summary() if trend else None,
        )
