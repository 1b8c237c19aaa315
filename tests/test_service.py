"""Integration tests for the scorecard service."""
import pytest

from scorecard.scoring.rules import HeatmapBand, RagStatus, Section
from scorecard.scoring.schemas import FinancialInputs, Submission
from scorecard.scoring.service import ScorecardService


class TestScoreSubmission:
    """Test raw submission -> scorecard pipeline."""

    def test_full_submission(self, submission, fixed_now):
        scorecard = ScorecardService.score_submission(submission, now=fixed_now)

        assert scorecard.business_id == "biz-001"
        assert scorecard.month == "2026-02"
        assert scorecard.section_scores.as_dict() == {
            Section.FINANCIAL: 40,
            Section.PEOPLE: 20,
            Section.MARKET: 13,
            Section.PRODUCT: 6,
            Section.SUPPLIERS: 3,
            Section.SALES: 6,
        }
        assert scorecard.total_score == 88
        assert scorecard.rag_status == RagStatus.GREEN
        assert scorecard.created_at == fixed_now
        assert scorecard.updated_at == fixed_now

    def test_partial_submission(self, fixed_now):
        """A submission with only revenue on target still scores conservatively."""
        submission = Submission(
            business_id="biz-002",
            month="2026-02",
            financial=FinancialInputs(revenue_actual=100, revenue_target=100),
        )
        scorecard = ScorecardService.score_submission(submission, now=fixed_now)

        assert scorecard.section_scores.financial == 6
        assert scorecard.total_score == 6
        assert scorecard.rag_status == RagStatus.RED

    def test_default_timestamp_is_utc(self, submission):
        scorecard = ScorecardService.score_submission(submission)
        assert scorecard.created_at.tzinfo is not None

    def test_idempotent(self, submission, fixed_now):
        first = ScorecardService.score_submission(submission, now=fixed_now)
        second = ScorecardService.score_submission(submission, now=fixed_now)
        assert first == second
        assert first.rag_status == second.rag_status


class TestScoreInputs:
    """Test scoring of persisted inputs."""

    def test_result(self, submission):
        from scorecard.scoring.variance import VarianceNormalizer

        inputs = VarianceNormalizer.to_scorecard_inputs(submission.financial, submission.qualitative)
        result = ScorecardService.score_inputs(inputs)

        assert result.total_score == 88
        assert result.rag_status == RagStatus.GREEN
        assert len(result.breakdown.sub_scores) == 11


class TestBuildReport:
    """Test export report construction."""

    def test_report_rows(self, submission, fixed_now):
        scorecard = ScorecardService.score_submission(submission, now=fixed_now)
        report = ScorecardService.build_report(scorecard)

        assert report.total_score == 88
        assert report.max_total_score == 100
        assert report.rag_status == RagStatus.GREEN
        assert report.trend is None

        rows = {row.section: row for row in report.sections}
        assert [row.section for row in report.sections] == list(Section)
        assert rows[Section.FINANCIAL].heatmap_band == HeatmapBand.EXCELLENT
        assert rows[Section.MARKET].percent_of_max == pytest.approx(86.667, abs=1e-3)
        assert rows[Section.PRODUCT].heatmap_band == HeatmapBand.GOOD
        assert rows[Section.SUPPLIERS].label == "Suppliers"

    def test_report_with_trend(self, submission, fixed_now, make_scorecard):
        scorecard = ScorecardService.score_submission(submission, now=fixed_now)
        previous = make_scorecard("biz-001", "2026-01", (40, 20, 15, 10, 5, 10))

        report = ScorecardService.build_report(scorecard, previous)

        assert report.trend.direction == "down"
        assert report.trend.change == 12

    def test_report_serializes(self, submission, fixed_now):
        scorecard = ScorecardService.score_submission(submission, now=fixed_now)
        payload = ScorecardService.build_report(scorecard).model_dump(mode="json")

        assert payload["rag_status"] == "green"
        assert payload["sections"][0]["section"] == "financial"
