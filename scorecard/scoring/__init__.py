"""
Scoring Module
Pure scoring and trend engine for monthly business scorecards.
"""

from scorecard.scoring.composite import classify_rag, compute_total
from scorecard.scoring.heatmap import heatmap_band, percent_of_max
from scorecard.scoring.portfolio import PortfolioAggregator
from scorecard.scoring.rules import HeatmapBand, RagStatus, Section
from scorecard.scoring.section_scorer import SectionScorer, compute_section_scores
from scorecard.scoring.service import ScorecardService
from scorecard.scoring.trend import TrendData, TrendDirection, compute_trend
from scorecard.scoring.variance import VarianceNormalizer

__all__ = [
    "classify_rag",
    "compute_total",
    "compute_section_scores",
    "compute_trend",
    "heatmap_band",
    "percent_of_max",
    "HeatmapBand",
    "PortfolioAggregator",
    "RagStatus",
    "ScorecardService",
    "Section",
    "SectionScorer",
    "TrendData",
    "TrendDirection",
    "VarianceNormalizer",
]
