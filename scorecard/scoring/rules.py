"""
Scoring rules and constants.

Single source of truth for every band, point map and threshold the engine
uses. Scoring code and any "why this score" explanation read from here.

Section breakdown (100 points max):
- Financial: 40 points (revenue, gross profit, overheads, net profit at 10 each)
- People: 20 points (productivity 10 + leadership 10)
- Market: 15 points (demand 7.5 + marketing 7.5)
- Product: 10 points
- Suppliers: 5 points
- Sales: 10 points
"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping


class Section(str, Enum):
    """Scorecard sections, in display order."""
    FINANCIAL = "financial"
    PEOPLE = "people"
    MARKET = "market"
    PRODUCT = "product"
    SUPPLIERS = "suppliers"
    SALES = "sales"


class RagStatus(str, Enum):
    """Red/Amber/Green health classification."""
    GREEN = "green"
    AMBER = "amber"
    RED = "red"


class HeatmapBand(str, Enum):
    """Portfolio heatmap intensity bands."""
    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"
    CRITICAL = "critical"
    EMPTY = "empty"  # Section not applicable (max score 0)


class Polarity(str, Enum):
    """Direction in which a financial metric improves."""
    HIGHER_IS_BETTER = "higher_is_better"
    LOWER_IS_BETTER = "lower_is_better"


@dataclass(frozen=True)
class Band:
    """A variance band: variances >= min_variance earn points."""
    min_variance: float
    points: int
    rule: str


@dataclass(frozen=True)
class Choice:
    """A qualitative answer and the points it earns."""
    value: str
    label: str
    points: float


@dataclass(frozen=True)
class SectionConfig:
    """Display label and maximum points for a section."""
    label: str
    max_score: int


# Variance bounds after normalization
VARIANCE_MIN = -100.0
VARIANCE_MAX = 100.0

# Revenue, gross profit, net profit vs target, and overheads vs budget once
# the normalizer has inverted it (under budget is positive).
FINANCIAL_BANDS: tuple[Band, ...] = (
    Band(10, 10, "≥+10% → 10"),
    Band(5, 8, "+5% to +9.9% → 8"),
    Band(-4, 6, "-4% to +4.9% → 6"),
    Band(-9, 3, "-9% to -4.1% → 3"),
    Band(VARIANCE_MIN, 0, "<-9% → 0"),
)

# GP/wages ratio vs benchmark, wider tolerance than financial metrics
PRODUCTIVITY_BANDS: tuple[Band, ...] = (
    Band(15, 10, "≥+15% → 10"),
    Band(5, 8, "+5% to +14.9% → 8"),
    Band(-4, 6, "-4% to +4.9% → 6"),
    Band(-14, 3, "-14% to -4.1% → 3"),
    Band(VARIANCE_MIN, 0, "<-14% → 0"),
)

METRIC_MAX_POINTS = 10

LEADERSHIP_CHOICES: tuple[Choice, ...] = (
    Choice("aligned", "Fully aligned, accountable leadership", 10),
    Choice("minor", "Minor issues, not performance limiting", 7),
    Choice("misaligned", "Clear misalignment affecting output", 3),
    Choice("toxic", "Toxic / blocking progress", 0),
    Choice("na", "Not applicable (solo operator)", 0),
)

MARKET_DEMAND_CHOICES: tuple[Choice, ...] = (
    Choice("strong", "Strong demand / positive momentum", 7.5),
    Choice("flat", "Flat / mixed signals", 5),
    Choice("softening", "Softening / pressure on pricing", 2.5),
    Choice("decline", "Clear decline", 0),
)

MARKETING_CHOICES: tuple[Choice, ...] = (
    Choice("clear", "Clear strategy, measurable ROI", 7.5),
    Choice("activity", "Activity but weak focus", 5),
    Choice("poor", "Poor execution / no traction", 2.5),
    Choice("none", "No meaningful marketing", 0),
)

PRODUCT_CHOICES: tuple[Choice, ...] = (
    Choice("differentiated", "Differentiated, margin-positive, scalable", 10),
    Choice("adequate", "Adequate but undifferentiated", 6),
    Choice("weak", "Weak / price-led / delivery issues", 3),
    Choice("broken", "Fundamentally broken", 0),
)

SUPPLIER_CHOICES: tuple[Choice, ...] = (
    Choice("strong", "Strong suppliers, pricing power", 5),
    Choice("acceptable", "Acceptable, no leverage", 3),
    Choice("weak", "Weak suppliers / margin drag", 1),
    Choice("damaging", "Actively damaging", 0),
)

SALES_CHOICES: tuple[Choice, ...] = (
    Choice("beating", "Beating targets / strong pipeline", 10),
    Choice("onTarget", "On target / inconsistent performers", 6),
    Choice("underperforming", "Underperforming / weak management", 3),
    Choice("none", "No effective sales engine", 0),
)


def _points(choices: tuple[Choice, ...]) -> Mapping[str, float]:
    return MappingProxyType({choice.value: choice.points for choice in choices})


LEADERSHIP_SCORES = _points(LEADERSHIP_CHOICES)
MARKET_DEMAND_SCORES = _points(MARKET_DEMAND_CHOICES)
MARKETING_SCORES = _points(MARKETING_CHOICES)
PRODUCT_SCORES = _points(PRODUCT_CHOICES)
SUPPLIER_SCORES = _points(SUPPLIER_CHOICES)
SALES_SCORES = _points(SALES_CHOICES)

SECTION_CONFIG: Mapping[Section, SectionConfig] = MappingProxyType({
    Section.FINANCIAL: SectionConfig("Financial", 40),
    Section.PEOPLE: SectionConfig("People", 20),
    Section.MARKET: SectionConfig("Market", 15),
    Section.PRODUCT: SectionConfig("Product", 10),
    Section.SUPPLIERS: SectionConfig("Suppliers", 5),
    Section.SALES: SectionConfig("Sales", 10),
})

MAX_TOTAL_SCORE = 100

# RAG bands: Green >= 75, Amber 60-74, Red < 60. Ordered highest first.
RAG_THRESHOLDS: tuple[tuple[RagStatus, int], ...] = (
    (RagStatus.GREEN, 75),
    (RagStatus.AMBER, 60),
    (RagStatus.RED, 0),
)

# Heatmap bands by percent of section max. Independent of RAG_THRESHOLDS.
HEATMAP_THRESHOLDS: tuple[tuple[HeatmapBand, float], ...] = (
    (HeatmapBand.EXCELLENT, 80),
    (HeatmapBand.GOOD, 60),
    (HeatmapBand.FAIR, 40),
    (HeatmapBand.POOR, 20),
    (HeatmapBand.CRITICAL, 0),
)
