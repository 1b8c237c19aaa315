"""
Scoring Schemas
Pydantic models for submission inputs, scorecard records and export reports.
"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from scorecard.scoring.composite import classify_rag
from scorecard.scoring.rules import (
    SECTION_CONFIG,
    HeatmapBand,
    RagStatus,
    Section,
    VARIANCE_MAX,
    VARIANCE_MIN,
)
from scorecard.scoring.utils import MONTH_PATTERN

LeadershipChoice = Literal["aligned", "minor", "misaligned", "toxic", "na"]
MarketDemandChoice = Literal["strong", "flat", "softening", "decline"]
MarketingChoice = Literal["clear", "activity", "poor", "none"]
ProductChoice = Literal["differentiated", "adequate", "weak", "broken"]
SupplierChoice = Literal["strong", "acceptable", "weak", "damaging"]
SalesChoice = Literal["beating", "onTarget", "underperforming", "none"]

# Optional non-negative monetary value (None when not supplied or N/A)
MonetaryValue = Optional[float]


class FinancialInputs(BaseModel):
    """Raw monthly financial figures submitted for one business."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    # N/A flags: the business marks a metric as not applicable
    revenue_na: bool = Field(False, description="Revenue not applicable")
    gross_profit_na: bool = Field(False, description="Gross profit not applicable")
    overheads_na: bool = Field(False, description="Overheads not applicable")
    wages_na: bool = Field(False, description="Wages/productivity not applicable")

    revenue_actual: MonetaryValue = Field(None, ge=0, description="Revenue achieved")
    revenue_target: MonetaryValue = Field(None, ge=0, description="Revenue target")
    gross_profit_actual: MonetaryValue = Field(None, ge=0, description="Gross profit achieved")
    gross_profit_target: MonetaryValue = Field(None, ge=0, description="Gross profit target")
    overheads_actual: MonetaryValue = Field(None, ge=0, description="Overheads spent")
    overheads_budget: MonetaryValue = Field(None, ge=0, description="Overheads budget")
    net_profit_actual: Optional[float] = Field(None, description="Net profit (negative = loss), used only with override")
    net_profit_target: Optional[float] = Field(None, description="Net profit target, used only with override")
    net_profit_override: bool = Field(False, description="True if net profit was entered manually")
    total_wages: MonetaryValue = Field(None, ge=0, description="Total wage bill for the month")
    productivity_benchmark: Optional[float] = Field(
        None, ge=0, le=20, description="Benchmark GP/wages ratio (typically 1.5-4.0)"
    )


class QualitativeInputs(BaseModel):
    """Consultant-assessed qualitative choices."""

    model_config = ConfigDict(frozen=True)

    leadership: Optional[LeadershipChoice] = None
    market_demand: Optional[MarketDemandChoice] = None
    marketing: Optional[MarketingChoice] = None
    product_strength: Optional[ProductChoice] = None
    supplier_strength: Optional[SupplierChoice] = None
    sales_execution: Optional[SalesChoice] = None


class Submission(BaseModel):
    """One business's raw monthly submission."""

    model_config = ConfigDict(frozen=True)

    business_id: str = Field(..., min_length=1)
    month: str = Field(..., pattern=MONTH_PATTERN.pattern, description="Month in YYYY-MM format")
    financial: FinancialInputs = Field(default_factory=FinancialInputs)
    qualitative: QualitativeInputs = Field(default_factory=QualitativeInputs)


class ScorecardInputs(BaseModel):
    """
    Scoring inputs as persisted on a scorecard.

    Variances are percentages in [-100, 100]. Overheads variance is already
    inverted: positive means under budget.
    """

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    revenue_variance: Optional[float] = Field(None, ge=VARIANCE_MIN, le=VARIANCE_MAX)
    gross_profit_variance: Optional[float] = Field(None, ge=VARIANCE_MIN, le=VARIANCE_MAX)
    overheads_variance: Optional[float] = Field(None, ge=VARIANCE_MIN, le=VARIANCE_MAX)
    net_profit_variance: Optional[float] = Field(None, ge=VARIANCE_MIN, le=VARIANCE_MAX)
    productivity_benchmark: Optional[float] = Field(None, ge=0, le=20)
    productivity_actual: Optional[float] = Field(None, ge=0, description="Actual GP/wages ratio")
    qualitative: QualitativeInputs = Field(default_factory=QualitativeInputs)


class SectionScoreSet(BaseModel):
    """Integer score per section."""

    model_config = ConfigDict(frozen=True)

    financial: int = Field(..., ge=0, le=SECTION_CONFIG[Section.FINANCIAL].max_score)
    people: int = Field(..., ge=0, le=SECTION_CONFIG[Section.PEOPLE].max_score)
    market: int = Field(..., ge=0, le=SECTION_CONFIG[Section.MARKET].max_score)
    product: int = Field(..., ge=0, le=SECTION_CONFIG[Section.PRODUCT].max_score)
    suppliers: int = Field(..., ge=0, le=SECTION_CONFIG[Section.SUPPLIERS].max_score)
    sales: int = Field(..., ge=0, le=SECTION_CONFIG[Section.SALES].max_score)

    def as_dict(self) -> dict[Section, int]:
        """Scores keyed by Section, in display order."""
        return {section: getattr(self, section.value) for section in Section}


class Scorecard(BaseModel):
    """
    One scored month for one business.

    RAG status is derived from total_score on every access; it is never
    stored alongside the score.
    """

    model_config = ConfigDict(frozen=True)

    business_id: str = Field(..., min_length=1)
    month: str = Field(..., pattern=MONTH_PATTERN.pattern)
    section_scores: SectionScoreSet
    total_score: int = Field(..., ge=0, le=100)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @model_validator(mode="after")
    def check_total(self) -> "Scorecard":
        expected = sum(self.section_scores.as_dict().values())
        if self.total_score != expected:
            raise ValueError(
                f"total_score {self.total_score} does not equal sum of section scores {expected}"
            )
        return self

    @property
    def rag_status(self) -> RagStatus:
        """RAG band for the current total score."""
        return classify_rag(self.total_score)


class TrendSummary(BaseModel):
    """Trend as exposed in reports."""

    direction: Literal["up", "down", "same"]
    change: int = Field(..., ge=0, description="Absolute point difference")


class SectionReportRow(BaseModel):
    """One section row in an export report."""

    section: Section
    label: str
    score: int
    max_score: int
    percent_of_max: Optional[float] = Field(None, description="None when the section max is 0")
    heatmap_band: HeatmapBand


class ScorecardReport(BaseModel):
    """Read-only scorecard values for PDF/Excel/batch export collaborators."""

    model_config = ConfigDict(frozen=True)

    business_id: str
    month: str
    total_score: int
    max_total_score: int
    rag_status: RagStatus
    sections: list[SectionReportRow]
    trend: Optional[TrendSummary] = Field(None, description="None when no adjacent prior month exists")
