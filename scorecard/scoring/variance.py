"""
Financial variance normalizer.

Converts raw actual/target/budget figures into bounded variance percentages
for scoring. Overheads are inverted here so that every variance handed to
the section scorer reads "positive = good".
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from scorecard.scoring.rules import Polarity, VARIANCE_MAX, VARIANCE_MIN
from scorecard.scoring.schemas import FinancialInputs, QualitativeInputs, ScorecardInputs
from scorecard.scoring.utils import ensure_finite

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FinancialVariances:
    """Variance percentages per metric; None means not computable."""
    revenue: Optional[float] = None
    gross_profit: Optional[float] = None
    overheads: Optional[float] = None
    net_profit: Optional[float] = None
    productivity: Optional[float] = None
    productivity_actual: Optional[float] = None


class VarianceNormalizer:
    """
    Normalizes monthly financial submissions into variance percentages.

    Net profit is structurally dependent on gross profit and overheads: unless
    the submitter overrides it, it is derived from them before normalization.
    """

    @staticmethod
    def _clamp(value: float) -> float:
        return max(VARIANCE_MIN, min(VARIANCE_MAX, value))

    @staticmethod
    def compute_variance(
        actual: Optional[float],
        target: Optional[float],
        polarity: Polarity = Polarity.HIGHER_IS_BETTER,
    ) -> Optional[float]:
        """
        Calculate a clamped variance percentage.

        Higher-is-better: (actual - target) / target * 100
        Lower-is-better:  (target - actual) / target * 100 (under budget is positive)

        A negative target divides by its magnitude so that beating it stays
        positive. A zero target yields 0 when actual is also 0, otherwise the
        clamp boundary in the favourable or unfavourable direction.

        Args:
            actual: Actual value achieved
            target: Target (or budget) value
            polarity: Whether higher or lower actuals are better

        Returns:
            Variance in [-100, 100], or None if either input is missing
        """
        if actual is None or target is None:
            return None

        actual_value = Decimal(str(ensure_finite(actual, "actual")))
        target_value = Decimal(str(ensure_finite(target, "target")))

        difference = actual_value - target_value
        if polarity == Polarity.LOWER_IS_BETTER:
            difference = -difference

        if target_value == 0:
            if difference == 0:
                return 0.0
            return VARIANCE_MAX if difference > 0 else VARIANCE_MIN

        variance = float(difference / abs(target_value) * 100)
        return VarianceNormalizer._clamp(variance)

    @staticmethod
    def derive_net_profit(inputs: FinancialInputs) -> tuple[Optional[float], Optional[float]]:
        """
        Resolve net profit actual and target.

        Without override: actual = GP actual - overheads actual,
        target = GP target - overheads budget. A side is None when either of
        its components is missing or marked N/A.

        Args:
            inputs: Raw financial inputs

        Returns:
            Tuple of (net_profit_actual, net_profit_target)
        """
        if inputs.net_profit_override:
            return inputs.net_profit_actual, inputs.net_profit_target

        if inputs.gross_profit_na or inputs.overheads_na:
            return None, None

        def _subtract(left: Optional[float], right: Optional[float]) -> Optional[float]:
            if left is None or right is None:
                return None
            return float(Decimal(str(left)) - Decimal(str(right)))

        return (
            _subtract(inputs.gross_profit_actual, inputs.overheads_actual),
            _subtract(inputs.gross_profit_target, inputs.overheads_budget),
        )

    @staticmethod
    def productivity_ratio(gross_profit: Optional[float], wages: Optional[float]) -> Optional[float]:
        """
        Calculate the GP / wages productivity ratio.

        Args:
            gross_profit: Gross profit actual
            wages: Total wages

        Returns:
            Ratio, or None if either input is missing or wages are zero
        """
        if gross_profit is None or wages is None:
            return None
        if wages == 0:
            return None
        return float(Decimal(str(gross_profit)) / Decimal(str(wages)))

    @staticmethod
    def normalize(inputs: FinancialInputs) -> FinancialVariances:
        """
        Calculate all financial variances for a submission.

        Args:
            inputs: Raw financial inputs

        Returns:
            FinancialVariances with None for N/A or incomplete metrics
        """
        compute = VarianceNormalizer.compute_variance

        revenue = None if inputs.revenue_na else compute(
            inputs.revenue_actual, inputs.revenue_target
        )
        gross_profit = None if inputs.gross_profit_na else compute(
            inputs.gross_profit_actual, inputs.gross_profit_target
        )
        overheads = None if inputs.overheads_na else compute(
            inputs.overheads_actual, inputs.overheads_budget, Polarity.LOWER_IS_BETTER
        )

        net_actual, net_target = VarianceNormalizer.derive_net_profit(inputs)
        net_profit = compute(net_actual, net_target)

        productivity_actual = None
        productivity = None
        if not inputs.wages_na and not inputs.gross_profit_na:
            productivity_actual = VarianceNormalizer.productivity_ratio(
                inputs.gross_profit_actual, inputs.total_wages
            )
            if inputs.productivity_benchmark:
                productivity = compute(productivity_actual, inputs.productivity_benchmark)

        variances = FinancialVariances(
            revenue=revenue,
            gross_profit=gross_profit,
            overheads=overheads,
            net_profit=net_profit,
            productivity=productivity,
            productivity_actual=productivity_actual,
        )

        missing = [name for name, value in vars(variances).items() if value is None]
        if missing:
            logger.debug("Variances not computable for: %s", ", ".join(missing))

        return variances

    @staticmethod
    def to_scorecard_inputs(
        inputs: FinancialInputs,
        qualitative: Optional[QualitativeInputs] = None,
    ) -> ScorecardInputs:
        """
        Convert a raw submission into the scoring inputs stored on a scorecard.

        Args:
            inputs: Raw financial inputs
            qualitative: Consultant qualitative choices

        Returns:
            ScorecardInputs ready for the section scorer
        """
        variances = VarianceNormalizer.normalize(inputs)

        return ScorecardInputs(
            revenue_variance=variances.revenue,
            gross_profit_variance=variances.gross_profit,
            overheads_variance=variances.overheads,
            net_profit_variance=variances.net_profit,
            productivity_benchmark=None if inputs.wages_na else inputs.productivity_benchmark,
            productivity_actual=variances.productivity_actual,
            qualitative=qualitative or QualitativeInputs(),
        )
