"""Contribution-attribution calculation engine.

Every year's contributions are treated as one lump that compounds from the end
of its contribution year to the horizon; the final portfolio value is the sum
of those lumps. A second, month-granular model compounds each monthly payment
separately and is kept as its own mode.
"""

from __future__ import annotations

from enum import Enum
from typing import List, Optional, Sequence

from snowball.core.numbers import is_valid_number, real_power
from snowball.exceptions import InvalidHorizonError
from snowball.logging import get_logger
from snowball.schemas.investment import (
    ContributionShare,
    GrowthStage,
    InvestmentParams,
    InvestmentResult,
    PerformanceStats,
    StageValue,
    YearlyContribution,
)

logger = get_logger(__name__)

# used whenever the rate is missing or not finite
DEFAULT_FALLBACK_RATE = 0.01

MONTHS_PER_YEAR = 12


class CalculationMode(str, Enum):
    ANNUAL = "annual"
    MONTHLY = "monthly"


def _normalise_rate(rate: Optional[float]) -> float:
    if is_valid_number(rate):
        try:
            return float(rate)
        except OverflowError:
            pass
    # anything that is not representable as a finite float
    logger.debug("non-finite rate %r replaced with %s", rate, DEFAULT_FALLBACK_RATE)
    return DEFAULT_FALLBACK_RATE


def _check_horizon(years: int) -> None:
    if isinstance(years, bool) or not isinstance(years, int) or years < 1:
        raise InvalidHorizonError(f"years must be an integer >= 1, got {years!r}")


def future_value(present_value: float, rate: Optional[float], periods: float) -> float:
    """Compound ``present_value`` at ``rate`` for ``periods`` periods.

    FV = PV * (1 + r) ** n
    """
    rate = _normalise_rate(rate)
    if periods == 0:
        return present_value

    return present_value * real_power(1 + rate, periods)


def _build_result(
    yearly: List[YearlyContribution],
    total_contributed: float,
) -> InvestmentResult:
    total_value = sum(row.contribution for row in yearly)
    total_profit = total_value - total_contributed
    profit_rate = total_profit / total_contributed if total_contributed > 0 else 0.0

    return InvestmentResult(
        total_value=total_value,
        total_contributed=total_contributed,
        total_profit=total_profit,
        profit_rate=profit_rate,
        yearly_contributions=yearly,
    )


def calculate(params: InvestmentParams) -> InvestmentResult:
    """Split the final value into what each contribution year grew to.

    Year ``y``'s annual amount compounds for ``years - y`` periods, so the
    final year's contribution is counted at face value.
    """
    _check_horizon(params.years)

    monthly_amount = params.monthly_amount
    annual_amount = monthly_amount * MONTHS_PER_YEAR

    yearly: List[YearlyContribution] = []
    for year in range(1, params.years + 1):
        remaining_years = params.years - year
        current_value = future_value(annual_amount, params.annual_rate, remaining_years)
        yearly.append(
            YearlyContribution(
                year=year,
                monthly_amount=monthly_amount,
                annual_amount=annual_amount,
                total_contributed=annual_amount * year,
                current_value=current_value,
                contribution=current_value,
            )
        )

    total_contributed = monthly_amount * MONTHS_PER_YEAR * params.years
    result = _build_result(yearly, total_contributed)
    logger.debug(
        "annual model: %d years, total value %.2f",
        params.years,
        result.total_value,
    )
    return result


def _monthly_payment_value(payment: float, monthly_rate: float, months: int) -> float:
    if monthly_rate == 0:
        return payment
    return payment * real_power(1 + monthly_rate, months)


def calculate_with_monthly_compounding(params: InvestmentParams) -> InvestmentResult:
    """Month-granular variant of :func:`calculate`.

    Each monthly payment compounds at ``annual_rate / 12`` from its own month
    to the horizon, so a year's contributions start growing earlier on average
    than in the annual-lump model.
    """
    _check_horizon(params.years)

    monthly_amount = params.monthly_amount
    monthly_rate = _normalise_rate(params.annual_rate) / MONTHS_PER_YEAR
    total_months = params.years * MONTHS_PER_YEAR

    yearly: List[YearlyContribution] = []
    for year in range(1, params.years + 1):
        year_start_month = (year - 1) * MONTHS_PER_YEAR
        year_end_month = year * MONTHS_PER_YEAR

        year_value = 0.0
        for month in range(year_start_month, year_end_month):
            remaining_months = total_months - month
            year_value += _monthly_payment_value(monthly_amount, monthly_rate, remaining_months)

        yearly.append(
            YearlyContribution(
                year=year,
                monthly_amount=monthly_amount,
                annual_amount=monthly_amount * MONTHS_PER_YEAR,
                total_contributed=monthly_amount * MONTHS_PER_YEAR * year,
                current_value=year_value,
                contribution=year_value,
            )
        )

    result = _build_result(yearly, monthly_amount * total_months)
    logger.debug(
        "monthly model: %d months, total value %.2f",
        total_months,
        result.total_value,
    )
    return result


def calculate_for_mode(params: InvestmentParams, mode: CalculationMode) -> InvestmentResult:
    if CalculationMode(mode) is CalculationMode.MONTHLY:
        return calculate_with_monthly_compounding(params)
    return calculate(params)


def performance_stats(yearly_contributions: Sequence[YearlyContribution]) -> PerformanceStats:
    """Return/growth figures over an already computed contribution sequence."""
    if not yearly_contributions:
        return PerformanceStats()

    total_contributed = sum(row.annual_amount for row in yearly_contributions)
    total_value = sum(row.current_value for row in yearly_contributions)
    years = len(yearly_contributions)

    if total_contributed > 0:
        total_return_rate = (total_value - total_contributed) / total_contributed
        compound_annual_growth_rate = real_power(total_value / total_contributed, 1 / years) - 1
    else:
        total_return_rate = 0.0
        compound_annual_growth_rate = 0.0

    return PerformanceStats(
        average_annual_return=total_return_rate / years,
        total_return_rate=total_return_rate,
        compound_annual_growth_rate=compound_annual_growth_rate,
    )


def growth_stages(params: InvestmentParams) -> List[GrowthStage]:
    """Value of every contribution year at each elapsed year (stacked-area rows)."""
    _check_horizon(params.years)

    annual_amount = params.monthly_amount * MONTHS_PER_YEAR
    rows: List[GrowthStage] = []

    for current_year in range(1, params.years + 1):
        stages: List[StageValue] = []
        accumulated = 0.0
        for year_contributed in range(1, current_year + 1):
            years_grown = current_year - year_contributed
            value = future_value(annual_amount, params.annual_rate, years_grown)
            accumulated += value
            stages.append(
                StageValue(
                    year_contributed=year_contributed,
                    value=value,
                    accumulated=accumulated,
                )
            )
        rows.append(GrowthStage(year=current_year, stages=stages))

    return rows


def contribution_shares(yearly_contributions: Sequence[YearlyContribution]) -> List[ContributionShare]:
    total = sum(row.contribution for row in yearly_contributions)
    return [
        ContributionShare(
            year=row.year,
            contribution=row.contribution,
            share=row.contribution / total if total else 0.0,
        )
        for row in yearly_contributions
    ]


__all__ = [
    "DEFAULT_FALLBACK_RATE",
    "CalculationMode",
    "future_value",
    "calculate",
    "calculate_with_monthly_compounding",
    "calculate_for_mode",
    "performance_stats",
    "growth_stages",
    "contribution_shares",
]
