"""Data contracts for contribution-attribution calculations."""

from __future__ import annotations

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


def _per_month(yearly: Any) -> Any:
    # anything float() cannot read is left for field validation to reject
    if isinstance(yearly, bool):
        return yearly
    try:
        return float(yearly) / 12
    except (TypeError, ValueError, OverflowError):
        return yearly


class CamelModel(BaseModel):
    """Base model that serialises with the camelCase keys the charts expect."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )


class InvestmentParams(CamelModel):
    """Inputs for one calculation. Bounds are checked by the validator, not here."""

    model_config = ConfigDict(frozen=True)

    monthly_amount: float = Field(..., description="Amount contributed every month.")
    annual_rate: Optional[float] = Field(
        ...,
        description="Nominal annual growth rate as a decimal (e.g. 0.05 for 5%).",
    )
    years: int = Field(..., description="Number of contribution years, also the horizon.")

    @model_validator(mode="before")
    @classmethod
    def _accept_annual_amount(cls, data: Any) -> Any:
        # annualAmount is a legacy input name; monthlyAmount wins when both are given
        if not isinstance(data, dict):
            return data
        data = dict(data)
        legacy = data.pop("annualAmount", data.pop("annual_amount", None))
        if legacy is not None and "monthlyAmount" not in data and "monthly_amount" not in data:
            data["monthly_amount"] = _per_month(legacy)
        return data

    @property
    def annual_amount(self) -> float:
        return self.monthly_amount * 12


class YearlyContribution(CamelModel):
    """What one contribution year has grown to by the horizon."""

    year: int = Field(..., ge=1)
    monthly_amount: float
    annual_amount: float
    total_contributed: float
    current_value: float
    # same number as current_value, kept for output-shape stability
    contribution: float


class InvestmentResult(CamelModel):
    total_value: float
    total_contributed: float
    total_profit: float
    profit_rate: float
    yearly_contributions: List[YearlyContribution] = Field(default_factory=list)


class PerformanceStats(CamelModel):
    average_annual_return: float = 0.0
    total_return_rate: float = 0.0
    compound_annual_growth_rate: float = 0.0


class StageValue(CamelModel):
    """One contribution year's value at a given elapsed year."""

    year_contributed: int
    value: float
    accumulated: float


class GrowthStage(CamelModel):
    """Portfolio composition after ``year`` elapsed years (stacked-area chart row)."""

    year: int
    stages: List[StageValue] = Field(default_factory=list)

    @property
    def total(self) -> float:
        return self.stages[-1].accumulated if self.stages else 0.0


class ContributionShare(CamelModel):
    year: int
    contribution: float
    share: float
