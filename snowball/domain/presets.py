"""Default parameters and common scenario presets."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List

from snowball.exceptions import PresetNotFoundError
from snowball.schemas.investment import InvestmentParams

# 33,333/month is roughly 400,000 a year; 5% is a long-run index-fund average
DEFAULT_INVESTMENT_PARAMS = InvestmentParams(monthly_amount=33333, annual_rate=0.05, years=30)


@dataclass(frozen=True)
class Preset:
    key: str
    name: str
    description: str
    params: InvestmentParams


INVESTMENT_PRESETS: Dict[str, Preset] = {
    preset.key: preset
    for preset in [
        Preset(
            key="conservative",
            name="Conservative",
            description="Low risk, low return, steady growth",
            params=InvestmentParams(monthly_amount=20000, annual_rate=0.02, years=25),
        ),
        Preset(
            key="standard",
            name="Standard",
            description="Long-term index investing",
            params=DEFAULT_INVESTMENT_PARAMS,
        ),
        Preset(
            key="aggressive",
            name="Aggressive",
            description="Higher risk for a higher expected return",
            params=InvestmentParams(monthly_amount=50000, annual_rate=0.07, years=35),
        ),
        Preset(
            key="young_starter",
            name="Young starter",
            description="Small amounts over a long horizon, starting in your twenties",
            params=InvestmentParams(monthly_amount=10000, annual_rate=0.06, years=40),
        ),
        Preset(
            key="middle_age",
            name="Middle age",
            description="Accelerated saving from your forties",
            params=InvestmentParams(monthly_amount=80000, annual_rate=0.04, years=15),
        ),
    ]
}


def get_preset(key: str) -> Preset:
    try:
        return INVESTMENT_PRESETS[key]
    except KeyError:
        raise PresetNotFoundError(
            f"unknown preset {key!r}; available: {', '.join(INVESTMENT_PRESETS)}"
        ) from None


def list_presets() -> List[Preset]:
    return list(INVESTMENT_PRESETS.values())
