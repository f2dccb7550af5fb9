"""Pytest configuration and fixtures."""

import pytest

from snowball.schemas.investment import InvestmentParams


@pytest.fixture
def default_params() -> InvestmentParams:
    """The app's default plan: 33,333/month at 5% for 30 years."""
    return InvestmentParams(monthly_amount=33333, annual_rate=0.05, years=30)


@pytest.fixture
def raw_params() -> dict:
    """A valid raw payload in the camelCase shape the UI sends."""
    return {"monthlyAmount": 33333, "annualRate": 0.05, "years": 30}
