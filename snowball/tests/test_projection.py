from __future__ import annotations

from math import isclose

import pytest
from pydantic import ValidationError

from snowball.core.calculator import CalculationMode, calculate
from snowball.domain.presets import DEFAULT_INVESTMENT_PARAMS, get_preset, list_presets
from snowball.domain.projection import project
from snowball.exceptions import ParameterValidationError, PresetNotFoundError
from snowball.schemas.investment import InvestmentParams
from snowball.schemas.validation import ParamField, Severity


def test_valid_input_is_calculated(raw_params):
    payload = project(raw_params)

    assert payload.mode is CalculationMode.ANNUAL
    assert payload.warnings == []
    assert payload.params == InvestmentParams(monthly_amount=33333, annual_rate=0.05, years=30)
    assert payload.result == calculate(payload.params)
    assert isclose(payload.stats.total_return_rate, payload.result.profit_rate, rel_tol=1e-12)


def test_monthly_mode_is_selectable(raw_params):
    annual = project(raw_params)
    monthly = project(raw_params, mode="monthly")

    assert monthly.mode is CalculationMode.MONTHLY
    assert monthly.result.total_value > annual.result.total_value


def test_errors_block_the_calculation(raw_params):
    raw_params["years"] = 0

    with pytest.raises(ParameterValidationError) as excinfo:
        project(raw_params)

    issues = excinfo.value.issues
    assert issues and all(issue.severity is Severity.ERROR for issue in issues)
    assert {issue.field for issue in issues} == {ParamField.YEARS}
    assert "at least 1" in str(excinfo.value)


def test_warnings_pass_through(raw_params):
    raw_params["annualRate"] = 0.2
    payload = project(raw_params)

    assert [issue.severity for issue in payload.warnings] == [Severity.WARNING]
    assert payload.result.total_value > 0


def test_accepts_params_model():
    payload = project(DEFAULT_INVESTMENT_PARAMS)
    assert payload.params == DEFAULT_INVESTMENT_PARAMS


def test_legacy_annual_amount_is_converted():
    payload = project({"annualAmount": 120000, "annualRate": 0.05, "years": 10})

    assert payload.params.monthly_amount == 10000
    assert payload.result.total_contributed == 1_200_000


@pytest.mark.parametrize("legacy", [120000, 120000.0, "120000", " 1.2e5 "])
def test_legacy_annual_amount_is_divided_after_coercion(legacy):
    params = InvestmentParams.model_validate({"annualAmount": legacy, "annualRate": 0.05, "years": 10})

    assert params.monthly_amount == 10000


def test_unreadable_legacy_amount_is_rejected():
    with pytest.raises(ValidationError):
        InvestmentParams.model_validate({"annualAmount": "lots", "annualRate": 0.05, "years": 10})


def test_monthly_amount_wins_over_legacy_key():
    params = InvestmentParams.model_validate(
        {"monthlyAmount": 5000, "annualAmount": "120000", "annualRate": 0.05, "years": 10}
    )

    assert params.monthly_amount == 5000


def test_unexpected_keys_are_rejected_by_the_model(raw_params):
    raw_params["currency"] = "USD"

    with pytest.raises(ValidationError):
        project(raw_params)


def test_payload_serialises_camel_case(raw_params):
    raw_params["annualRate"] = 0.2
    dumped = project(raw_params).model_dump(mode="json", by_alias=True)

    assert dumped["mode"] == "annual"
    assert dumped["params"] == {"monthlyAmount": 33333.0, "annualRate": 0.2, "years": 30}
    assert "compoundAnnualGrowthRate" in dumped["stats"]
    assert dumped["warnings"][0]["severity"] == "warning"
    assert dumped["warnings"][0]["field"] == "annualRate"


def test_presets_are_all_valid():
    for preset in list_presets():
        assert project(preset.params).result.total_value > preset.params.monthly_amount


def test_standard_preset_is_the_default():
    assert get_preset("standard").params == DEFAULT_INVESTMENT_PARAMS
    assert get_preset("aggressive").params.years == 35


def test_unknown_preset():
    with pytest.raises(PresetNotFoundError):
        get_preset("yolo")
