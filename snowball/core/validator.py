"""Range and consistency checks for investment parameters.

The validator never raises and never mutates its input; it returns an ordered
list of issues. Only error-severity issues should block a calculation.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, List, Mapping, Optional, Tuple, Union

from snowball.core.numbers import is_valid_number, is_whole
from snowball.logging import get_logger
from snowball.schemas.investment import InvestmentParams
from snowball.schemas.validation import ParamField, Severity, ValidationIssue

logger = get_logger(__name__)


@dataclass(frozen=True)
class Bounds:
    min: float
    max: float
    step: float


# amount bounds apply to the yearly total (monthly amount x 12)
ANNUAL_AMOUNT_BOUNDS = Bounds(min=1_000, max=100_000_000, step=1_000)
ANNUAL_RATE_BOUNDS = Bounds(min=0.0001, max=0.3, step=0.001)
YEARS_BOUNDS = Bounds(min=1, max=50, step=1)

LOW_RATE_WARNING = -0.05
HIGH_RATE_WARNING = 0.15
MAX_TOTAL_INVESTMENT = 100_000_000_000
NEGATIVE_RATE_RISK_YEARS = 10

FIELD_DISPLAY_NAMES = {
    ParamField.MONTHLY_AMOUNT: "Monthly contribution",
    ParamField.ANNUAL_RATE: "Expected annual rate",
    ParamField.YEARS: "Contribution period",
}

RawParams = Union[InvestmentParams, Mapping[str, Any]]

_MISSING = object()


def _issue(field: ParamField, message: str, value: Any, severity: Severity = Severity.ERROR) -> ValidationIssue:
    return ValidationIssue(field=field, message=message, value=value, severity=severity)


def _lookup(raw: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in raw:
            return raw[key]
    return _MISSING


def _extract(params: RawParams) -> Tuple[Any, Any, Any, Any]:
    """Return (supplied amount, annual amount, rate, years) from either input shape."""
    if isinstance(params, InvestmentParams):
        return params.monthly_amount, params.annual_amount, params.annual_rate, params.years

    monthly = _lookup(params, "monthlyAmount", "monthly_amount")
    if monthly is not _MISSING:
        annual = monthly * 12 if is_valid_number(monthly) else monthly
        supplied = monthly
    else:
        # legacy shape: the amount is already a yearly figure
        supplied = _lookup(params, "annualAmount", "annual_amount")
        annual = supplied

    rate = _lookup(params, "annualRate", "annual_rate")
    years = _lookup(params, "years")

    def present(value: Any) -> Any:
        return None if value is _MISSING else value

    return present(supplied), present(annual), present(rate), present(years)


def _total_investment(annual_amount: float, years: float) -> float:
    try:
        return annual_amount * years
    except OverflowError:
        # float times an int past the float range
        if annual_amount == 0 or years == 0:
            return 0.0
        return math.inf if (annual_amount > 0) == (years > 0) else -math.inf


def validate_amount(annual_amount: Any, supplied: Any = None) -> List[ValidationIssue]:
    """Check the yearly contribution implied by the supplied amount."""
    field = ParamField.MONTHLY_AMOUNT
    supplied = annual_amount if supplied is None else supplied
    issues: List[ValidationIssue] = []

    if not is_valid_number(annual_amount):
        issues.append(_issue(field, "Contribution amount must be a finite number", supplied))
        return issues

    if annual_amount < ANNUAL_AMOUNT_BOUNDS.min:
        issues.append(
            _issue(field, f"Yearly contribution must be at least {ANNUAL_AMOUNT_BOUNDS.min:,.0f}", supplied)
        )

    if annual_amount > ANNUAL_AMOUNT_BOUNDS.max:
        issues.append(
            _issue(field, f"Yearly contribution must be at most {ANNUAL_AMOUNT_BOUNDS.max:,.0f}", supplied)
        )

    if annual_amount <= 0:
        issues.append(_issue(field, "Contribution amount must be positive", supplied))

    return issues


def validate_rate(annual_rate: Any) -> List[ValidationIssue]:
    field = ParamField.ANNUAL_RATE
    issues: List[ValidationIssue] = []

    if not is_valid_number(annual_rate):
        issues.append(_issue(field, "Annual rate must be a finite number", annual_rate))
        return issues

    if annual_rate < ANNUAL_RATE_BOUNDS.min:
        issues.append(
            _issue(field, f"Annual rate must be at least {ANNUAL_RATE_BOUNDS.min * 100:.2f}%", annual_rate)
        )

    if annual_rate > ANNUAL_RATE_BOUNDS.max:
        issues.append(
            _issue(field, f"Annual rate must be at most {ANNUAL_RATE_BOUNDS.max * 100:.1f}%", annual_rate)
        )

    if annual_rate < LOW_RATE_WARNING:
        issues.append(
            _issue(
                field,
                "Annual rate is very low; double-check the result",
                annual_rate,
                Severity.WARNING,
            )
        )

    if annual_rate > HIGH_RATE_WARNING:
        issues.append(
            _issue(
                field,
                "Annual rate is very high; consider a more realistic value",
                annual_rate,
                Severity.WARNING,
            )
        )

    return issues


def validate_years(years: Any) -> List[ValidationIssue]:
    field = ParamField.YEARS
    issues: List[ValidationIssue] = []

    if not is_valid_number(years):
        issues.append(_issue(field, "Contribution period must be a finite number", years))
        return issues

    if not is_whole(years):
        issues.append(_issue(field, "Contribution period must be a whole number of years", years))

    if years < YEARS_BOUNDS.min:
        issues.append(_issue(field, f"Contribution period must be at least {YEARS_BOUNDS.min:.0f} year", years))

    if years > YEARS_BOUNDS.max:
        issues.append(_issue(field, f"Contribution period must be at most {YEARS_BOUNDS.max:.0f} years", years))

    if years <= 0:
        issues.append(_issue(field, "Contribution period must be positive", years))

    return issues


def validate_consistency(annual_amount: Any, annual_rate: Any, years: Any) -> List[ValidationIssue]:
    """Cross-field checks; skipped for operands that are not valid numbers."""
    issues: List[ValidationIssue] = []

    if is_valid_number(annual_amount) and is_valid_number(years):
        total_investment = _total_investment(annual_amount, years)
        if total_investment > MAX_TOTAL_INVESTMENT:
            issues.append(
                _issue(
                    ParamField.MONTHLY_AMOUNT,
                    "Total investment is very large; consider a more realistic value",
                    total_investment,
                    Severity.WARNING,
                )
            )

    if is_valid_number(annual_rate) and is_valid_number(years):
        if annual_rate < 0 and years > NEGATIVE_RATE_RISK_YEARS:
            issues.append(
                _issue(
                    ParamField.ANNUAL_RATE,
                    "A negative rate over a long period carries a high risk of losing principal",
                    annual_rate,
                    Severity.WARNING,
                )
            )

    return issues


def validate(params: RawParams) -> List[ValidationIssue]:
    """Classify a parameter set against the declared bounds.

    Accepts an :class:`InvestmentParams` or a raw mapping keyed by
    ``monthlyAmount`` (or the legacy yearly ``annualAmount``), ``annualRate``
    and ``years``; snake_case keys work too.
    """
    supplied, annual_amount, annual_rate, years = _extract(params)

    issues: List[ValidationIssue] = []
    issues.extend(validate_amount(annual_amount, supplied))
    issues.extend(validate_rate(annual_rate))
    issues.extend(validate_years(years))
    issues.extend(validate_consistency(annual_amount, annual_rate, years))

    if issues:
        logger.debug("validation produced %d issue(s): %s", len(issues), [i.message for i in issues])
    return issues


def validate_field(field: Union[ParamField, str], value: Any) -> List[ValidationIssue]:
    """Check a single field in isolation, e.g. while the user is still typing.

    A monthly amount is checked as its yearly total.
    """
    field = ParamField(field)
    if field is ParamField.MONTHLY_AMOUNT:
        annual = value * 12 if is_valid_number(value) else value
        return validate_amount(annual, value)
    if field is ParamField.ANNUAL_RATE:
        return validate_rate(value)
    return validate_years(value)


def has_errors(issues: List[ValidationIssue]) -> bool:
    return any(issue.severity is Severity.ERROR for issue in issues)


def split_issues(issues: List[ValidationIssue]) -> Tuple[List[ValidationIssue], List[ValidationIssue]]:
    """Return (errors, non-errors), each in original order."""
    errors = [issue for issue in issues if issue.severity is Severity.ERROR]
    others = [issue for issue in issues if issue.severity is not Severity.ERROR]
    return errors, others


def field_display_name(field: Union[ParamField, str]) -> Optional[str]:
    try:
        return FIELD_DISPLAY_NAMES[ParamField(field)]
    except ValueError:
        return None
