from __future__ import annotations

from typing import List, Union

from pydantic import Field

from snowball.core.calculator import CalculationMode, calculate_for_mode, performance_stats
from snowball.core.validator import RawParams, split_issues, validate
from snowball.exceptions import ParameterValidationError
from snowball.logging import get_logger
from snowball.schemas.investment import (
    CamelModel,
    InvestmentParams,
    InvestmentResult,
    PerformanceStats,
)
from snowball.schemas.validation import ValidationIssue

logger = get_logger(__name__)


class ProjectionPayload(CamelModel):
    params: InvestmentParams
    mode: CalculationMode
    result: InvestmentResult
    stats: PerformanceStats
    warnings: List[ValidationIssue] = Field(default_factory=list)


def project(
    raw_params: RawParams,
    mode: Union[CalculationMode, str] = CalculationMode.ANNUAL,
) -> ProjectionPayload:
    """Validate raw input and, when nothing blocks it, run the selected model.

    Warnings are passed through on the payload; any error-severity issue
    raises :class:`ParameterValidationError`.
    """
    mode = CalculationMode(mode)
    issues = validate(raw_params)
    errors, warnings = split_issues(issues)
    if errors:
        logger.info(
            "rejected parameters: %s",
            "; ".join(issue.message for issue in errors),
            extra={"fields": sorted({issue.field.value for issue in errors})},
        )
        raise ParameterValidationError(errors)

    params = (
        raw_params
        if isinstance(raw_params, InvestmentParams)
        else InvestmentParams.model_validate(dict(raw_params))
    )
    result = calculate_for_mode(params, mode)

    return ProjectionPayload(
        params=params,
        mode=mode,
        result=result,
        stats=performance_stats(result.yearly_contributions),
        warnings=warnings,
    )
