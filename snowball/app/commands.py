"""Command handlers for the snowball CLI."""

from __future__ import annotations

import argparse
import json
from typing import Any, Dict, List, TextIO

from pydantic import ValidationError

from snowball.config import SnowballConfig
from snowball.core import formatter
from snowball.core.calculator import contribution_shares
from snowball.domain.presets import DEFAULT_INVESTMENT_PARAMS, get_preset, list_presets
from snowball.domain.projection import ProjectionPayload, project
from snowball.exceptions import ParameterValidationError
from snowball.logging import get_logger
from snowball.schemas.validation import ValidationIssue

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_INVALID = 2


def _raw_params(args: argparse.Namespace) -> Dict[str, Any]:
    """Merge preset/default parameters with whatever was given on the command line."""
    base = get_preset(args.preset).params if args.preset else DEFAULT_INVESTMENT_PARAMS
    raw: Dict[str, Any] = base.model_dump(by_alias=True)

    if args.monthly_amount is not None:
        raw["monthlyAmount"] = args.monthly_amount
    if args.annual_rate is not None:
        raw["annualRate"] = args.annual_rate
    if args.rate_percent is not None:
        raw["annualRate"] = formatter.normalize_input(args.rate_percent, "percentage")
    if args.years is not None:
        raw["years"] = args.years
    return raw


def _pydantic_issues(exc: ValidationError) -> List[Dict[str, Any]]:
    return [
        {"field": ".".join(str(part) for part in error["loc"]), "message": error["msg"]}
        for error in exc.errors()
    ]


def _write_issues(issues: List[ValidationIssue], out: TextIO) -> None:
    for issue in issues:
        out.write(f"[{issue.severity.value}] {issue.field.value}: {issue.message} (got {issue.value!r})\n")


def render_table(payload: ProjectionPayload, config: SnowballConfig) -> str:
    display = config.display
    result = payload.result
    shares = contribution_shares(result.yearly_contributions)

    lines = [
        formatter.investment_summary(
            result.total_value,
            result.total_contributed,
            payload.params.years,
        ),
        "",
        f"Total value:        {formatter.currency(result.total_value, display.currency_decimals)}",
        f"Total contributed:  {formatter.currency(result.total_contributed, display.currency_decimals)}",
        f"Total profit:       {formatter.currency(result.total_profit, display.currency_decimals)}",
        f"Profit rate:        {formatter.percentage(result.profit_rate, display.percentage_decimals)}",
        f"Annualised growth:  {formatter.percentage(payload.stats.compound_annual_growth_rate, 2)}",
        "",
        f"{'Year':>6}  {'Contributed':>16}  {'Value at horizon':>18}  {'Share':>7}",
    ]
    for row, share in zip(result.yearly_contributions, shares):
        lines.append(
            f"{row.year:>6}  "
            f"{formatter.currency(row.total_contributed, display.currency_decimals):>16}  "
            f"{formatter.currency(row.current_value, display.currency_decimals):>18}  "
            f"{formatter.percentage(share.share, display.percentage_decimals):>7}"
        )
    return "\n".join(lines) + "\n"


def run_calculation(args: argparse.Namespace, config: SnowballConfig, out: TextIO, err: TextIO) -> int:
    mode = args.mode or config.default_mode
    raw = _raw_params(args)

    try:
        payload = project(raw, mode=mode)
    except ParameterValidationError as exc:
        _write_issues(exc.issues, err)
        return EXIT_INVALID
    except ValidationError as exc:
        err.write(json.dumps({"detail": _pydantic_issues(exc)}) + "\n")
        return EXIT_INVALID

    _write_issues(payload.warnings, err)
    logger.info(
        "calculated %s plan: %d years, total value %.0f",
        payload.mode.value,
        payload.params.years,
        payload.result.total_value,
        extra={
            "mode": payload.mode.value,
            "years": payload.params.years,
            "total_value": payload.result.total_value,
        },
    )

    if args.json:
        out.write(json.dumps(payload.model_dump(mode="json", by_alias=True), indent=2) + "\n")
    else:
        out.write(render_table(payload, config))
    return EXIT_OK


def run_list_presets(out: TextIO) -> int:
    for preset in list_presets():
        params = preset.params
        out.write(
            f"{preset.key:<14} {formatter.currency(params.monthly_amount):>10}/month  "
            f"{formatter.percentage(params.annual_rate or 0.0)}  {params.years:>2} years  "
            f"{preset.description}\n"
        )
    return EXIT_OK
