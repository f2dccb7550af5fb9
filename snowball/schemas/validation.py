"""Pydantic schema for validator output."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class ParamField(str, Enum):
    MONTHLY_AMOUNT = "monthlyAmount"
    ANNUAL_RATE = "annualRate"
    YEARS = "years"


class ValidationIssue(BaseModel):
    """A single problem found in a parameter set.

    ``value`` echoes whatever was supplied, so it may be a string or None
    when the input was not a number at all.
    """

    model_config = ConfigDict(extra="forbid")

    field: ParamField
    message: str
    value: Any = None
    severity: Severity = Severity.ERROR

    @property
    def is_error(self) -> bool:
        return self.severity is Severity.ERROR
