"""Custom exception hierarchy for snowball."""

from __future__ import annotations

from typing import TYPE_CHECKING, List

if TYPE_CHECKING:
    from snowball.schemas.validation import ValidationIssue


class SnowballError(Exception):
    """Base exception for all snowball errors."""


class InvalidHorizonError(SnowballError, ValueError):
    """Raised when the engine is handed a horizon that is not a whole number of years >= 1."""


class ParameterValidationError(SnowballError, ValueError):
    """Raised when a parameter set carries error-severity validation issues."""

    def __init__(self, issues: List["ValidationIssue"]):
        super().__init__("; ".join(issue.message for issue in issues))
        self.issues = issues


class PresetNotFoundError(SnowballError, KeyError):
    """Raised when a named scenario preset does not exist."""


class ConfigurationError(SnowballError):
    """Raised when configuration is invalid or missing."""
